# unit_tests/test_tool_meal_parser.py
"""
Unit Tests for Meal Parser Tool
===============================
Run with: python -m pytest unit_tests/test_tool_meal_parser.py -v
Or simply: python unit_tests/test_tool_meal_parser.py
"""

import sys
from pathlib import Path

# Add project root and test folder to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(Path(__file__).parent))

from fake_clients import FakeGeminiClient


def test_single_item_fast_path():
    """Short single items never reach the AI."""
    print("\n" + "="*60)
    print("TEST 1: Fast Path")
    print("="*60)

    from tools.meal_parser import parse_meal_description

    client = FakeGeminiClient('["should", "not", "be", "used"]')
    assert parse_meal_description("pizza", client=client) == ["pizza"]
    assert parse_meal_description("  paneer butter masala ", client=client) == ["paneer butter masala"]
    assert client.calls == [], "Fast path must not call the AI"

    print("✅ Fast path passed")


def test_word_count_boundary():
    """Exactly 3 words stay local; 4 words go to the AI."""
    print("\n" + "="*60)
    print("TEST 2: 3 vs 4 Words")
    print("="*60)

    from tools.meal_parser import SINGLE_ITEM_MAX_WORDS, is_single_item, parse_meal_description

    assert SINGLE_ITEM_MAX_WORDS == 3
    assert is_single_item("masala dosa sambar")
    assert not is_single_item("masala dosa sambar chutney")

    client = FakeGeminiClient('["masala dosa", "sambar", "chutney"]')
    result = parse_meal_description("masala dosa sambar chutney", client=client)
    assert result == ["masala dosa", "sambar", "chutney"]
    assert len(client.calls) == 1

    print("✅ Boundary passed")


def test_conjunctions_force_ai():
    print("\n" + "="*60)
    print("TEST 3: Conjunction Markers")
    print("="*60)

    from tools.meal_parser import has_conjunction

    for text in ["pizza and coke", "dal, rice", "chai with sugar", "bread & butter", "rice+dal"]:
        assert has_conjunction(text), f"'{text}' has a conjunction"
    for text in ["sandwich", "band aid cake", "withered greens"]:
        assert not has_conjunction(text), f"'{text}' has no conjunction"

    print("✅ Conjunctions passed")


def test_ai_answer_is_cleaned():
    from tools.meal_parser import parse_meal_description

    client = FakeGeminiClient('Sure! Items: [" roti ", "dal", ""] hope this helps')
    assert parse_meal_description("2 roti and dal", client=client) == ["roti", "dal"]

    prompt = client.calls[0]["contents"][0]
    assert '"2 roti and dal"' in prompt


def test_fallback_on_failure():
    """pizza and coke with a failing AI -> ["pizza", "coke"]."""
    print("\n" + "="*60)
    print("TEST 5: Keyword Fallback")
    print("="*60)

    from tools.meal_parser import parse_meal_description

    failing = FakeGeminiClient(error=ConnectionError("network down"))
    assert parse_meal_description("pizza and coke", client=failing) == ["pizza", "coke"]
    assert parse_meal_description("a cola with 3 chapatis", client=failing) == ["coke", "roti"]
    assert parse_meal_description("idli and sambar", client=failing) == [], "Nothing recognizable"

    # malformed answers take the same path
    for answer in ["no json here", '{"items": "pizza"}', "[1, 2]"]:
        assert parse_meal_description("pizza and coke", client=FakeGeminiClient(answer)) == ["pizza", "coke"]

    print("✅ Fallback passed")


def test_empty_input():
    from tools.meal_parser import parse_meal_description

    client = FakeGeminiClient()
    assert parse_meal_description("", client=client) == []
    assert parse_meal_description("   ", client=client) == []
    assert parse_meal_description(None, client=client) == []
    assert client.calls == []


def test_structured_fast_path_keeps_typed_amounts():
    """A leading count or size on a short item is kept without an AI call."""
    print("\n" + "="*60)
    print("TEST 7: Structured Fast Path")
    print("="*60)

    from tools.meal_parser import parse_meal_items
    from tools.nutrition_models import UnitKind

    client = FakeGeminiClient('{"items": []}')

    [roti] = parse_meal_items("2 roti", client=client)
    assert (roti.name, roti.quantity, roti.unit, roti.size) == ("roti", 2.0, None, None)

    [pizza] = parse_meal_items("Large pizza", client=client)
    assert (pizza.name, pizza.unit, pizza.size) == ("pizza", UnitKind.SIZE, "large")

    [plain] = parse_meal_items("paneer tikka", client=client)
    assert (plain.name, plain.quantity, plain.unit, plain.size) == ("paneer tikka", None, None, None)

    assert client.calls == []

    print("✅ Structured fast path passed")


def test_structured_ai_answer_is_validated():
    """Bad units and quantities are dropped; a size item always has a size."""
    print("\n" + "="*60)
    print("TEST 8: Structured AI Answer")
    print("="*60)

    from tools.meal_parser import parse_meal_items
    from tools.nutrition_models import UnitKind

    answer = (
        'Here you go: {"items": ['
        '{"name": " roti ", "quantity": 4, "unit": "quantity"}, '
        '{"name": "pizza", "quantity": 1, "unit": "size"}, '
        '{"name": "dal", "quantity": true, "unit": "bowl"}, '
        '{"name": "lassi", "quantity": -1, "unit": "glasses", "size": "huge"}, '
        '{"name": "", "quantity": 1}]}'
    )
    client = FakeGeminiClient(answer)
    items = parse_meal_items("4 roti, pizza, dal and lassi", client=client)

    assert [item.name for item in items] == ["roti", "pizza", "dal", "lassi"]
    roti, pizza, dal, lassi = items
    assert (roti.quantity, roti.unit) == (4, UnitKind.QUANTITY)
    assert (pizza.unit, pizza.size) == (UnitKind.SIZE, "medium")
    assert (dal.quantity, dal.unit) == (None, None)
    assert (lassi.quantity, lassi.unit, lassi.size) == (None, UnitKind.GLASS, None)
    assert '"4 roti, pizza, dal and lassi"' in client.calls[0]["contents"][0]

    print("✅ Structured AI answer passed")


def test_structured_fallback_on_failure():
    """4 roti and 1 large pizza offline -> roti x4, pizza (large)."""
    print("\n" + "="*60)
    print("TEST 9: Structured Keyword Fallback")
    print("="*60)

    from tools.meal_parser import parse_meal_items
    from tools.nutrition_models import UnitKind

    failing = FakeGeminiClient(error=ConnectionError("network down"))
    roti, pizza = parse_meal_items("4 roti and 1 large pizza", client=failing)
    assert (roti.name, roti.quantity, roti.unit) == ("roti", 4, UnitKind.QUANTITY)
    assert (pizza.name, pizza.quantity, pizza.unit, pizza.size) == ("pizza", 1, UnitKind.SIZE, "large")

    coke, chai = parse_meal_items("a cola and 2 cups of tea", client=failing)
    assert (coke.name, coke.quantity, coke.unit) == ("coke", None, None)
    assert (chai.name, chai.quantity, chai.unit) == ("chai", 2, UnitKind.GLASS)

    [whole] = parse_meal_items("idli and sambar", client=failing)
    assert (whole.name, whole.quantity, whole.unit) == ("idli and sambar", 1, UnitKind.GRAMS)

    # malformed answers take the same path
    for answer in ["no json here", '{"items": "pizza"}', '{"items": ["pizza"]}']:
        [pizza] = parse_meal_items("pizza and some water", client=FakeGeminiClient(answer))
        assert (pizza.name, pizza.size) == ("pizza", "medium")

    assert parse_meal_items("  ", client=failing) == []
    assert parse_meal_items(None, client=failing) == []

    print("✅ Structured fallback passed")


def run_all_tests():
    print("\n" + "🍕"*30)
    print("   MEAL PARSER TOOL - UNIT TESTS")
    print("🍕"*30)

    tests = [
        ("Fast Path", test_single_item_fast_path),
        ("Boundary", test_word_count_boundary),
        ("Conjunctions", test_conjunctions_force_ai),
        ("AI Cleanup", test_ai_answer_is_cleaned),
        ("Fallback", test_fallback_on_failure),
        ("Empty Input", test_empty_input),
        ("Structured Fast Path", test_structured_fast_path_keeps_typed_amounts),
        ("Structured AI", test_structured_ai_answer_is_validated),
        ("Structured Fallback", test_structured_fallback_on_failure),
    ]

    results = []
    for name, test_func in tests:
        try:
            test_func()
            results.append((name, True))
        except Exception as e:
            print(f"\n❌ TEST CRASHED: {name}: {e}")
            results.append((name, False))

    passed = sum(1 for _, p in results if p)
    print(f"\nTotal: {passed}/{len(results)} tests passed")
    return passed == len(results)


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
