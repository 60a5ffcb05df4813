# unit_tests/test_tool_unit_classifier.py
"""
Unit Tests for Unit Classifier Tool
===================================
Run with: python -m pytest unit_tests/test_tool_unit_classifier.py -v
Or simply: python unit_tests/test_tool_unit_classifier.py
"""

import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def test_liquids_use_ml():
    """Liquids default to ml in the standard variant, listed first."""
    print("\n" + "="*60)
    print("TEST 1: Liquids -> ml")
    print("="*60)

    from tools.unit_classifier import classify

    for food in ["masala chai", "green tea", "orange juice", "cold coffee", "milk", "coke", "mango lassi"]:
        result = classify(food)
        print(f"   '{food}' -> {result.unit.value} {result.options}")
        assert result.unit.value == "ml", f"{food} should be ml"
        assert result.options[0] == "ml", f"{food}: ml should be listed first"
        assert result.prompt == "Volume (ml)"
        assert "glass" not in result.options, "Standard variant never offers glass"

    print("✅ Liquids passed")


def test_liquids_use_glass_in_weight_variant():
    """The weight-editing flow measures liquids in glasses."""
    print("\n" + "="*60)
    print("TEST 2: Liquids -> glass (weight variant)")
    print("="*60)

    from tools.unit_classifier import classify

    for food in ["chai", "buttermilk", "beer"]:
        result = classify(food, variant="weight")
        assert result.unit.value == "glass", f"{food} should be glass"
        assert result.options[0] == "glass"
        assert result.prompt == "Glasses"

    # glass is offered for every category in this variant
    for food in ["roti", "bread", "sugar", "dal makhani"]:
        assert "glass" in classify(food, variant="weight").options, f"{food} should offer glass"

    print("✅ Weight variant passed")


def test_pizza_uses_size():
    """Pizza is measured by size with exactly four options."""
    print("\n" + "="*60)
    print("TEST 3: Pizza -> size")
    print("="*60)

    from tools.unit_classifier import classify

    for food in ["pizza", "Cheese Burst PIZZA", "paneer tikka pizza"]:
        for variant in ["standard", "weight"]:
            result = classify(food, variant)
            assert result.unit.value == "size"
            assert result.options == ["small", "medium", "regular", "large"], result.options
            assert result.prompt == "Size"

    print("✅ Pizza passed")


def test_counted_sliced_and_condiments():
    """Counted items, sliceable foods and condiments."""
    print("\n" + "="*60)
    print("TEST 4: Quantity / Slices / Teaspoon")
    print("="*60)

    from tools.unit_classifier import classify

    cases = [
        ("roti", "quantity"),
        ("aloo samosa", "quantity"),
        ("boiled egg", "quantity"),
        ("gulab jamun", "quantity"),
        ("cheese", "slices"),
        ("brown bread", "slices"),
        ("chocolate cake", "slices"),
        ("sugar", "teaspoon"),
        ("tomato ketchup", "teaspoon"),
        ("desi ghee", "teaspoon"),
    ]
    for food, expected in cases:
        result = classify(food)
        print(f"   '{food}' -> {result.unit.value}")
        assert result.unit.value == expected, f"{food}: expected {expected}, got {result.unit.value}"
        assert result.options[0] == expected

    print("✅ Categories passed")


def test_ice_cream_subrules():
    """Ice cream: scoops by default, pieces for cones/bars, ml for tubs."""
    print("\n" + "="*60)
    print("TEST 5: Ice Cream Sub-rules")
    print("="*60)

    from tools.unit_classifier import classify

    scoop = classify("vanilla ice cream")
    assert (scoop.unit.value, scoop.prompt) == ("quantity", "Scoops")

    cone = classify("ice cream cone")
    assert (cone.unit.value, cone.prompt) == ("quantity", "Pieces")

    tub = classify("ice cream tub")
    assert (tub.unit.value, tub.prompt) == ("ml", "Volume (ml)")

    # no ice-cream branch in the weight variant
    assert classify("vanilla ice cream", variant="weight").unit.value == "grams"

    print("✅ Ice cream passed")


def test_default_grams():
    """Anything unmatched, including butter, falls through to grams."""
    print("\n" + "="*60)
    print("TEST 6: Default -> grams")
    print("="*60)

    from tools.unit_classifier import classify

    for food in ["butter", "dal makhani", "paneer", "", "steak", "boiled potato"]:
        result = classify(food)
        assert result.unit.value == "grams", f"'{food}' should default to grams, got {result.unit.value}"
        assert result.prompt == "Weight (grams)"
        assert result.options[0] == "grams"

    print("✅ Default passed")


def test_precedence_first_match_wins():
    """Liquids are checked before counted items and condiments."""
    print("\n" + "="*60)
    print("TEST 7: Precedence")
    print("="*60)

    from tools.unit_classifier import classify

    assert classify("banana shake").unit.value == "ml", "liquid beats counted"
    assert classify("cheese pizza").unit.value == "size", "pizza beats sliceable"
    assert classify("honey toast").unit.value == "slices", "sliceable beats condiment"

    print("✅ Precedence passed")


def test_unknown_variant():
    print("\n" + "="*60)
    print("TEST 8: Unknown Variant")
    print("="*60)

    from tools.unit_classifier import classify

    try:
        classify("tea", variant="metric")
    except ValueError as e:
        print(f"   Raised: {e}")
    else:
        raise AssertionError("Unknown variant should raise ValueError")

    print("✅ Unknown variant passed")


def test_weight_variant_measures_butter_and_masala():
    """The weight flow edits butter and masala in teaspoons; the standard flow weighs butter."""
    print("\n" + "="*60)
    print("TEST 9: Weight Variant Condiments")
    print("="*60)

    from tools.unit_classifier import classify

    for food in ["butter", "garlic butter", "chicken masala", "garam masala"]:
        result = classify(food, variant="weight")
        print(f"   '{food}' -> {result.unit.value}")
        assert result.unit.value == "teaspoon", f"{food}: expected teaspoon, got {result.unit.value}"
        assert result.prompt == "Teaspoons"
        assert result.options[0] == "teaspoon"

    assert classify("butter").unit.value == "grams"
    assert classify("chicken masala").unit.value == "grams"
    # liquids are still checked first
    assert classify("buttermilk", variant="weight").unit.value == "glass"
    assert classify("butter naan", variant="weight").unit.value == "quantity"

    print("✅ Weight variant condiments passed")


def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "⚖️"*30)
    print("   UNIT CLASSIFIER TOOL - UNIT TESTS")
    print("⚖️"*30)

    tests = [
        ("Liquids", test_liquids_use_ml),
        ("Weight Variant", test_liquids_use_glass_in_weight_variant),
        ("Pizza", test_pizza_uses_size),
        ("Categories", test_counted_sliced_and_condiments),
        ("Ice Cream", test_ice_cream_subrules),
        ("Default", test_default_grams),
        ("Precedence", test_precedence_first_match_wins),
        ("Unknown Variant", test_unknown_variant),
        ("Weight Condiments", test_weight_variant_measures_butter_and_masala),
    ]

    results = []
    for name, test_func in tests:
        try:
            test_func()
            results.append((name, True))
        except Exception as e:
            print(f"\n❌ TEST CRASHED: {name}")
            print(f"   Error: {e}")
            import traceback
            traceback.print_exc()
            results.append((name, False))

    print("\n" + "="*60)
    print("SUMMARY")
    print("="*60)

    passed = sum(1 for _, p in results if p)
    total = len(results)
    for name, p in results:
        print(f"   {'✅ PASS' if p else '❌ FAIL'}: {name}")
    print(f"\nTotal: {passed}/{total} tests passed")

    return passed == total


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
