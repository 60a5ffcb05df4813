# unit_tests/test_tool_nutrition_estimator.py
"""
Unit Tests for Nutrition Estimation Client
==========================================
Gemini is replaced by FakeGeminiClient; no network access.

Run with: python -m pytest unit_tests/test_tool_nutrition_estimator.py -v
Or simply: python unit_tests/test_tool_nutrition_estimator.py
"""

import sys
from pathlib import Path

# Add project root and test folder to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(Path(__file__).parent))

from fake_clients import FakeGeminiClient, gemini_response, nutrition_answer


def test_fetch_parses_embedded_json():
    """JSON object wrapped in prose and code fences is extracted."""
    print("\n" + "="*60)
    print("TEST 1: Fetch Estimate")
    print("="*60)

    from tools.nutrition_estimator import fetch_nutrition_estimate

    client = FakeGeminiClient(nutrition_answer(calories=240, protein=7, carbs=32, fat=9, fiber=4, sugar=2, confidence=0.9))
    result = fetch_nutrition_estimate("samosa", 2, "quantity", client=client)
    print(f"   {result}")

    assert result.calories == 240
    assert result.protein == 7
    assert result.sugar == 2
    assert result.confidence == 0.9
    assert len(client.calls) == 1, "Exactly one request"

    prompt = client.calls[0]["contents"][0]
    assert "2 pieces of" in prompt and '"samosa"' in prompt

    print("✅ Fetch passed")


def test_fetch_rejects_bad_content():
    """Missing fields, numeric strings, booleans and out-of-range values fail."""
    print("\n" + "="*60)
    print("TEST 2: Content Validation")
    print("="*60)

    from tools.gemini_client import AIResponseError
    from tools.nutrition_estimator import fetch_nutrition_estimate

    bad_answers = [
        "I think it is about 250 calories.",
        '{"nutrition": {"calories": 250, "protein": 8, "carbs": 30, "fat": 10}, "confidence": 0.8}',
        nutrition_answer(calories="250"),
        nutrition_answer(protein=True),
        nutrition_answer(fat=-2),
        nutrition_answer(confidence=1.5),
        '{"calories": 250, "protein": 8, "carbs": 30, "fat": 10, "fiber": 2, "confidence": 0.8}',
        '{"nutrition": {"calories": 250,',
        None,
    ]
    for answer in bad_answers:
        client = FakeGeminiClient([answer])
        try:
            fetch_nutrition_estimate("dal", 150, "grams", client=client)
        except AIResponseError as e:
            print(f"   rejected: {str(e)[:70]}")
        else:
            raise AssertionError(f"Answer should be rejected: {answer!r}")

    # sugar is optional
    ok = fetch_nutrition_estimate("dal", 150, "grams", client=FakeGeminiClient(nutrition_answer(sugar=None)))
    assert ok.sugar is None

    print("✅ Validation passed")


def test_fetch_rejects_missing_candidates():
    from types import SimpleNamespace
    from tools.gemini_client import AIResponseError
    from tools.nutrition_estimator import fetch_nutrition_estimate

    for response in [SimpleNamespace(candidates=[]), SimpleNamespace(candidates=[SimpleNamespace(content=None)])]:
        try:
            fetch_nutrition_estimate("dal", 150, "grams", client=FakeGeminiClient([response]))
        except AIResponseError:
            continue
        raise AssertionError("Missing candidates/content should raise AIResponseError")


def test_fetch_transport_error():
    from tools.gemini_client import AIServiceError
    from tools.nutrition_estimator import fetch_nutrition_estimate

    client = FakeGeminiClient(error=ConnectionError("network down"))
    try:
        fetch_nutrition_estimate("dal", 150, "grams", client=client)
    except AIServiceError as e:
        assert "network down" in str(e)
        return
    raise AssertionError("Transport failure should raise AIServiceError")


def test_estimate_falls_back_without_retry():
    """roti x2 under AI failure -> fallback 160 kcal, one request only."""
    print("\n" + "="*60)
    print("TEST 5: Estimate Fallback")
    print("="*60)

    from tools.nutrition_estimator import estimate_nutrition

    client = FakeGeminiClient(error=ConnectionError("network down"))
    result = estimate_nutrition("roti", 2, "quantity", client=client)

    assert result.calories == 160
    assert result.confidence == 0.3
    assert len(client.calls) == 1, "No retry at this call site"

    print("✅ Fallback passed")


def test_refresh_retries_once():
    """First attempt fails, retry succeeds after the configured delay."""
    print("\n" + "="*60)
    print("TEST 6: Refresh Retry")
    print("="*60)

    from tools.nutrition_estimator import refresh_nutrition_estimate

    sleeps = []
    client = FakeGeminiClient([ConnectionError("timeout"), nutrition_answer(calories=310, confidence=0.7)])
    result = refresh_nutrition_estimate("chai", 2, "glass", client=client, sleep=sleeps.append)

    assert result.calories == 310
    assert len(client.calls) == 2
    assert sleeps == [2.0], f"Expected one 2 s pause, got {sleeps}"

    print("✅ Retry passed")


def test_refresh_gives_up_after_one_retry():
    from tools.nutrition_estimator import refresh_nutrition_estimate

    sleeps = []
    client = FakeGeminiClient(error=ConnectionError("network down"))
    result = refresh_nutrition_estimate("chai", 2, "glass", client=client, retry_delay=0.5, sleep=sleeps.append)

    assert len(client.calls) == 2, "One attempt plus one retry"
    assert sleeps == [0.5]
    assert result.calories == 300 and result.confidence == 0.3


def test_ai_and_fallback_share_shape():
    from tools.fallback_estimator import fallback_estimate
    from tools.nutrition_estimator import fetch_nutrition_estimate

    ai = fetch_nutrition_estimate("poha", 200, "grams", client=FakeGeminiClient(nutrition_answer()))
    fallback = fallback_estimate("poha", 200, "grams")

    assert type(ai) is type(fallback)
    assert set(ai.model_dump()) == set(fallback.model_dump())
    for estimate in (ai, fallback):
        assert 0 <= estimate.confidence <= 1


def test_response_text_helper():
    from tools.gemini_client import extract_response_text

    assert extract_response_text(gemini_response("hello")) == "hello"


def test_unknown_unit_is_estimated_as_grams():
    """An unrecognized unit never raises at the fallback call sites."""
    print("\n" + "="*60)
    print("TEST 7: Unknown Unit")
    print("="*60)

    from tools.nutrition_estimator import estimate_nutrition, fetch_nutrition_estimate, refresh_nutrition_estimate

    offline = FakeGeminiClient(error=ConnectionError("network down"))
    result = estimate_nutrition("rice", 100, "bowl", client=offline)
    assert result.calories == 200 and result.confidence == 0.3

    client = FakeGeminiClient(nutrition_answer(calories=130))
    result = estimate_nutrition("rice", 100, "bowl", client=client)
    assert result.calories == 130
    assert '100 grams of "rice"' in client.calls[0]["contents"][0]

    sleeps = []
    result = refresh_nutrition_estimate("rice", 100, "bowl", client=offline, sleep=sleeps.append)
    assert result.calories == 200 and sleeps == [2.0]

    try:
        fetch_nutrition_estimate("rice", 100, "bowl", client=client)
    except ValueError:
        pass
    else:
        raise AssertionError("fetch_nutrition_estimate should reject an unknown unit")

    print("✅ Unknown unit passed")


def run_all_tests():
    print("\n" + "🤖"*30)
    print("   NUTRITION ESTIMATOR - UNIT TESTS")
    print("🤖"*30)

    tests = [
        ("Fetch", test_fetch_parses_embedded_json),
        ("Content Validation", test_fetch_rejects_bad_content),
        ("Missing Candidates", test_fetch_rejects_missing_candidates),
        ("Transport Error", test_fetch_transport_error),
        ("Estimate Fallback", test_estimate_falls_back_without_retry),
        ("Refresh Retry", test_refresh_retries_once),
        ("Refresh Gives Up", test_refresh_gives_up_after_one_retry),
        ("Shared Shape", test_ai_and_fallback_share_shape),
        ("Response Text", test_response_text_helper),
        ("Unknown Unit", test_unknown_unit_is_estimated_as_grams),
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
