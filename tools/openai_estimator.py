# tools/openai_estimator.py
"""
CalorieBuddy AI — Quick Estimate Tool (OpenAI)
==============================================
One-shot parse + estimate of a whole meal description through OpenAI chat
completions. The model sees Indian portion guidelines and five worked
examples and must answer with strict JSON.

Confidence is scored locally from the wording of the input and the
completeness of the answer. Any failure falls back to a keyword estimate.
"""

import json
import os
import re
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from openai import OpenAI
from pydantic import BaseModel, Field, ValidationError

from tools.gemini_client import AIResponseError, AIServiceError
from tools.nutrition_models import QuickEstimate, QuickEstimateItem

# =============================================================================
# CONFIGURATION
# =============================================================================
load_dotenv()

OPENAI_CONFIG = {
    "model": os.getenv("OPENAI_MODEL", "gpt-4o"),
    "max_tokens": 800,
    "temperature": 0.2,
}

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_AVAILABLE = False
CLIENT = None

if OPENAI_API_KEY:
    CLIENT = OpenAI(api_key=OPENAI_API_KEY)
    OPENAI_AVAILABLE = True
    print("✅ Quick Estimator: OpenAI ready")
else:
    print("⚠️ Quick Estimator: OPENAI_API_KEY not set, using keyword fallback")

FALLBACK_CONFIDENCE = 0.3

SYSTEM_PROMPT = """You are a calorie estimation assistant for a health and fitness app. The user will describe what they ate using casual language like "1 cup tea with sugar" or "2 slices of pizza with Coke".

Your job is to:
1. Parse the input into structured food items with name, quantity, and unit.
2. Normalize vague inputs like "some sugar", "1 bowl", or "a plate" using common Indian food portions.
3. Estimate the calorie content for each item along with protein, carbs, fat, and fiber.
4. Return the result in strict JSON format like this:

{
  "items": [
    {
      "name": "<food>",
      "quantity": <number>,
      "unit": "<unit>",
      "estimated_calories": <number>,
      "protein": <number>,
      "carbs": <number>,
      "fat": <number>,
      "fiber": <number>
    }
  ],
  "total_calories": <number>
}

Portion size guidelines:
- "1 cup" = 240ml for liquids, 150-200g for solids
- "1 bowl" = 250ml for dal/curry, 150g for rice
- "1 plate" = 200-250g serving
- "some" or "little" = 1 teaspoon for condiments, 1 tablespoon for sides
- "a glass" = 200ml for Indian portions

For Indian foods, use traditional recipes and authentic portion sizes. If an input is unclear, assume a safe average. Do not add explanations, only return the JSON."""


def _item(name, quantity, unit, calories, protein, carbs, fat, fiber) -> Dict[str, Any]:
    return {
        "name": name,
        "quantity": quantity,
        "unit": unit,
        "estimated_calories": calories,
        "protein": protein,
        "carbs": carbs,
        "fat": fat,
        "fiber": fiber,
    }


# (user text, answer) pairs shown before the real request
FEW_SHOT_EXAMPLES = [
    ("1 cup chai with 1 teaspoon sugar", {
        "items": [
            _item("chai", 1, "cup", 72, 3, 10, 3, 0),
            _item("sugar", 1, "teaspoon", 16, 0, 4, 0, 0),
        ],
        "total_calories": 88,
    }),
    ("cheese burst pizza with 1 coke", {
        "items": [
            _item("cheese burst pizza", 2, "slice", 600, 24, 60, 28, 3),
            _item("coke", 1, "can", 139, 0, 39, 0, 0),
        ],
        "total_calories": 739,
    }),
    ("1 plate dal chawal with curd and some sugar", {
        "items": [
            _item("dal", 1, "cup", 180, 12, 30, 1, 8),
            _item("rice", 1, "cup", 200, 4, 45, 0, 1),
            _item("curd", 0.5, "cup", 60, 6, 8, 2, 0),
            _item("sugar", 1, "teaspoon", 16, 0, 4, 0, 0),
        ],
        "total_calories": 456,
    }),
    ("2 samosas with green chutney and a cup of chai", {
        "items": [
            _item("samosa", 2, "piece", 260, 6, 30, 12, 3),
            _item("green chutney", 2, "tablespoon", 20, 1, 3, 1, 1),
            _item("chai", 1, "cup", 90, 4, 12, 4, 0),
        ],
        "total_calories": 370,
    }),
    ("had maggi and some ketchup", {
        "items": [
            _item("maggi noodles", 1, "pack", 350, 8, 50, 14, 2),
            _item("ketchup", 1, "tablespoon", 20, 0, 5, 0, 0),
        ],
        "total_calories": 370,
    }),
]


# =============================================================================
# VALIDATION SCHEMA
# =============================================================================
class OpenAIQuickAnswer(BaseModel):
    """What the model must return; confidence is added locally."""
    items: List[QuickEstimateItem]
    total_calories: float = Field(..., ge=0)


def build_messages(text: str) -> List[Dict[str, str]]:
    messages = [{"role": "system", "content": SYSTEM_PROMPT}]
    for user_text, answer in FEW_SHOT_EXAMPLES:
        messages.append({"role": "user", "content": user_text})
        messages.append({"role": "assistant", "content": json.dumps(answer)})
    messages.append({"role": "user", "content": text})
    return messages


# =============================================================================
# CONFIDENCE
# =============================================================================
UNIT_WORDS = re.compile(r"(cup|glass|plate|bowl|piece|slice)")
VAGUE_WORDS = re.compile(r"(some|little|bit|few)")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def score_confidence(text: str, raw_items: List[Dict[str, Any]]) -> float:
    """
    Heuristic confidence for an AI answer, clamped to [0.3, 1.0].

    Base 0.8; +0.1 if the input has a number, +0.05 for a common unit word,
    -0.1 for a vague word, +0.05 when every item carries protein/carbs/fat.
    """
    lowered = text.lower()
    confidence = 0.8

    if re.search(r"\d", text):
        confidence += 0.1
    if UNIT_WORDS.search(lowered):
        confidence += 0.05
    if VAGUE_WORDS.search(lowered):
        confidence -= 0.1
    if raw_items and all(
        isinstance(item, dict) and all(_is_number(item.get(k)) for k in ("protein", "carbs", "fat"))
        for item in raw_items
    ):
        confidence += 0.05

    return round(min(max(confidence, FALLBACK_CONFIDENCE), 1.0), 2)


# =============================================================================
# FALLBACK
# =============================================================================
def fallback_quick_estimate(text: str) -> QuickEstimate:
    """Keyword estimate: roti/chapati, rice/chawal, dal/lentil, chai/tea."""
    words = set(re.split(r"[\s,]+", text.lower()))
    number = re.search(r"(\d+)", text)
    qty = int(number.group(1)) if number else 1

    items = []
    if words & {"roti", "chapati"}:
        items.append(QuickEstimateItem(**_item("roti", qty, "piece", qty * 80, qty * 3, qty * 15, qty * 1, qty * 2)))
    if words & {"rice", "chawal"}:
        items.append(QuickEstimateItem(**_item("rice", 1, "cup", 200, 4, 45, 0, 1)))
    if words & {"dal", "lentil"}:
        items.append(QuickEstimateItem(**_item("dal", 1, "cup", 180, 12, 30, 1, 8)))
    if words & {"chai", "tea"}:
        items.append(QuickEstimateItem(**_item("chai", qty, "cup", qty * 90, qty * 4, qty * 12, qty * 4, 0)))

    if not items:
        items.append(QuickEstimateItem(**_item(text.strip() or "unknown food", 1, "serving", 150, 5, 20, 5, 2)))

    return QuickEstimate(
        items=items,
        total_calories=sum(item.estimated_calories for item in items),
        confidence=FALLBACK_CONFIDENCE,
    )


# =============================================================================
# MAIN TOOL: quick_estimate
# =============================================================================
def request_quick_estimate(text: str, client: Any = None) -> QuickEstimate:
    """
    One chat-completion request. Raises AIServiceError / AIResponseError.
    """
    openai_client = client if client is not None else CLIENT
    if openai_client is None:
        raise AIServiceError("OpenAI client not configured (OPENAI_API_KEY missing)")

    try:
        response = openai_client.chat.completions.create(
            model=OPENAI_CONFIG["model"],
            messages=build_messages(text),
            max_tokens=OPENAI_CONFIG["max_tokens"],
            temperature=OPENAI_CONFIG["temperature"],
            response_format={"type": "json_object"},
        )
    except Exception as e:
        raise AIServiceError(f"OpenAI request failed: {e}") from e

    choices = getattr(response, "choices", None)
    message = getattr(choices[0], "message", None) if choices else None
    content = getattr(message, "content", None) if message is not None else None
    if not isinstance(content, str):
        raise AIResponseError("Invalid response structure from OpenAI")

    try:
        raw = json.loads(content)
    except json.JSONDecodeError as e:
        raise AIResponseError(f"OpenAI answer is not valid JSON: {e}") from e
    if not isinstance(raw, dict) or not isinstance(raw.get("items"), list) or not _is_number(raw.get("total_calories")):
        raise AIResponseError("Invalid response format from OpenAI")

    try:
        answer = OpenAIQuickAnswer.model_validate(raw)
    except ValidationError as e:
        raise AIResponseError(f"OpenAI answer failed validation: {e}") from e

    return QuickEstimate(
        items=answer.items,
        total_calories=answer.total_calories,
        confidence=score_confidence(text, raw["items"]),
    )


def quick_estimate(text: Optional[str], client: Any = None) -> QuickEstimate:
    """
    Parse and estimate a whole meal description in one call.

    Args:
        text: e.g. "2 samosas with green chutney and a cup of chai"
        client: optional OpenAI client (tests pass a fake)

    Returns:
        QuickEstimate with per-item calories/macros, total and confidence.
        Never raises; failures return the keyword estimate at confidence 0.3.
    """
    text = (text or "").strip()
    try:
        return request_quick_estimate(text, client=client)
    except AIServiceError as e:
        print(f"⚠️ Quick Estimator: {e}. Using fallback...")
        return fallback_quick_estimate(text)


__all__ = [
    "OPENAI_CONFIG",
    "OPENAI_AVAILABLE",
    "SYSTEM_PROMPT",
    "FEW_SHOT_EXAMPLES",
    "build_messages",
    "score_confidence",
    "fallback_quick_estimate",
    "request_quick_estimate",
    "quick_estimate",
]
