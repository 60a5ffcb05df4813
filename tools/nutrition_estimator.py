# tools/nutrition_estimator.py
"""
CalorieBuddy AI — Nutrition Estimation Client
=============================================
Sends the unit-specific prompt to Gemini and turns the free-text answer into
a NutritionEstimate.

Three entry points:
- fetch_nutrition_estimate:   one request, raises on any failure
- estimate_nutrition:         no retry, falls back immediately
- refresh_nutrition_estimate: weight/unit edit refresh, one retry then fallback

Every field of the AI answer is checked for presence and numeric type before
it is trusted; anything else counts as a failed request.
"""

import time
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from tools.fallback_estimator import fallback_estimate, resolve_unit
from tools.gemini_client import (
    GEMINI_CONFIG,
    AIResponseError,
    AIServiceError,
    extract_json_object,
    generate_text,
)
from tools.nutrition_models import NutritionEstimate, UnitKind, normalize_unit
from tools.prompt_builder import build_nutrition_prompt

# =============================================================================
# CONFIGURATION
# =============================================================================
ESTIMATOR_CONFIG = {
    "retry_delay": 2.0,
    "max_retries": 1,
}


# =============================================================================
# VALIDATION SCHEMA
# =============================================================================
def _require_number(value):
    # "250" and True are not numbers here
    if value is None:
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {type(value).__name__}")
    return value


class AINutritionFields(BaseModel):
    calories: float = Field(..., ge=0, allow_inf_nan=False)
    protein: float = Field(..., ge=0, allow_inf_nan=False)
    carbs: float = Field(..., ge=0, allow_inf_nan=False)
    fat: float = Field(..., ge=0, allow_inf_nan=False)
    fiber: float = Field(..., ge=0, allow_inf_nan=False)
    sugar: Optional[float] = Field(None, ge=0, allow_inf_nan=False)

    @field_validator("*", mode="before")
    @classmethod
    def check_numbers(cls, value):
        return _require_number(value)


class AINutritionResponse(BaseModel):
    """Shape the prompt asks for: {"nutrition": {...}, "confidence": x}."""
    nutrition: AINutritionFields
    confidence: float = Field(..., ge=0.0, le=1.0)

    @field_validator("confidence", mode="before")
    @classmethod
    def check_confidence(cls, value):
        return _require_number(value)


def parse_nutrition_response(text: str) -> NutritionEstimate:
    """
    Pull the JSON object out of an answer and validate every field.

    Raises:
        AIResponseError: no object found, a field missing, or a field that is
                         not a non-negative number.
    """
    data = extract_json_object(text)
    try:
        validated = AINutritionResponse.model_validate(data)
    except ValidationError as e:
        raise AIResponseError(f"Nutrition response failed validation: {e}") from e

    return NutritionEstimate(
        **validated.nutrition.model_dump(),
        confidence=validated.confidence,
    )


# =============================================================================
# MAIN TOOL: fetch_nutrition_estimate
# =============================================================================
def fetch_nutrition_estimate(
    food_name: str,
    quantity: Union[int, float, str],
    unit: Union[str, UnitKind],
    client: Any = None,
) -> NutritionEstimate:
    """
    One Gemini request for one food item.

    Args:
        food_name: e.g. "paneer butter masala"
        quantity: amount in `unit`, or a size name when unit is "size"
        unit: grams | ml | quantity | slices | size | teaspoon | glass
        client: optional genai client (tests pass a fake)

    Returns:
        NutritionEstimate built from the validated answer.

    Raises:
        AIServiceError: transport failure or client not configured.
        AIResponseError: answer structure or content is wrong.
    """
    prompt = build_nutrition_prompt(food_name, quantity, normalize_unit(unit))
    text = generate_text(prompt, client=client, model=GEMINI_CONFIG["text_model"])
    return parse_nutrition_response(text)


# =============================================================================
# CALL SITES
# =============================================================================
def estimate_nutrition(
    food_name: str,
    quantity: Union[int, float, str],
    unit: Union[str, UnitKind],
    client: Any = None,
) -> NutritionEstimate:
    """
    AI estimate, or the fallback estimate on the first failure. Never raises:
    unknown units are estimated as grams.
    """
    unit = resolve_unit(unit)
    try:
        return fetch_nutrition_estimate(food_name, quantity, unit, client=client)
    except AIServiceError as e:
        print(f"⚠️ Nutrition Estimator: AI failed for '{food_name}' ({e}). Using fallback...")
        return fallback_estimate(food_name, quantity, unit)


def refresh_nutrition_estimate(
    food_name: str,
    quantity: Union[int, float, str],
    unit: Union[str, UnitKind],
    client: Any = None,
    retry_delay: Optional[float] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> NutritionEstimate:
    """
    Re-estimate after the user edits the quantity or unit.

    Retries once after `retry_delay` seconds (2 s by default), then falls
    back. Never raises; unknown units are estimated as grams.
    """
    unit = resolve_unit(unit)
    delay = ESTIMATOR_CONFIG["retry_delay"] if retry_delay is None else retry_delay
    attempts = 1 + ESTIMATOR_CONFIG["max_retries"]

    for attempt in range(1, attempts + 1):
        try:
            return fetch_nutrition_estimate(food_name, quantity, unit, client=client)
        except AIServiceError as e:
            print(f"⚠️ Nutrition Estimator: attempt {attempt}/{attempts} failed for '{food_name}': {e}")
            if attempt < attempts:
                sleep(delay)

    print(f"⚠️ Nutrition Estimator: using fallback for '{food_name}'")
    return fallback_estimate(food_name, quantity, unit)


__all__ = [
    "ESTIMATOR_CONFIG",
    "AINutritionResponse",
    "parse_nutrition_response",
    "fetch_nutrition_estimate",
    "estimate_nutrition",
    "refresh_nutrition_estimate",
]
