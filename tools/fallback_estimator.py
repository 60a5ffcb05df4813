# tools/fallback_estimator.py
"""
CalorieBuddy AI — Fallback Nutrition Estimator
==============================================
Offline estimate used when the AI call fails or returns garbage.
Calories come from a per-unit constant times the quantity; macros are fixed
fractions of that calorie figure. The low confidence tells downstream code
the numbers are rough.

Never raises: any input produces a NutritionEstimate.
"""

import math
from typing import Union

from tools.nutrition_models import NutritionEstimate, UnitKind, normalize_unit
from tools.unit_classifier import keyword_in

# =============================================================================
# CONSTANTS
# =============================================================================
FALLBACK_CONFIDENCE = 0.3

# kcal per one unit of measure
CALORIES_PER_UNIT = {
    UnitKind.GRAMS: 2.0,
    UnitKind.ML: 0.6,
    UnitKind.GLASS: 150.0,
    UnitKind.QUANTITY: 100.0,
    UnitKind.SLICES: 80.0,
    UnitKind.TEASPOON: 20.0,
}

# kcal per piece for foods counted with the "quantity" unit
PIECE_CALORIES = {
    "roti": 80.0,
    "chapati": 80.0,
    "samosa": 130.0,
    "pizza": 250.0,
    "egg": 78.0,
    "banana": 105.0,
}

# kcal per whole item for the "size" unit
SIZE_CALORIES = {
    "small": 600.0,
    "medium": 900.0,
    "regular": 900.0,
    "large": 1300.0,
}

# Macro grams as a fraction of the calorie number
MACRO_RATIOS = {
    "protein": 0.10,
    "carbs": 0.15,
    "fat": 0.05,
    "fiber": 0.03,
}


# =============================================================================
# HELPERS
# =============================================================================
def _numeric_quantity(quantity: Union[int, float, str, None]) -> float:
    try:
        amount = float(quantity)
    except (TypeError, ValueError):
        return 1.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def resolve_unit(unit: Union[str, UnitKind]) -> UnitKind:
    """Normalized unit; unknown units count as grams."""
    try:
        return normalize_unit(unit)
    except ValueError:
        return UnitKind.GRAMS


def estimate_calories(food_name: str, quantity: Union[int, float, str], unit: Union[str, UnitKind]) -> float:
    """Calories for the item before rounding."""
    unit = resolve_unit(unit)
    food = (food_name or "").lower()

    if unit == UnitKind.SIZE:
        size = str(quantity).strip().lower()
        if size in SIZE_CALORIES:
            return SIZE_CALORIES[size]
        # a bare count of whole items
        return SIZE_CALORIES["medium"] * _numeric_quantity(quantity)

    per_unit = CALORIES_PER_UNIT[unit]
    if unit == UnitKind.QUANTITY:
        for keyword, calories in PIECE_CALORIES.items():
            if keyword_in(keyword, food):
                per_unit = calories
                break

    return per_unit * _numeric_quantity(quantity)


# =============================================================================
# MAIN TOOL: fallback_estimate
# =============================================================================
def fallback_estimate(
    food_name: str,
    quantity: Union[int, float, str],
    unit: Union[str, UnitKind],
) -> NutritionEstimate:
    """
    Deterministic nutrition estimate for when the AI is unavailable.

    Args:
        food_name: Food name; only used for per-piece adjustments (roti, samosa...).
        quantity: Amount in the given unit, or a size name for unit "size".
        unit: One of grams, ml, quantity, slices, size, teaspoon, glass.
              Unknown units are treated as grams.

    Returns:
        NutritionEstimate with confidence fixed at 0.3.

    Example:
        >>> fallback_estimate("roti", 2, "quantity").calories
        160.0
    """
    calories = round(estimate_calories(food_name, quantity, unit))

    return NutritionEstimate(
        calories=float(calories),
        protein=round(calories * MACRO_RATIOS["protein"], 1),
        carbs=round(calories * MACRO_RATIOS["carbs"], 1),
        fat=round(calories * MACRO_RATIOS["fat"], 1),
        fiber=round(calories * MACRO_RATIOS["fiber"], 1),
        confidence=FALLBACK_CONFIDENCE,
    )


__all__ = [
    "FALLBACK_CONFIDENCE",
    "CALORIES_PER_UNIT",
    "PIECE_CALORIES",
    "SIZE_CALORIES",
    "MACRO_RATIOS",
    "resolve_unit",
    "estimate_calories",
    "fallback_estimate",
]
