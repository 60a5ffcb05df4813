# tools/nutrition_models.py
"""
CalorieBuddy AI — Shared Nutrition Models
=========================================
Pydantic models passed between the classifier, the estimators, the meal
agent and the API. Every estimate, AI or fallback, is a NutritionEstimate.
"""

import math
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# UNITS
# =============================================================================
class UnitKind(str, Enum):
    GRAMS = "grams"
    ML = "ml"
    QUANTITY = "quantity"
    SLICES = "slices"
    SIZE = "size"
    TEASPOON = "teaspoon"
    GLASS = "glass"


SIZE_OPTIONS = ["small", "medium", "regular", "large"]

# Spellings that AI parsers and users send instead of the canonical unit
UNIT_ALIASES = {
    "g": UnitKind.GRAMS,
    "gm": UnitKind.GRAMS,
    "gms": UnitKind.GRAMS,
    "gram": UnitKind.GRAMS,
    "milliliter": UnitKind.ML,
    "milliliters": UnitKind.ML,
    "millilitre": UnitKind.ML,
    "millilitres": UnitKind.ML,
    "piece": UnitKind.QUANTITY,
    "pieces": UnitKind.QUANTITY,
    "pcs": UnitKind.QUANTITY,
    "count": UnitKind.QUANTITY,
    "slice": UnitKind.SLICES,
    "tsp": UnitKind.TEASPOON,
    "teaspoons": UnitKind.TEASPOON,
    "glasses": UnitKind.GLASS,
    "cup": UnitKind.GLASS,
    "cups": UnitKind.GLASS,
}


def normalize_unit(unit: Union[str, UnitKind]) -> UnitKind:
    """Map a unit name or alias to a UnitKind. Raises ValueError when unknown."""
    if isinstance(unit, UnitKind):
        return unit
    key = str(unit).strip().lower()
    if key in UNIT_ALIASES:
        return UNIT_ALIASES[key]
    return UnitKind(key)


# =============================================================================
# QUERY & ESTIMATE
# =============================================================================
class FoodQuery(BaseModel):
    """One user-edited line item: what, how much, in which unit."""
    name: str = Field(..., min_length=1)
    quantity: Union[float, str] = 1
    unit: UnitKind = UnitKind.GRAMS

    @field_validator("unit", mode="before")
    @classmethod
    def normalize_unit_field(cls, value):
        return normalize_unit(value)

    @model_validator(mode="after")
    def check_quantity(self):
        if self.unit == UnitKind.SIZE:
            size = str(self.quantity).strip().lower()
            if size not in SIZE_OPTIONS:
                raise ValueError(f"size must be one of {SIZE_OPTIONS}, got {self.quantity!r}")
            self.quantity = size
            return self

        try:
            amount = float(self.quantity)
        except (TypeError, ValueError):
            raise ValueError(f"quantity must be a number for unit '{self.unit.value}'")
        if not math.isfinite(amount) or amount < 0:
            raise ValueError("quantity must be a finite, non-negative number")
        self.quantity = amount
        return self


class NutritionEstimate(BaseModel):
    """Universal nutrition output. Macros in grams, calories in kcal."""
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fat: float = Field(..., ge=0)
    fiber: float = Field(..., ge=0)
    sugar: Optional[float] = Field(None, ge=0)
    confidence: float = Field(..., ge=0.0, le=1.0)


# =============================================================================
# PARSING & CLASSIFICATION
# =============================================================================
class ParsedFoodItem(BaseModel):
    """A food named in a description, with any amount the user typed."""
    name: str
    quantity: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    unit: Optional[UnitKind] = None
    size: Optional[str] = None


class UnitClassification(BaseModel):
    unit: UnitKind
    prompt: str
    options: List[str]


class ClassifiedFoodItem(ParsedFoodItem):
    """A parsed item with its unit and selector options, ready for quantity editing."""
    unit: UnitKind
    prompt: str
    options: List[str]


# =============================================================================
# MEAL RECORDS
# =============================================================================
MEAL_TYPES = ["breakfast", "lunch", "dinner", "snacks"]


def normalize_meal_type(value: str) -> str:
    """Lowercase and map "snack" to "snacks". Raises ValueError when unknown."""
    value = str(value).strip().lower()
    if value == "snack":
        value = "snacks"
    if value not in MEAL_TYPES:
        raise ValueError(f"meal type must be one of {MEAL_TYPES}")
    return value


class MealRecord(BaseModel):
    """Finalized entry handed to the persistence collaborator."""
    name: str
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(0, ge=0)
    fat: float = Field(0, ge=0)
    fiber: float = Field(0, ge=0)
    type: str = "breakfast"
    weight: float = Field(0, ge=0)
    ai_enhanced: bool = False

    @field_validator("type")
    @classmethod
    def check_meal_type(cls, value: str) -> str:
        return normalize_meal_type(value)


class MealCalculation(BaseModel):
    meal_type: str
    items: List[MealRecord] = Field(default_factory=list)
    totals: Dict[str, float] = Field(default_factory=dict)


# =============================================================================
# ALTERNATE PROVIDER (one-shot parse + estimate)
# =============================================================================
class QuickEstimateItem(BaseModel):
    name: str
    quantity: float = Field(1, ge=0)
    unit: str = "serving"
    estimated_calories: float = Field(..., ge=0)
    protein: Optional[float] = Field(None, ge=0)
    carbs: Optional[float] = Field(None, ge=0)
    fat: Optional[float] = Field(None, ge=0)
    fiber: Optional[float] = Field(None, ge=0)


class QuickEstimate(BaseModel):
    items: List[QuickEstimateItem]
    total_calories: float = Field(..., ge=0)
    confidence: float = Field(..., ge=0.0, le=1.0)


__all__ = [
    "UnitKind",
    "SIZE_OPTIONS",
    "UNIT_ALIASES",
    "normalize_unit",
    "FoodQuery",
    "NutritionEstimate",
    "ParsedFoodItem",
    "UnitClassification",
    "ClassifiedFoodItem",
    "MEAL_TYPES",
    "normalize_meal_type",
    "MealRecord",
    "MealCalculation",
    "QuickEstimateItem",
    "QuickEstimate",
]
