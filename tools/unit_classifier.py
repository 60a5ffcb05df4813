# tools/unit_classifier.py
"""
CalorieBuddy AI — Unit Classifier Tool
======================================
Maps a free-text food name to the unit a user would naturally measure it in,
the label shown next to the quantity input, and the selector options.

Pure keyword matching over an ordered rule table (no AI required). The first
matching rule wins; only the ice-cream rule has nested sub-rules.

Two variants are configured:
- "standard": text / meal-parsing flow. Liquids in ml, ice-cream sub-cases.
- "weight":   weight-editing flow. Liquids in glasses, glass offered everywhere.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Sequence, Tuple

from tools.nutrition_models import SIZE_OPTIONS, UnitClassification, UnitKind


# =============================================================================
# RULE TABLE
# =============================================================================
@dataclass(frozen=True)
class UnitRule:
    """One category: keywords -> default unit, input label, selector options."""
    name: str
    keywords: Tuple[str, ...]
    unit: UnitKind
    prompt: str
    options: Tuple[str, ...]
    subrules: Tuple["UnitRule", ...] = field(default_factory=tuple)

    def matches(self, food: str) -> bool:
        return any(keyword_in(kw, food) for kw in self.keywords)


def keyword_in(keyword: str, food: str) -> bool:
    # Keywords must start a word: "steak" is not "tea", "boiled" is not "oil"
    return re.search(r"\b" + re.escape(keyword), food) is not None


LIQUID_KEYWORDS = (
    "chai", "tea", "coffee", "coke", "cola", "pepsi", "juice", "milk",
    "water", "beer", "wine", "soda", "drink", "lassi", "smoothie",
    "buttermilk", "chaas", "shake", "latte", "espresso", "soup",
)

PIZZA_KEYWORDS = ("pizza",)

COUNTED_KEYWORDS = (
    "gulab jamun", "samosa", "dosa", "egg", "banana", "apple", "orange",
    "chole bhature", "bhatura", "idli", "vada", "paratha", "naan", "chapati",
    "roti", "puri", "kachori", "momo", "pakora", "laddoo", "ladoo",
    "burger", "sandwich", "chips", "cookie", "biscuit", "donut", "muffin",
)

SLICEABLE_KEYWORDS = ("cheese", "bread", "cake", "toast")

ICE_CREAM_KEYWORDS = ("ice cream", "icecream", "gelato", "kulfi")

CONDIMENT_KEYWORDS = (
    "sugar", "salt", "oil", "honey", "jam", "sauce", "ketchup", "chutney",
    "mayonnaise", "mayo", "spice", "powder", "ghee", "syrup",
)

# The weight-editing flow also measures butter and masala in teaspoons
WEIGHT_CONDIMENT_KEYWORDS = CONDIMENT_KEYWORDS + ("masala", "butter")

STANDARD_OPTIONS = {
    UnitKind.ML: ("ml", "grams", "quantity", "slices", "teaspoon"),
    UnitKind.QUANTITY: ("quantity", "grams", "ml", "slices", "teaspoon"),
    UnitKind.SLICES: ("slices", "grams", "quantity", "ml", "teaspoon"),
    UnitKind.TEASPOON: ("teaspoon", "grams", "ml", "quantity", "slices"),
    UnitKind.GRAMS: ("grams", "ml", "quantity", "slices", "teaspoon"),
}

WEIGHT_OPTIONS = {
    UnitKind.GLASS: ("glass", "ml", "quantity", "grams", "slices", "teaspoon"),
    UnitKind.QUANTITY: ("quantity", "grams", "glass", "ml", "slices", "teaspoon"),
    UnitKind.SLICES: ("slices", "grams", "quantity", "glass", "ml", "teaspoon"),
    UnitKind.TEASPOON: ("teaspoon", "grams", "ml", "quantity", "slices", "glass"),
    UnitKind.GRAMS: ("grams", "ml", "quantity", "slices", "glass", "teaspoon"),
}

PIZZA_RULE = UnitRule(
    name="pizza",
    keywords=PIZZA_KEYWORDS,
    unit=UnitKind.SIZE,
    prompt="Size",
    options=tuple(SIZE_OPTIONS),
)

ICE_CREAM_RULE = UnitRule(
    name="ice_cream",
    keywords=ICE_CREAM_KEYWORDS,
    unit=UnitKind.QUANTITY,
    prompt="Scoops",
    options=STANDARD_OPTIONS[UnitKind.QUANTITY],
    subrules=(
        UnitRule(
            name="ice_cream_piece",
            keywords=("cone", "bar", "stick", "sandwich", "kulfi", "cup"),
            unit=UnitKind.QUANTITY,
            prompt="Pieces",
            options=STANDARD_OPTIONS[UnitKind.QUANTITY],
        ),
        UnitRule(
            name="ice_cream_tub",
            keywords=("tub", "pint", "brick", "family pack", "litre", "liter"),
            unit=UnitKind.ML,
            prompt="Volume (ml)",
            options=STANDARD_OPTIONS[UnitKind.ML],
        ),
    ),
)

STANDARD_RULES: Tuple[UnitRule, ...] = (
    UnitRule("liquid", LIQUID_KEYWORDS, UnitKind.ML, "Volume (ml)", STANDARD_OPTIONS[UnitKind.ML]),
    PIZZA_RULE,
    UnitRule("counted", COUNTED_KEYWORDS, UnitKind.QUANTITY, "Quantity", STANDARD_OPTIONS[UnitKind.QUANTITY]),
    UnitRule("sliceable", SLICEABLE_KEYWORDS, UnitKind.SLICES, "Slices", STANDARD_OPTIONS[UnitKind.SLICES]),
    ICE_CREAM_RULE,
    UnitRule("condiment", CONDIMENT_KEYWORDS, UnitKind.TEASPOON, "Teaspoons", STANDARD_OPTIONS[UnitKind.TEASPOON]),
)

WEIGHT_RULES: Tuple[UnitRule, ...] = (
    UnitRule("liquid", LIQUID_KEYWORDS, UnitKind.GLASS, "Glasses", WEIGHT_OPTIONS[UnitKind.GLASS]),
    PIZZA_RULE,
    UnitRule("counted", COUNTED_KEYWORDS, UnitKind.QUANTITY, "Quantity", WEIGHT_OPTIONS[UnitKind.QUANTITY]),
    UnitRule("sliceable", SLICEABLE_KEYWORDS, UnitKind.SLICES, "Slices", WEIGHT_OPTIONS[UnitKind.SLICES]),
    UnitRule("condiment", WEIGHT_CONDIMENT_KEYWORDS, UnitKind.TEASPOON, "Teaspoons", WEIGHT_OPTIONS[UnitKind.TEASPOON]),
)

# Input label per unit, for units set outside the rule table
UNIT_PROMPTS = {
    UnitKind.GRAMS: "Weight (grams)",
    UnitKind.ML: "Volume (ml)",
    UnitKind.GLASS: "Glasses",
    UnitKind.QUANTITY: "Quantity",
    UnitKind.SLICES: "Slices",
    UnitKind.TEASPOON: "Teaspoons",
    UnitKind.SIZE: "Size",
}

STANDARD_DEFAULT = UnitRule("default", (), UnitKind.GRAMS, "Weight (grams)", STANDARD_OPTIONS[UnitKind.GRAMS])
WEIGHT_DEFAULT = UnitRule("default", (), UnitKind.GRAMS, "Weight (grams)", WEIGHT_OPTIONS[UnitKind.GRAMS])


# =============================================================================
# CLASSIFIER
# =============================================================================
class UnitClassifier:
    """Ordered rule table with a catch-all default."""

    def __init__(self, rules: Sequence[UnitRule], default: UnitRule):
        self.rules = tuple(rules)
        self.default = default

    def match_rule(self, food_name: str) -> UnitRule:
        food = (food_name or "").strip().lower()
        for rule in self.rules:
            if not rule.matches(food):
                continue
            for sub in rule.subrules:
                if sub.matches(food):
                    return sub
            return rule
        return self.default

    def classify(self, food_name: str) -> UnitClassification:
        rule = self.match_rule(food_name)
        return UnitClassification(
            unit=rule.unit,
            prompt=rule.prompt,
            options=list(rule.options),
        )


CLASSIFIERS: Dict[str, UnitClassifier] = {
    "standard": UnitClassifier(STANDARD_RULES, STANDARD_DEFAULT),
    "weight": UnitClassifier(WEIGHT_RULES, WEIGHT_DEFAULT),
}


# =============================================================================
# MAIN TOOL: classify
# =============================================================================
def classify(food_name: str, variant: str = "standard") -> UnitClassification:
    """
    Pick the default measurement unit for a food.

    Args:
        food_name: Free-text food name, e.g. "masala chai" or "cheese pizza".
        variant: "standard" (liquids in ml) or "weight" (liquids in glasses).

    Returns:
        UnitClassification with the unit, the input label and the selector
        options (chosen unit first; pizza gets the size choices instead).

    Example:
        >>> classify("paneer pizza").options
        ['small', 'medium', 'regular', 'large']
    """
    if variant not in CLASSIFIERS:
        raise ValueError(f"Unknown classifier variant '{variant}'. Use one of {sorted(CLASSIFIERS)}")
    return CLASSIFIERS[variant].classify(food_name)


__all__ = [
    "UnitRule",
    "UnitClassifier",
    "CLASSIFIERS",
    "STANDARD_RULES",
    "WEIGHT_RULES",
    "LIQUID_KEYWORDS",
    "COUNTED_KEYWORDS",
    "CONDIMENT_KEYWORDS",
    "WEIGHT_CONDIMENT_KEYWORDS",
    "UNIT_PROMPTS",
    "keyword_in",
    "classify",
]
