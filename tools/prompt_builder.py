# tools/prompt_builder.py
"""
CalorieBuddy AI — Nutrition Prompt Builder
==========================================
Builds the instruction sent to Gemini for one food item. Each unit has its
own context block with the portion rules the model should apply; every
prompt ends with the same output contract.

Pure text construction: same inputs, same prompt.
"""

from typing import Union

from tools.nutrition_models import UnitKind, normalize_unit


# =============================================================================
# UNIT CONTEXT TEMPLATES
# =============================================================================
UNIT_CONTEXT = {
    UnitKind.GRAMS: (
        'Estimate the nutrition for {amount} grams of "{food}".\n'
        "- The weight is the edible portion as served (cooked weight for cooked dishes).\n"
        "- Scale per-100g reference values linearly to {amount} g."
    ),
    UnitKind.ML: (
        'Estimate the nutrition for {amount} ml of "{food}".\n'
        "- Treat the amount as a volume of the drink or liquid as served.\n"
        "- 1 cup = 240 ml, 1 can of soft drink = 330 ml.\n"
        "- For tea/chai and coffee assume milk and sugar as commonly prepared in India unless stated."
    ),
    UnitKind.GLASS: (
        'Estimate the nutrition for {amount} {glass_word} of "{food}".\n'
        "- 1 Indian glass is about 200-250 ml; use 250 ml per glass.\n"
        "- For tea/chai and coffee assume milk and sugar as commonly prepared in India unless stated.\n"
        "- For soft drinks use the regular (non-diet) version unless stated."
    ),
    UnitKind.QUANTITY: (
        'Estimate the nutrition for {amount} {piece_word} of "{food}".\n'
        "- One piece is a standard single serving as commonly served in India.\n"
        "- Reference pieces: 1 roti/chapati ~ 40 g, 1 samosa ~ 100 g, 1 idli ~ 50 g, "
        "1 large egg ~ 50 g, 1 medium banana ~ 120 g.\n"
        "- Multiply the single-piece values by {amount}."
    ),
    UnitKind.SLICES: (
        'Estimate the nutrition for {amount} {slice_word} of "{food}".\n'
        "- 1 slice of bread ~ 25-30 g, 1 slice of cheese ~ 20 g, 1 slice of cake ~ 80-100 g, "
        "1 slice of pizza ~ 100-120 g.\n"
        "- Multiply the single-slice values by {amount}."
    ),
    UnitKind.TEASPOON: (
        'Estimate the nutrition for {amount} {spoon_word} of "{food}".\n'
        "- 1 teaspoon = 5 ml.\n"
        "- By weight: sugar ~ 4 g, oil ~ 4.5 g, ghee ~ 5 g, honey ~ 7 g, salt ~ 6 g per teaspoon."
    ),
    UnitKind.SIZE: (
        'Estimate the nutrition for one whole {size} "{food}".\n'
        "- Size bands for a whole pizza:\n"
        "  small (about 8 inch, 4 slices): 500-700 kcal\n"
        "  medium / regular (about 10 inch, 6 slices): 800-1100 kcal\n"
        "  large (about 12 inch, 8 slices): 1200-1600 kcal\n"
        "- Stay inside the band for the {size} size; move toward the top for cheese burst, "
        "extra cheese or meat toppings."
    ),
}

OUTPUT_INSTRUCTIONS = """
Return ONLY a JSON object in this exact format:
{
  "nutrition": {
    "calories": <number>,
    "protein": <number>,
    "carbs": <number>,
    "fat": <number>,
    "fiber": <number>,
    "sugar": <number>
  },
  "confidence": <number between 0 and 1>
}

Rules:
- calories in kcal, every other nutrient in grams, all values non-negative numbers
- base values on reliable nutrition databases such as USDA or IFCT
- for Indian foods use authentic recipes and ingredients
- no explanations, no markdown, only the JSON object
"""


# =============================================================================
# HELPERS
# =============================================================================
def format_quantity(quantity: Union[int, float, str]) -> str:
    """2.0 -> '2', 1.5 -> '1.5', 'large' -> 'large'."""
    if isinstance(quantity, str):
        try:
            quantity = float(quantity)
        except ValueError:
            return quantity.strip().lower()
    if float(quantity).is_integer():
        return str(int(quantity))
    return f"{float(quantity):g}"


def _plural(amount: str, singular: str, plural: str) -> str:
    return singular if amount == "1" else plural


# =============================================================================
# MAIN TOOL: build_nutrition_prompt
# =============================================================================
def build_nutrition_prompt(
    food_name: str,
    quantity: Union[int, float, str],
    unit: Union[str, UnitKind],
) -> str:
    """
    Build the Gemini instruction for one food item.

    Args:
        food_name: Food as the user named it, e.g. "masala dosa".
        quantity: Number of units, or a size ("small"/"medium"/"regular"/"large")
                  when unit is "size".
        unit: One of grams, ml, quantity, slices, size, teaspoon, glass.

    Returns:
        The unit-specific context block followed by the shared JSON output
        instructions.
    """
    unit = normalize_unit(unit)
    food = food_name.strip()
    amount = format_quantity(quantity)

    if unit == UnitKind.SIZE:
        size = amount if amount in ("small", "medium", "regular", "large") else "medium"
        context = UNIT_CONTEXT[unit].format(food=food, size=size)
    else:
        context = UNIT_CONTEXT[unit].format(
            food=food,
            amount=amount,
            glass_word=_plural(amount, "glass", "glasses"),
            piece_word=_plural(amount, "piece", "pieces"),
            slice_word=_plural(amount, "slice", "slices"),
            spoon_word=_plural(amount, "teaspoon", "teaspoons"),
        )

    return f"You are a nutrition expert.\n\n{context}\n{OUTPUT_INSTRUCTIONS}"


__all__ = [
    "UNIT_CONTEXT",
    "OUTPUT_INSTRUCTIONS",
    "format_quantity",
    "build_nutrition_prompt",
]
