# tools/meal_parser.py
"""
CalorieBuddy AI — Meal Parser Tool
==================================
Splits a free-text meal description ("pizza and coke") into discrete food
names before each item is classified.

Three stages:
1. Fast path: short single-item input is returned as-is (no AI call)
2. Gemini: answer must embed a JSON array of food-name strings
3. Keyword fallback: a small fixed set of recognizable foods

parse_meal_items runs the same stages but keeps quantity, unit and size
so the quantity inputs can be pre-filled.
"""

import math
import re
from typing import Any, List, Optional, Tuple

from tools.gemini_client import (
    AIResponseError,
    AIServiceError,
    extract_json_array,
    extract_json_object,
    generate_text,
)
from tools.nutrition_models import SIZE_OPTIONS, ParsedFoodItem, UnitKind, normalize_unit

# =============================================================================
# CONFIGURATION
# =============================================================================
SINGLE_ITEM_MAX_WORDS = 3

# Word markers match whole words; symbol markers match anywhere
CONJUNCTION_WORDS = ("and", "with")
CONJUNCTION_SYMBOLS = (",", "&", "+")

# (pattern, canonical name) checked by the offline fallback
FALLBACK_FOODS: Tuple[Tuple[str, str], ...] = (
    (r"\bpizzas?\b", "pizza"),
    (r"\b(?:coke|cola)\b", "coke"),
    (r"\b(?:rotis?|chapatis?)\b", "roti"),
)

PARSE_PROMPT = """
You are an expert food parsing AI. Split this meal description into separate food items.

User said: "{description}"

Rules:
- One entry per distinct food or drink
- Use clean, simple food names without quantities or units
- Keep dish names together ("paneer butter masala" is one item)
- Include drinks, sides and condiments the user mentions

Examples:
- "4 roti and 1 large pizza" -> ["roti", "pizza"]
- "2 glasses of chai with sugar" -> ["chai", "sugar"]
- "dal, rice and curd" -> ["dal", "rice", "curd"]

Return ONLY a JSON array of strings, for example ["pizza", "coke"].
"""


# =============================================================================
# HELPERS
# =============================================================================
def has_conjunction(text: str) -> bool:
    lowered = text.lower()
    if any(symbol in lowered for symbol in CONJUNCTION_SYMBOLS):
        return True
    return any(re.search(rf"\b{word}\b", lowered) for word in CONJUNCTION_WORDS)


def is_single_item(text: str) -> bool:
    """At most SINGLE_ITEM_MAX_WORDS words and no conjunction marker."""
    return len(text.split()) <= SINGLE_ITEM_MAX_WORDS and not has_conjunction(text)


def parse_with_keywords(text: str) -> List[str]:
    """
    Offline fallback: recognizes pizza, coke/cola and roti/chapati only.
    Items come back in the order they appear in the text. May be empty.
    """
    lowered = text.lower()
    found = []
    for pattern, name in FALLBACK_FOODS:
        match = re.search(pattern, lowered)
        if match:
            found.append((match.start(), name))
    return [name for _, name in sorted(found)]


def _clean_items(raw_items: List[Any]) -> List[str]:
    items = []
    for item in raw_items:
        if not isinstance(item, str):
            raise AIResponseError(f"Expected food names as strings, got {type(item).__name__}")
        name = item.strip()
        if name:
            items.append(name)
    return items


# =============================================================================
# MAIN TOOL: parse_meal_description
# =============================================================================
def parse_meal_description(description: Optional[str], client: Any = None) -> List[str]:
    """
    Split a meal description into food names.

    Args:
        description: e.g. "2 samosa with green chutney and chai"
        client: optional genai client (tests pass a fake)

    Returns:
        Food names in the order the user wrote them. An empty list means no
        recognizable food; empty input gives an empty list.

    Example:
        >>> parse_meal_description("pizza")
        ['pizza']
    """
    text = (description or "").strip()
    if not text:
        return []

    if is_single_item(text):
        return [text]

    try:
        answer = generate_text(PARSE_PROMPT.format(description=text), client=client)
        return _clean_items(extract_json_array(answer))
    except AIServiceError as e:
        print(f"⚠️ Meal Parser: AI parsing failed ({e}). Using keyword fallback...")

    return parse_with_keywords(text)


# =============================================================================
# STRUCTURED PARSING (names + amounts)
# =============================================================================
STRUCTURED_PARSE_PROMPT = """
You are an expert food parsing AI. Parse this user input to extract food items with their quantities and units.

User said: "{description}"

Examples:
- "4 roti and 1 large pizza" -> {{"items": [{{"name": "roti", "quantity": 4, "unit": "quantity"}}, {{"name": "pizza", "quantity": 1, "unit": "size", "size": "large"}}]}}
- "2 glasses of chai" -> {{"items": [{{"name": "chai", "quantity": 2, "unit": "glass"}}]}}
- "pizza" -> {{"items": [{{"name": "pizza", "quantity": 1, "unit": "size", "size": "medium"}}]}}

Return ONLY a JSON object in this format:
{{"items": [{{"name": "food_name", "quantity": number, "unit": "quantity|glass|ml|grams|slices|teaspoon|size", "size": "small|medium|large"}}]}}

Guidelines:
- If no quantity is mentioned, assume 1
- For drinks, prefer "glass" over "ml"
- For counted items (roti, samosa, etc.), use "quantity"
- For pizza without a size, use "medium"; "size" only appears when unit is "size"
- Use clean food names, not descriptions
"""

# Optional leading count and size on a fast-path item: "2 roti", "large pizza"
LEADING_AMOUNT = re.compile(
    r"^(?:(\d+(?:\.\d+)?)\s+)?(?:(small|medium|regular|large)\s+)?(.+)$",
    re.IGNORECASE,
)

# (pattern, name, unit) for the offline structured fallback
STRUCTURED_FALLBACK_FOODS: Tuple[Tuple[str, str, Optional[UnitKind]], ...] = (
    (r"\bpizzas?\b", "pizza", UnitKind.SIZE),
    (r"\b(?:coke|cola)\b", "coke", None),
    (r"\b(?:rotis?|chapatis?)\b", "roti", UnitKind.QUANTITY),
    (r"\b(?:chai|tea)\b", "chai", UnitKind.GLASS),
)


def _first_number(text: str) -> Optional[float]:
    match = re.search(r"\d+", text)
    return float(match.group()) if match else None


def _size_word(text: str) -> str:
    lowered = text.lower()
    if re.search(r"\blarge\b", lowered):
        return "large"
    if re.search(r"\bsmall\b", lowered):
        return "small"
    return "medium"


def split_leading_amount(text: str) -> ParsedFoodItem:
    """Leading count and size of a short item: "2 roti" is roti x2, "large pizza" is pizza (large)."""
    match = LEADING_AMOUNT.match(text.strip())
    count, size, name = match.groups()
    if size:
        size = size.lower()
    return ParsedFoodItem(
        name=name.strip(),
        quantity=float(count) if count and float(count) > 0 else None,
        unit=UnitKind.SIZE if size else None,
        size=size,
    )


def parse_items_with_keywords(text: str) -> List[ParsedFoodItem]:
    """
    Offline structured fallback, in order of appearance.
    Pizza gets its size from "large"/"small" (else medium); roti and chai are
    counted with the first number in the text (else 1). Nothing recognized:
    the whole text becomes one item measured in grams.
    """
    lowered = text.lower()
    found = []
    for pattern, name, unit in STRUCTURED_FALLBACK_FOODS:
        match = re.search(pattern, lowered)
        if not match:
            continue
        if unit == UnitKind.SIZE:
            item = ParsedFoodItem(name=name, quantity=1, unit=unit, size=_size_word(text))
        elif unit is None:
            item = ParsedFoodItem(name=name)
        else:
            item = ParsedFoodItem(name=name, quantity=_first_number(text) or 1, unit=unit)
        found.append((match.start(), item))

    if not found:
        return [ParsedFoodItem(name=text.strip(), quantity=1, unit=UnitKind.GRAMS)]
    return [item for _, item in sorted(found, key=lambda pair: pair[0])]


def _structured_item(raw: Any) -> Optional[ParsedFoodItem]:
    if not isinstance(raw, dict) or not isinstance(raw.get("name"), str):
        raise AIResponseError(f"Expected item objects with a name, got {raw!r}")
    name = raw["name"].strip()
    if not name:
        return None

    quantity = raw.get("quantity")
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)) \
            or not math.isfinite(quantity) or quantity <= 0:
        quantity = None

    try:
        unit = normalize_unit(raw["unit"]) if raw.get("unit") else None
    except ValueError:
        unit = None

    size = raw.get("size")
    size = size.strip().lower() if isinstance(size, str) else None
    if size not in SIZE_OPTIONS:
        size = None
    if unit == UnitKind.SIZE and size is None:
        size = "medium"

    return ParsedFoodItem(name=name, quantity=quantity, unit=unit, size=size)


def parse_meal_items(description: Optional[str], client: Any = None) -> List[ParsedFoodItem]:
    """
    Split a description into foods, keeping the amounts the user typed.

    Args:
        description: e.g. "4 roti and 1 large pizza"
        client: optional genai client (tests pass a fake)

    Returns:
        ParsedFoodItems in the order written. quantity/unit/size are None
        where the text gives no hint. Short single items skip the AI.

    Example:
        >>> parse_meal_items("2 roti")
        [ParsedFoodItem(name='roti', quantity=2.0, unit=None, size=None)]
    """
    text = (description or "").strip()
    if not text:
        return []

    if is_single_item(text):
        return [split_leading_amount(text)]

    try:
        answer = generate_text(STRUCTURED_PARSE_PROMPT.format(description=text), client=client)
        raw_items = extract_json_object(answer).get("items")
        if not isinstance(raw_items, list):
            raise AIResponseError("Expected an 'items' list")
        items = [_structured_item(raw) for raw in raw_items]
        return [item for item in items if item is not None]
    except AIServiceError as e:
        print(f"⚠️ Meal Parser: structured parsing failed ({e}). Using keyword fallback...")

    return parse_items_with_keywords(text)


__all__ = [
    "SINGLE_ITEM_MAX_WORDS",
    "CONJUNCTION_WORDS",
    "CONJUNCTION_SYMBOLS",
    "has_conjunction",
    "is_single_item",
    "parse_with_keywords",
    "parse_meal_description",
    "split_leading_amount",
    "parse_items_with_keywords",
    "parse_meal_items",
]
