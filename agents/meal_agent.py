# agents/meal_agent.py
"""
CalorieBuddy AI — Meal Agent
============================
Coordinates one meal from free text to finalized records:

    description -> meal parser -> unit classifier -> (user edits quantities)
               -> nutrition estimator -> fallback estimator -> MealRecords

Also aggregates stored meals into 4 AM tracking days and computes daily goal
progress for the dashboard. Items are processed one at a time, in list order.
Nothing here stores data; records are handed to the persistence layer.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from tools.fallback_estimator import fallback_estimate
from tools.gemini_client import AIServiceError
from tools.meal_parser import parse_meal_items
from tools.nutrition_estimator import fetch_nutrition_estimate
from tools.nutrition_models import (
    MEAL_TYPES,
    ClassifiedFoodItem,
    FoodQuery,
    MealCalculation,
    MealRecord,
    ParsedFoodItem,
    SIZE_OPTIONS,
    UnitKind,
    normalize_meal_type,
)
from tools.prompt_builder import format_quantity
from tools.unit_classifier import UNIT_PROMPTS, classify

# =============================================================================
# CONFIGURATION
# =============================================================================
MEAL_AGENT_CONFIG = {
    "tracking_reset_hour": 4,
    "default_days": 7,
    "calorie_goal": 2000,
    "protein_goal": 150,
}

MACRO_CALORIES = {
    "protein": 4,
    "carbs": 4,
    "fat": 9,
}

TOTAL_FIELDS = ("calories", "protein", "carbs", "fat", "fiber")

# (upper bound in % of calorie goal, message); first bound not exceeded wins
PROGRESS_MESSAGES = (
    (25, "Great start! Keep adding meals throughout the day."),
    (50, "You're making good progress! Stay on track."),
    (75, "Almost there! A few more calories to reach your goal."),
    (100, "So close! You're nearly at your target."),
)
START_MESSAGE = "Start your day by logging your first meal!"
GOAL_MET_MESSAGE = "Perfect! You've hit your calorie goal!"
OVER_GOAL_MESSAGE = "You've exceeded your goal. Consider lighter options for remaining meals."


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================
def _record_name(query: FoodQuery) -> str:
    return f"{query.name} ({format_quantity(query.quantity)} {query.unit.value})"


def _record_weight(query: FoodQuery) -> float:
    if query.unit == UnitKind.SIZE:
        return 1.0
    return float(query.quantity)


def _as_dict(record: Union[MealRecord, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(record, MealRecord):
        return record.model_dump()
    return record


def _to_local_naive(value: Union[str, datetime]) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


def tracking_day_start(moment: datetime, reset_hour: Optional[int] = None) -> datetime:
    """Start of the tracking day containing `moment` (04:00 local by default)."""
    hour = MEAL_AGENT_CONFIG["tracking_reset_hour"] if reset_hour is None else reset_hour
    start = moment.replace(hour=hour, minute=0, second=0, microsecond=0)
    if moment < start:
        start -= timedelta(days=1)
    return start


def progress_message(calories: float, calorie_goal: float) -> str:
    if calories <= 0:
        return START_MESSAGE
    percent = calories / calorie_goal * 100 if calorie_goal > 0 else float("inf")
    for bound, message in PROGRESS_MESSAGES:
        if percent < bound:
            return message
    if percent <= 110:
        return GOAL_MET_MESSAGE
    return OVER_GOAL_MESSAGE


# =============================================================================
# MAIN TOOL FUNCTIONS
# =============================================================================
def prepare_meal_items(
    description: str,
    client: Any = None,
    variant: str = "standard",
) -> List[ClassifiedFoodItem]:
    """
    Split a description into items and attach each item's default unit.

    Args:
        description: e.g. "2 roti with dal and a glass of lassi"
        client: optional genai client for the parser
        variant: unit classifier variant ("standard" or "weight")

    Returns:
        One ClassifiedFoodItem per food, in the order the user wrote them,
        with any quantity, unit or size the user typed already filled in.
    """
    items = [
        apply_classification(item, variant)
        for item in parse_meal_items(description, client=client)
    ]
    print(f"🍽️ Meal Agent: {len(items)} item(s) ready for quantities")
    return items


def apply_classification(item: ParsedFoodItem, variant: str = "standard") -> ClassifiedFoodItem:
    """Attach the selector for an item. A parsed unit wins over the classifier default."""
    classification = classify(item.name, variant)
    unit = item.unit or classification.unit
    prompt = classification.prompt
    options = list(classification.options)

    if unit == UnitKind.SIZE:
        prompt, options = UNIT_PROMPTS[unit], list(SIZE_OPTIONS)
    elif unit != classification.unit:
        prompt = UNIT_PROMPTS[unit]
        options = [unit.value] + [option for option in options if option != unit.value]

    return ClassifiedFoodItem(
        name=item.name,
        quantity=item.quantity,
        unit=unit,
        size=item.size,
        prompt=prompt,
        options=options,
    )


def build_meal_record(query: FoodQuery, meal_type: str, client: Any = None) -> MealRecord:
    """Estimate one item (AI first, fallback on failure) and wrap it as a MealRecord."""
    try:
        estimate = fetch_nutrition_estimate(query.name, query.quantity, query.unit, client=client)
        ai_enhanced = True
    except AIServiceError as e:
        print(f"⚠️ Meal Agent: AI estimate failed for '{query.name}' ({e}). Using fallback...")
        estimate = fallback_estimate(query.name, query.quantity, query.unit)
        ai_enhanced = False

    return MealRecord(
        name=_record_name(query),
        calories=estimate.calories,
        protein=estimate.protein,
        carbs=estimate.carbs,
        fat=estimate.fat,
        fiber=estimate.fiber,
        type=meal_type,
        weight=_record_weight(query),
        ai_enhanced=ai_enhanced,
    )


def calculate_meal_totals(records: Iterable[Union[MealRecord, Dict[str, Any]]]) -> Dict[str, float]:
    """Sum calories, protein, carbs, fat and fiber over records."""
    totals = {field: 0.0 for field in TOTAL_FIELDS}
    for record in records:
        data = _as_dict(record)
        for field in TOTAL_FIELDS:
            totals[field] += data.get(field, 0) or 0
    return {field: round(value, 1) for field, value in totals.items()}


def calculate_meal_nutrition(
    queries: Sequence[Union[FoodQuery, Dict[str, Any]]],
    meal_type: str = "breakfast",
    client: Any = None,
) -> MealCalculation:
    """
    Estimate every item of a meal, sequentially and in list order.

    Args:
        queries: FoodQuery objects (or dicts with name/quantity/unit)
        meal_type: breakfast | lunch | dinner | snacks
        client: optional genai client

    Returns:
        MealCalculation with one MealRecord per query and the meal totals.
        AI failures never abort the meal; the item falls back instead.
    """
    meal_type = normalize_meal_type(meal_type)
    records = []
    for query in queries:
        if not isinstance(query, FoodQuery):
            query = FoodQuery(**query)
        records.append(build_meal_record(query, meal_type, client=client))

    calculation = MealCalculation(
        meal_type=meal_type,
        items=records,
        totals=calculate_meal_totals(records),
    )
    print(f"✅ Meal Agent: {len(records)} item(s), {calculation.totals['calories']} kcal")
    return calculation


def group_daily_meal_stats(
    meals: Iterable[Dict[str, Any]],
    days: int = MEAL_AGENT_CONFIG["default_days"],
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """
    Group stored meal rows into tracking days (04:00 to 04:00 local time).

    Args:
        meals: rows with calories, protein and created_at (ISO string or datetime)
        days: number of tracking days to cover, ending with the current one
        now: reference time (defaults to the current local time)

    Returns:
        [{"date": "YYYY-MM-DD", "calories", "protein", "meals"}], oldest first.
        Only days with at least one meal appear.
    """
    now = _to_local_naive(now) if now is not None else datetime.now()
    window_start = tracking_day_start(now) - timedelta(days=max(days, 1) - 1)

    grouped: Dict[datetime, Dict[str, Any]] = {}
    for meal in meals:
        created = _to_local_naive(meal["created_at"])
        if created < window_start:
            continue
        day_start = tracking_day_start(created)
        day = grouped.setdefault(day_start, {
            "date": day_start.date().isoformat(),
            "calories": 0.0,
            "protein": 0.0,
            "meals": 0,
        })
        day["calories"] += meal.get("calories", 0) or 0
        day["protein"] += meal.get("protein", 0) or 0
        day["meals"] += 1

    return [grouped[start] for start in sorted(grouped)]


def summarize_daily_progress(
    records: Iterable[Union[MealRecord, Dict[str, Any]]],
    calorie_goal: float = MEAL_AGENT_CONFIG["calorie_goal"],
    protein_goal: float = MEAL_AGENT_CONFIG["protein_goal"],
) -> Dict[str, Any]:
    """
    Dashboard summary for one tracking day.

    Returns:
        Totals, calories per meal type, macro breakdown (% of macro calories),
        goal progress percentages, remaining calories and a status message.
    """
    rows = [_as_dict(r) for r in records]
    totals = calculate_meal_totals(rows)

    by_type = {meal_type: 0.0 for meal_type in MEAL_TYPES}
    for row in rows:
        try:
            meal_type = normalize_meal_type(row.get("type", ""))
        except ValueError:
            continue
        by_type[meal_type] += row.get("calories", 0) or 0

    macro_calories = sum(totals[macro] * factor for macro, factor in MACRO_CALORIES.items())
    if macro_calories > 0:
        macro_breakdown = {
            f"{macro}_percent": round(totals[macro] * factor / macro_calories * 100, 1)
            for macro, factor in MACRO_CALORIES.items()
        }
    else:
        macro_breakdown = {f"{macro}_percent": 0 for macro in MACRO_CALORIES}

    def _percent(value: float, goal: float) -> float:
        return round(value / goal * 100, 1) if goal > 0 else 0.0

    return {
        "status": "success",
        "totals": totals,
        "meal_count": len(rows),
        "calories_by_meal_type": {k: round(v, 1) for k, v in by_type.items()},
        "macro_breakdown": macro_breakdown,
        "calorie_goal": calorie_goal,
        "protein_goal": protein_goal,
        "calorie_progress_percent": _percent(totals["calories"], calorie_goal),
        "protein_progress_percent": _percent(totals["protein"], protein_goal),
        "remaining_calories": round(max(calorie_goal - totals["calories"], 0), 1),
        "status_message": progress_message(totals["calories"], calorie_goal),
    }


# =============================================================================
# EXPORTS
# =============================================================================
__all__ = [
    "MEAL_AGENT_CONFIG",
    "tracking_day_start",
    "progress_message",
    "prepare_meal_items",
    "apply_classification",
    "build_meal_record",
    "calculate_meal_totals",
    "calculate_meal_nutrition",
    "group_daily_meal_stats",
    "summarize_daily_progress",
]
