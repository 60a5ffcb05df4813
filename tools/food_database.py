# tools/food_database.py
"""
CalorieBuddy AI — Local Food Database
=====================================
Hand-picked foods with calories and protein per 100 g (or 100 ml), used for
manual logging and as the no-AI calculation in the weight calculator.

Amounts scale linearly: nutrition = value per 100 x amount / 100.
"""

import math
from typing import Any, Dict, List, Optional

from tools.nutrition_models import MealRecord, NutritionEstimate

# =============================================================================
# CONFIGURATION
# =============================================================================
SEARCH_LIMIT = 10

# Tabulated values, not a guess
DATABASE_CONFIDENCE = 1.0


# =============================================================================
# FOOD DATABASE (values per 100 g / 100 ml)
# =============================================================================
FOOD_DATABASE = {
    # Indian Grains & Cereals
    "Basmati Rice (Cooked)": {"calories": 121, "protein": 2.5, "per": "100g"},
    "Brown Rice (Cooked)": {"calories": 111, "protein": 2.6, "per": "100g"},
    "Quinoa (Cooked)": {"calories": 120, "protein": 4.4, "per": "100g"},
    "Roti (Wheat)": {"calories": 104, "protein": 3.1, "per": "100g"},
    "Chapati": {"calories": 120, "protein": 3.5, "per": "100g"},
    "Naan": {"calories": 262, "protein": 9, "per": "100g"},
    "Paratha (Plain)": {"calories": 320, "protein": 8, "per": "100g"},
    "Dosa (Plain)": {"calories": 168, "protein": 4, "per": "100g"},
    "Idli": {"calories": 39, "protein": 2, "per": "100g"},
    "Poha": {"calories": 76, "protein": 2.6, "per": "100g"},
    "Upma": {"calories": 109, "protein": 3.2, "per": "100g"},
    "Bread (White)": {"calories": 265, "protein": 9, "per": "100g"},
    "Bread (Brown)": {"calories": 247, "protein": 13, "per": "100g"},
    "Oats": {"calories": 389, "protein": 17, "per": "100g"},
    "Cornflakes": {"calories": 378, "protein": 7.5, "per": "100g"},

    # Indian Vegetables
    "Aloo (Potato)": {"calories": 77, "protein": 2, "per": "100g"},
    "Gobi (Cauliflower)": {"calories": 25, "protein": 1.9, "per": "100g"},
    "Baingan (Eggplant)": {"calories": 25, "protein": 1, "per": "100g"},
    "Bhindi (Lady Finger)": {"calories": 33, "protein": 1.9, "per": "100g"},
    "Palak (Spinach)": {"calories": 23, "protein": 2.9, "per": "100g"},
    "Methi (Fenugreek)": {"calories": 49, "protein": 4.4, "per": "100g"},
    "Karela (Bitter Gourd)": {"calories": 17, "protein": 1, "per": "100g"},
    "Lauki (Bottle Gourd)": {"calories": 14, "protein": 0.6, "per": "100g"},
    "Tori (Ridge Gourd)": {"calories": 20, "protein": 1.2, "per": "100g"},
    "Shimla Mirch (Bell Pepper)": {"calories": 31, "protein": 1, "per": "100g"},
    "Pyaz (Onion)": {"calories": 40, "protein": 1.1, "per": "100g"},
    "Tamatar (Tomato)": {"calories": 18, "protein": 0.9, "per": "100g"},
    "Gajar (Carrot)": {"calories": 41, "protein": 0.9, "per": "100g"},
    "Muli (Radish)": {"calories": 16, "protein": 0.7, "per": "100g"},

    # International Vegetables
    "Broccoli": {"calories": 34, "protein": 2.8, "per": "100g"},
    "Brussels Sprouts": {"calories": 43, "protein": 3.4, "per": "100g"},
    "Cabbage": {"calories": 25, "protein": 1.3, "per": "100g"},
    "Lettuce": {"calories": 15, "protein": 1.4, "per": "100g"},
    "Cucumber": {"calories": 16, "protein": 0.7, "per": "100g"},
    "Zucchini": {"calories": 17, "protein": 1.2, "per": "100g"},
    "Asparagus": {"calories": 20, "protein": 2.2, "per": "100g"},
    "Celery": {"calories": 14, "protein": 0.7, "per": "100g"},
    "Sweet Potato": {"calories": 86, "protein": 1.6, "per": "100g"},
    "Mushrooms": {"calories": 22, "protein": 3.1, "per": "100g"},
    "Kale": {"calories": 49, "protein": 4.3, "per": "100g"},

    # Fruits
    "Mango": {"calories": 60, "protein": 0.8, "per": "100g"},
    "Banana": {"calories": 89, "protein": 1.1, "per": "100g"},
    "Apple": {"calories": 52, "protein": 0.3, "per": "100g"},
    "Orange": {"calories": 47, "protein": 0.9, "per": "100g"},
    "Grapes": {"calories": 62, "protein": 0.6, "per": "100g"},
    "Papaya": {"calories": 43, "protein": 0.5, "per": "100g"},
    "Pineapple": {"calories": 50, "protein": 0.5, "per": "100g"},
    "Guava": {"calories": 68, "protein": 2.6, "per": "100g"},
    "Watermelon": {"calories": 30, "protein": 0.6, "per": "100g"},
    "Strawberries": {"calories": 32, "protein": 0.7, "per": "100g"},
    "Blueberries": {"calories": 57, "protein": 0.7, "per": "100g"},
    "Pomegranate": {"calories": 83, "protein": 1.7, "per": "100g"},
    "Coconut": {"calories": 354, "protein": 3.3, "per": "100g"},
    "Dates": {"calories": 277, "protein": 1.8, "per": "100g"},

    # Legumes & Pulses
    "Dal (Lentils)": {"calories": 116, "protein": 9, "per": "100g"},
    "Moong Dal": {"calories": 347, "protein": 24, "per": "100g"},
    "Chana Dal": {"calories": 364, "protein": 22, "per": "100g"},
    "Toor Dal": {"calories": 343, "protein": 22, "per": "100g"},
    "Urad Dal": {"calories": 341, "protein": 25, "per": "100g"},
    "Rajma (Kidney Beans)": {"calories": 127, "protein": 8.7, "per": "100g"},
    "Chickpeas": {"calories": 164, "protein": 8.9, "per": "100g"},
    "Black Beans": {"calories": 132, "protein": 8.9, "per": "100g"},
    "Hummus": {"calories": 166, "protein": 8, "per": "100g"},

    # Protein Sources
    "Chicken Breast": {"calories": 165, "protein": 31, "per": "100g"},
    "Chicken Thigh": {"calories": 209, "protein": 26, "per": "100g"},
    "Fish (Salmon)": {"calories": 208, "protein": 25, "per": "100g"},
    "Fish (Tuna)": {"calories": 144, "protein": 30, "per": "100g"},
    "Prawns": {"calories": 99, "protein": 18, "per": "100g"},
    "Egg (Whole)": {"calories": 155, "protein": 13, "per": "100g"},
    "Egg White": {"calories": 17, "protein": 3.6, "per": "100g"},
    "Mutton": {"calories": 294, "protein": 25, "per": "100g"},
    "Beef": {"calories": 250, "protein": 26, "per": "100g"},

    # Dairy Products
    "Milk (Whole)": {"calories": 42, "protein": 3.4, "per": "100ml"},
    "Milk (Skimmed)": {"calories": 34, "protein": 3.4, "per": "100ml"},
    "Yogurt": {"calories": 98, "protein": 11, "per": "100g"},
    "Greek Yogurt": {"calories": 59, "protein": 10, "per": "100g"},
    "Paneer": {"calories": 265, "protein": 18, "per": "100g"},
    "Cottage Cheese": {"calories": 98, "protein": 11, "per": "100g"},
    "Cheddar Cheese": {"calories": 402, "protein": 25, "per": "100g"},
    "Butter": {"calories": 717, "protein": 0.9, "per": "100g"},
    "Ghee": {"calories": 900, "protein": 0, "per": "100g"},

    # Nuts & Seeds
    "Almonds": {"calories": 579, "protein": 21, "per": "100g"},
    "Walnuts": {"calories": 654, "protein": 15, "per": "100g"},
    "Cashews": {"calories": 553, "protein": 18, "per": "100g"},
    "Pistachios": {"calories": 560, "protein": 20, "per": "100g"},
    "Peanuts": {"calories": 567, "protein": 26, "per": "100g"},
    "Sunflower Seeds": {"calories": 584, "protein": 21, "per": "100g"},
    "Chia Seeds": {"calories": 486, "protein": 17, "per": "100g"},
    "Flax Seeds": {"calories": 534, "protein": 18, "per": "100g"},

    # Indian Snacks
    "Samosa": {"calories": 252, "protein": 6, "per": "100g"},
    "Pakora": {"calories": 300, "protein": 8, "per": "100g"},
    "Dhokla": {"calories": 160, "protein": 4, "per": "100g"},
    "Vada": {"calories": 220, "protein": 5, "per": "100g"},
    "Bhel Puri": {"calories": 168, "protein": 4, "per": "100g"},
    "Pani Puri": {"calories": 36, "protein": 1, "per": "100g"},

    # Fast Food
    "Pizza (Cheese)": {"calories": 285, "protein": 12, "per": "100g"},
    "Burger (Veg)": {"calories": 390, "protein": 16, "per": "100g"},
    "Burger (Chicken)": {"calories": 540, "protein": 25, "per": "100g"},
    "French Fries": {"calories": 365, "protein": 4, "per": "100g"},
    "Hot Dog": {"calories": 290, "protein": 10, "per": "100g"},
    "Sandwich (Veg)": {"calories": 240, "protein": 8, "per": "100g"},

    # Asian Cuisine
    "Fried Rice": {"calories": 163, "protein": 3, "per": "100g"},
    "Noodles (Hakka)": {"calories": 138, "protein": 5, "per": "100g"},
    "Chow Mein": {"calories": 198, "protein": 6, "per": "100g"},
    "Ramen": {"calories": 436, "protein": 10, "per": "100g"},
    "Maggi": {"calories": 435, "protein": 11, "per": "100g"},
    "Tofu": {"calories": 76, "protein": 8, "per": "100g"},
    "Kimchi": {"calories": 15, "protein": 1.1, "per": "100g"},
    "Sushi": {"calories": 200, "protein": 9, "per": "100g"},

    # Indian Main Dishes
    "Biryani (Chicken)": {"calories": 290, "protein": 12, "per": "100g"},
    "Biryani (Veg)": {"calories": 250, "protein": 6, "per": "100g"},
    "Butter Chicken": {"calories": 438, "protein": 24, "per": "100g"},
    "Chicken Curry": {"calories": 180, "protein": 20, "per": "100g"},
    "Tandoori Chicken": {"calories": 150, "protein": 27, "per": "100g"},
    "Palak Paneer": {"calories": 270, "protein": 14, "per": "100g"},
    "Shahi Paneer": {"calories": 300, "protein": 12, "per": "100g"},
    "Aloo Gobi": {"calories": 55, "protein": 2, "per": "100g"},
    "Chole": {"calories": 164, "protein": 8.9, "per": "100g"},

    # Beverages
    "Masala Chai": {"calories": 50, "protein": 2, "per": "100ml"},
    "Green Tea": {"calories": 2, "protein": 0, "per": "100ml"},
    "Coffee (Black)": {"calories": 2, "protein": 0.3, "per": "100ml"},
    "Coconut Water": {"calories": 19, "protein": 0.7, "per": "100ml"},
    "Orange Juice": {"calories": 45, "protein": 0.7, "per": "100ml"},
    "Lassi": {"calories": 89, "protein": 2.4, "per": "100ml"},
    "Soda": {"calories": 39, "protein": 0, "per": "100ml"},

    # Sweets & Desserts
    "Ice Cream": {"calories": 207, "protein": 3.5, "per": "100g"},
    "Dark Chocolate": {"calories": 546, "protein": 5, "per": "100g"},
    "Cookies": {"calories": 502, "protein": 5.9, "per": "100g"},
    "Cake": {"calories": 257, "protein": 4, "per": "100g"},
    "Gulab Jamun": {"calories": 387, "protein": 4, "per": "100g"},
    "Jalebi": {"calories": 150, "protein": 1, "per": "100g"},
    "Kheer": {"calories": 97, "protein": 3.5, "per": "100g"},

    # Oils & Condiments
    "Olive Oil": {"calories": 884, "protein": 0, "per": "100g"},
    "Coconut Oil": {"calories": 862, "protein": 0, "per": "100g"},
    "Honey": {"calories": 304, "protein": 0.3, "per": "100g"},
    "Sugar": {"calories": 387, "protein": 0, "per": "100g"},

    # Green Vegetables
    "Green Beans": {"calories": 31, "protein": 1.8, "per": "100g"},
    "Green Peas": {"calories": 81, "protein": 5.4, "per": "100g"},
    "Green Chilies": {"calories": 40, "protein": 1.9, "per": "100g"},
    "Mint Leaves": {"calories": 44, "protein": 3.3, "per": "100g"},
    "Coriander Leaves": {"calories": 23, "protein": 2.1, "per": "100g"},
    "Basil": {"calories": 22, "protein": 3.2, "per": "100g"},
    "Parsley": {"calories": 36, "protein": 3, "per": "100g"},

    # Additional International Foods
    "Pasta (Cooked)": {"calories": 131, "protein": 5, "per": "100g"},
    "Spaghetti": {"calories": 158, "protein": 6, "per": "100g"},
    "Bagel": {"calories": 250, "protein": 10, "per": "100g"},
    "Croissant": {"calories": 231, "protein": 4.7, "per": "100g"},
    "Pancakes": {"calories": 227, "protein": 6, "per": "100g"},
    "Waffles": {"calories": 291, "protein": 6, "per": "100g"},
    "Cereal": {"calories": 379, "protein": 8, "per": "100g"},

    # More Protein Rich Foods
    "Turkey": {"calories": 189, "protein": 29, "per": "100g"},
    "Duck": {"calories": 337, "protein": 19, "per": "100g"},
    "Lamb": {"calories": 294, "protein": 25, "per": "100g"},
    "Sardines": {"calories": 208, "protein": 25, "per": "100g"},
    "Mackerel": {"calories": 205, "protein": 19, "per": "100g"},
    "Crab": {"calories": 97, "protein": 19, "per": "100g"},
    "Lobster": {"calories": 89, "protein": 19, "per": "100g"},

    # More Fruits
    "Kiwi": {"calories": 61, "protein": 1.1, "per": "100g"},
    "Cherries": {"calories": 63, "protein": 1.1, "per": "100g"},
    "Peach": {"calories": 39, "protein": 0.9, "per": "100g"},
    "Plum": {"calories": 46, "protein": 0.7, "per": "100g"},
    "Apricot": {"calories": 48, "protein": 1.4, "per": "100g"},
    "Cranberries": {"calories": 46, "protein": 0.4, "per": "100g"},
    "Blackberries": {"calories": 43, "protein": 1.4, "per": "100g"},
    "Raspberries": {"calories": 52, "protein": 1.2, "per": "100g"},

    # International Snacks
    "Pretzels": {"calories": 380, "protein": 10, "per": "100g"},
    "Popcorn": {"calories": 387, "protein": 12, "per": "100g"},
    "Chips": {"calories": 536, "protein": 7, "per": "100g"},
    "Nachos": {"calories": 346, "protein": 9, "per": "100g"},
    "Crackers": {"calories": 503, "protein": 9, "per": "100g"},

    # More Asian Foods
    "Soy Milk": {"calories": 33, "protein": 2.9, "per": "100ml"},
    "Miso Soup": {"calories": 84, "protein": 6, "per": "100g"},
    "Edamame": {"calories": 121, "protein": 11, "per": "100g"},
    "Wasabi": {"calories": 109, "protein": 4.6, "per": "100g"},
    "Seaweed": {"calories": 45, "protein": 3, "per": "100g"},

    # Mexican/Latin Foods
    "Tacos": {"calories": 226, "protein": 9, "per": "100g"},
    "Burrito": {"calories": 314, "protein": 16, "per": "100g"},
    "Quesadilla": {"calories": 276, "protein": 13, "per": "100g"},
    "Avocado": {"calories": 160, "protein": 2, "per": "100g"},
    "Salsa": {"calories": 18, "protein": 0.9, "per": "100g"},

    # More Dairy Alternatives
    "Almond Milk": {"calories": 17, "protein": 0.6, "per": "100ml"},
    "Oat Milk": {"calories": 47, "protein": 1, "per": "100ml"},
    "Rice Milk": {"calories": 47, "protein": 0.3, "per": "100ml"},

    # Additional Breakfast Items
    "Granola": {"calories": 471, "protein": 13, "per": "100g"},
    "French Toast": {"calories": 166, "protein": 7, "per": "100g"},
    "Smoothie Bowl": {"calories": 89, "protein": 3, "per": "100g"},

    # More Cooked Items
    "Grilled Vegetables": {"calories": 35, "protein": 2, "per": "100g"},
    "Stir Fry": {"calories": 112, "protein": 4, "per": "100g"},
    "Soup (Vegetable)": {"calories": 48, "protein": 2, "per": "100g"},
    "Salad (Mixed)": {"calories": 20, "protein": 1.5, "per": "100g"},
}


# =============================================================================
# LOOKUP
# =============================================================================
def _entry(name: str) -> Dict[str, Any]:
    return {"name": name, **FOOD_DATABASE[name]}


def search_foods(query: Optional[str] = None, limit: int = SEARCH_LIMIT) -> List[Dict[str, Any]]:
    """
    Case-insensitive substring search over food names.

    Args:
        query: Part of a food name, e.g. "paneer". Empty returns the first foods.
        limit: Maximum number of results (10 by default).

    Returns:
        [{"name", "calories", "protein", "per"}] in database order.
    """
    needle = (query or "").strip().lower()
    matches = [name for name in FOOD_DATABASE if needle in name.lower()]
    return [_entry(name) for name in matches[:max(limit, 0)]]


def get_food(name: str) -> Optional[Dict[str, Any]]:
    """Exact (case-insensitive) lookup, or None."""
    wanted = (name or "").strip().lower()
    for food_name in FOOD_DATABASE:
        if food_name.lower() == wanted:
            return _entry(food_name)
    return None


def _require_food(name: str) -> Dict[str, Any]:
    food = get_food(name)
    if food is None:
        raise KeyError(f"'{name}' is not in the food database")
    return food


def _require_amount(amount: float) -> float:
    amount = float(amount)
    if not math.isfinite(amount) or amount <= 0:
        raise ValueError("amount must be a positive number")
    return amount


# =============================================================================
# MAIN TOOLS
# =============================================================================
def scale_nutrition(food_name: str, amount: float) -> NutritionEstimate:
    """
    Nutrition for `amount` grams (or ml) of a database food.

    Calories are rounded to whole kcal, protein to 0.1 g. The database only
    carries calories and protein, so the other macros are 0.

    Raises:
        KeyError: unknown food
        ValueError: amount not a positive finite number

    Example:
        >>> scale_nutrition("Paneer", 150).calories
        398.0
    """
    food = _require_food(food_name)
    amount = _require_amount(amount)
    multiplier = amount / 100

    return NutritionEstimate(
        calories=float(round(food["calories"] * multiplier)),
        protein=round(food["protein"] * multiplier, 1),
        carbs=0.0,
        fat=0.0,
        fiber=0.0,
        confidence=DATABASE_CONFIDENCE,
    )


def build_database_record(food_name: str, amount: float, meal_type: str = "breakfast") -> MealRecord:
    """Manual log entry: database food scaled to the amount eaten."""
    food = _require_food(food_name)
    estimate = scale_nutrition(food["name"], amount)
    print(f"📒 Food Database: {food['name']} x {amount} -> {estimate.calories} kcal")

    return MealRecord(
        name=food["name"],
        calories=estimate.calories,
        protein=estimate.protein,
        type=meal_type,
        weight=float(amount),
        ai_enhanced=False,
    )


__all__ = [
    "FOOD_DATABASE",
    "SEARCH_LIMIT",
    "search_foods",
    "get_food",
    "scale_nutrition",
    "build_database_record",
]
