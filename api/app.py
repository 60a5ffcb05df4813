"""
CalorieBuddy AI — FastAPI Backend
=================================
HTTP surface for the meal pipeline: unit classification, meal parsing,
nutrition estimation, the local food database, image recognition, daily
stats and food suggestions.

Endpoints that call an AI provider are plain `def` so FastAPI runs them in
its threadpool.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from fastapi import FastAPI, File, Form, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator
import uvicorn

from dotenv import load_dotenv
load_dotenv()

# =============================================================================
# IMPORTS: Agents & Tools
# =============================================================================
from agents.meal_agent import (
    MEAL_AGENT_CONFIG,
    calculate_meal_nutrition,
    group_daily_meal_stats,
    prepare_meal_items,
    summarize_daily_progress,
)
from tools import gemini_client, openai_estimator
from tools.food_database import SEARCH_LIMIT, build_database_record, search_foods
from tools.image_recognizer import ImageRecognitionError, recognize_food_image
from tools.nutrition_estimator import estimate_nutrition, refresh_nutrition_estimate
from tools.nutrition_models import (
    ClassifiedFoodItem,
    FoodQuery,
    MealCalculation,
    MealRecord,
    NutritionEstimate,
    QuickEstimate,
    UnitClassification,
    normalize_meal_type,
)
from tools.openai_estimator import quick_estimate
from tools.suggestion_notifier import NOTIFIER_CONFIG, submit_food_suggestion
from tools.unit_classifier import classify

API_VERSION = "1.0.0"
API_PORT = int(os.getenv("CALORIEBUDDY_API_PORT", "8000"))


# =============================================================================
# PYDANTIC MODELS
# =============================================================================
class ClassifyRequest(BaseModel):
    food_name: str = Field(..., min_length=1)
    variant: str = "standard"


class ParseMealRequest(BaseModel):
    description: str
    variant: str = "standard"


class ParseMealResponse(BaseModel):
    items: List[ClassifiedFoodItem]


class QuickEstimateRequest(BaseModel):
    text: str = Field(..., min_length=1)


class MealCalculateRequest(BaseModel):
    meal_type: str = "breakfast"
    items: List[FoodQuery]

    @field_validator("meal_type")
    @classmethod
    def check_meal_type(cls, value: str) -> str:
        return normalize_meal_type(value)


class StoredMeal(BaseModel):
    calories: float = 0
    protein: float = 0
    created_at: datetime


class DailyStatsRequest(BaseModel):
    meals: List[StoredMeal] = Field(default_factory=list)
    days: int = Field(MEAL_AGENT_CONFIG["default_days"], ge=1, le=366)


class DailySummaryRequest(BaseModel):
    records: List[MealRecord] = Field(default_factory=list)
    calorie_goal: float = Field(MEAL_AGENT_CONFIG["calorie_goal"], gt=0)
    protein_goal: float = Field(MEAL_AGENT_CONFIG["protein_goal"], gt=0)


class DatabaseLogRequest(BaseModel):
    food_name: str = Field(..., min_length=1)
    amount: float = Field(100, gt=0, allow_inf_nan=False)
    meal_type: str = "breakfast"

    @field_validator("meal_type")
    @classmethod
    def check_meal_type(cls, value: str) -> str:
        return normalize_meal_type(value)


class ImageRecognitionResponse(BaseModel):
    description: str
    items: List[ClassifiedFoodItem]


class SuggestionRequest(BaseModel):
    food_name: str = ""
    comment: Optional[str] = None


# =============================================================================
# APP SETUP
# =============================================================================
app = FastAPI(
    title="CalorieBuddy AI API",
    version=API_VERSION,
    description="Meal logging and AI nutrition estimation backend"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def provider_status() -> Dict[str, bool]:
    return {
        "gemini": gemini_client.CLIENT is not None,
        "openai": openai_estimator.CLIENT is not None,
        "suggestions": bool(NOTIFIER_CONFIG["webhook_url"]),
    }


# =============================================================================
# ENDPOINTS
# =============================================================================

# -----------------------------------------------------------------------------
# Health & Root
# -----------------------------------------------------------------------------
@app.get("/")
async def root():
    """Root endpoint for health checking."""
    return {
        "status": "online",
        "system": "CalorieBuddy AI",
        "version": API_VERSION,
        "docs": "/docs",
    }


@app.get("/api/v1/health")
async def api_health():
    """Detailed health check endpoint."""
    return {
        "status": "online",
        "providers": provider_status(),
        "timestamp": datetime.now().isoformat()
    }


# -----------------------------------------------------------------------------
# Units & Parsing
# -----------------------------------------------------------------------------
@app.post("/api/v1/foods/classify", response_model=UnitClassification)
async def classify_food(request: ClassifyRequest):
    try:
        return classify(request.food_name, request.variant)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/api/v1/foods/search")
async def search_food_database(q: str = "", limit: int = Query(SEARCH_LIMIT, ge=1, le=100)):
    """Substring search over the local food database (values per 100 g/ml)."""
    return {"status": "success", "foods": search_foods(q, limit=limit)}


@app.post("/api/v1/foods/log", response_model=MealRecord)
async def log_database_food(request: DatabaseLogRequest):
    """Manual entry: a database food scaled to the amount eaten."""
    try:
        return build_database_record(request.food_name, request.amount, request.meal_type)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=e.args[0])


@app.post("/api/v1/meals/parse", response_model=ParseMealResponse)
def parse_meal(request: ParseMealRequest):
    """Split a description into items, each with its default unit."""
    try:
        items = prepare_meal_items(request.description, variant=request.variant)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"items": items}


# -----------------------------------------------------------------------------
# Nutrition
# -----------------------------------------------------------------------------
@app.post("/api/v1/nutrition/estimate", response_model=NutritionEstimate)
def estimate_food(query: FoodQuery):
    return estimate_nutrition(query.name, query.quantity, query.unit)


@app.post("/api/v1/nutrition/refresh", response_model=NutritionEstimate)
def refresh_food(query: FoodQuery):
    """Re-estimate after a quantity/unit edit: one retry, then fallback."""
    return refresh_nutrition_estimate(query.name, query.quantity, query.unit)


@app.post("/api/v1/nutrition/quick-estimate", response_model=QuickEstimate)
def quick_estimate_meal(request: QuickEstimateRequest):
    return quick_estimate(request.text)


# -----------------------------------------------------------------------------
# Meals & Progress
# -----------------------------------------------------------------------------
@app.post("/api/v1/meals/calculate", response_model=MealCalculation)
def calculate_meal(request: MealCalculateRequest):
    print(f"\n🍽️ MEAL CALCULATION: {len(request.items)} item(s) for {request.meal_type}")
    return calculate_meal_nutrition(request.items, meal_type=request.meal_type)


@app.post("/api/v1/meals/daily-stats")
async def daily_stats(request: DailyStatsRequest):
    meals = [meal.model_dump() for meal in request.meals]
    return {
        "status": "success",
        "days": group_daily_meal_stats(meals, days=request.days),
    }


@app.post("/api/v1/meals/summary")
async def daily_summary(request: DailySummaryRequest):
    return summarize_daily_progress(
        request.records,
        calorie_goal=request.calorie_goal,
        protein_goal=request.protein_goal,
    )


# -----------------------------------------------------------------------------
# Image Recognition
# -----------------------------------------------------------------------------
@app.post("/api/v1/images/recognize", response_model=ImageRecognitionResponse)
def recognize_image(
    image: UploadFile = File(...),
    variant: str = Form("standard"),
):
    """Describe the food in a photo, then split it into classified items."""
    image_bytes = image.file.read()
    print(f"📸 Processing image: {image.filename} ({len(image_bytes)} bytes)")

    try:
        description = recognize_food_image(image_bytes, mime_type=image.content_type)
    except ImageRecognitionError as e:
        raise HTTPException(status_code=502, detail=str(e))

    try:
        items = prepare_meal_items(description, variant=variant)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"description": description, "items": items}


# -----------------------------------------------------------------------------
# Suggestions
# -----------------------------------------------------------------------------
@app.post("/api/v1/suggestions")
def suggest_food(request: SuggestionRequest):
    if not request.food_name.strip():
        raise HTTPException(status_code=400, detail="Food name is required")

    result = submit_food_suggestion(request.food_name, request.comment)
    if result["status"] != "success":
        raise HTTPException(status_code=502, detail=result["error_message"])
    return result


# =============================================================================
# MAIN
# =============================================================================
if __name__ == "__main__":
    status = provider_status()
    print("\n" + "=" * 50)
    print(f"🚀 CALORIEBUDDY AI API v{API_VERSION}")
    print("=" * 50)
    print(f"📊 Providers Status:")
    print(f"   • Gemini:      {'✅' if status['gemini'] else '❌'}")
    print(f"   • OpenAI:      {'✅' if status['openai'] else '❌'}")
    print(f"   • Suggestions: {'✅' if status['suggestions'] else '❌'}")
    print("=" * 50)
    print(f"🔗 API Docs: http://localhost:{API_PORT}/docs")
    print("=" * 50 + "\n")

    uvicorn.run(app, host="0.0.0.0", port=API_PORT)
