"""Meal Planner API - Pydantic Schemas Package."""

from app.schemas.meal_plan import (
    MealType,
    PlanRequest,
    RecipeRequest,
    MealEntry,
    DayPlan,
    MealPlanDocument,
    RecipeDocument,
)
from app.schemas.records import (
    SavePlanRequest,
    AddFavoriteRequest,
    RemoveFavoriteRequest,
    StoredRecordResponse,
    RecordSavedResponse,
)

__all__ = [
    # Generation
    "MealType",
    "PlanRequest",
    "RecipeRequest",
    "MealEntry",
    "DayPlan",
    "MealPlanDocument",
    "RecipeDocument",
    # Records
    "SavePlanRequest",
    "AddFavoriteRequest",
    "RemoveFavoriteRequest",
    "StoredRecordResponse",
    "RecordSavedResponse",
]
