# app/routes/meal_plan.py
"""Meal Planner API - Generation Routes."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from app.dependencies import get_meal_planner
from app.schemas.meal_plan import PlanRequest, RecipeRequest
from app.services.meal_planner import MealPlannerService

router = APIRouter()


@router.post("/generate-plan")
async def generate_meal_plan(
    request: PlanRequest,
    planner: MealPlannerService = Depends(get_meal_planner)
) -> Dict[str, Any]:
    """
    Generate a meal plan.

    Blank ``ingredientsText`` plans from scratch and adds a shopping list;
    otherwise the plan prioritizes the given ingredients. Returns the
    decoded document exactly as the model produced it.
    """
    return await planner.generate_meal_plan(request)


@router.post("/generate-recipe")
async def generate_recipe(
    request: RecipeRequest,
    planner: MealPlannerService = Depends(get_meal_planner)
) -> Dict[str, Any]:
    """Generate a single recipe from a ``recipeRequest`` or ``mealName``."""
    return await planner.generate_recipe(request)
