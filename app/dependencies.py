"""
Meal Planner API - FastAPI Dependencies.

Dependency injection helpers for routes. Tests override ``get_generator``
and ``get_record_store`` to swap in fakes.
"""

from fastapi import Depends

from settings import settings
from app.services.gemini import gemini_service
from app.services.meal_planner import MealPlannerService, TextGenerator
from app.services.record_store import RecordStore, build_record_store


record_store = build_record_store(settings.RECORD_STORE_BACKEND)


def get_generator() -> TextGenerator:
    """
    Get the generation service used for plans and recipes.

    Returns:
        TextGenerator: The shared Gemini service.
    """
    return gemini_service


def get_record_store() -> RecordStore:
    """
    Get the record store for saved plans and favorites.

    Returns:
        RecordStore: The configured backend.
    """
    return record_store


def get_meal_planner(
    generator: TextGenerator = Depends(get_generator)
) -> MealPlannerService:
    """
    Build the request orchestrator around the current generator.

    Args:
        generator: Text generator from ``get_generator``.

    Returns:
        MealPlannerService: Orchestrator configured from settings.
    """
    return MealPlannerService(generator)
