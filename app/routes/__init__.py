"""Meal Planner API - Routes Package."""

from app.routes import (
    meal_plan,
    saved_plans,
    favorites,
)

__all__ = [
    "meal_plan",
    "saved_plans",
    "favorites",
]
