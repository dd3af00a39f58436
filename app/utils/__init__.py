"""Meal Planner API - Utilities Package."""

from app.utils.errors import (
    MealPlannerException,
    ValidationError,
    NotFoundError,
    GenerationError,
    DecodeError,
    ContractViolationError,
    RecordStoreError,
)

__all__ = [
    "MealPlannerException",
    "ValidationError",
    "NotFoundError",
    "GenerationError",
    "DecodeError",
    "ContractViolationError",
    "RecordStoreError",
]
