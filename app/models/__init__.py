"""
Meal Planner API - MongoDB Models Package.

Export all Beanie ODM models for MongoDB operations.
"""

from app.models.mongodb import (
    SavedPlanDocument,
    FavoriteMealDocument,
    CounterDocument,
    DOCUMENT_MODELS,
)

__all__ = [
    "SavedPlanDocument",
    "FavoriteMealDocument",
    "CounterDocument",
    "DOCUMENT_MODELS",
]
