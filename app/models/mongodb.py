# app/models/mongodb.py
"""
Meal Planner MongoDB Document Models.

Beanie ODM models for saved plans and favorite meals. Payloads are stored
as serialized JSON strings and decoded on read.
"""

from beanie import Document
from pydantic import Field
from pymongo import ASCENDING, IndexModel
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SavedPlanDocument(Document):
    """Saved meal plan."""

    record_id: int
    payload: str
    created_at: datetime = Field(default_factory=_utcnow)

    class Settings:
        name = "saved_plans"
        indexes = [
            "record_id",
        ]


class FavoriteMealDocument(Document):
    """Favorite meal."""

    record_id: int
    payload: str
    created_at: datetime = Field(default_factory=_utcnow)

    class Settings:
        name = "favorite_meals"
        indexes = [
            "record_id",
        ]


class CounterDocument(Document):
    """Integer id sequence per record kind."""

    name: str
    seq: int = 0

    class Settings:
        name = "counters"
        indexes = [
            IndexModel([("name", ASCENDING)], unique=True),
        ]


DOCUMENT_MODELS = [SavedPlanDocument, FavoriteMealDocument, CounterDocument]
