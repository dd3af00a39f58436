"""
Meal Planner API - Saved Plan and Favorite Schemas.

The payloads are opaque JSON; only the envelope is typed.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SavePlanRequest(BaseModel):
    """Request to save a generated meal plan."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    meal_plan: Optional[Any] = Field(None, description="Meal plan document to store")


class AddFavoriteRequest(BaseModel):
    """Request to store a favorite meal."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    meal_data: Optional[Any] = Field(None, description="Meal entry to store")


class RemoveFavoriteRequest(BaseModel):
    """Request to delete a favorite meal by id."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    meal_id: Optional[int] = Field(None, description="Id of the favorite to remove")


class StoredRecordResponse(BaseModel):
    """A stored record with its decoded payload."""

    id: int
    payload: Any
    created_at: datetime


class RecordSavedResponse(BaseModel):
    message: str
    id: int
