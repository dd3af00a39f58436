# app/routes/favorites.py
"""Meal Planner API - Favorite Meal Routes."""

import logging
from typing import List

from fastapi import APIRouter, Depends

from app.dependencies import get_record_store
from app.schemas.records import (
    AddFavoriteRequest,
    RecordSavedResponse,
    RemoveFavoriteRequest,
    StoredRecordResponse,
)
from app.services.record_store import RecordKind, RecordStore
from app.utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/add-favorite", response_model=RecordSavedResponse)
async def add_favorite(
    request: AddFavoriteRequest,
    store: RecordStore = Depends(get_record_store)
):
    """Store a meal as a favorite."""
    if request.meal_data is None:
        raise ValidationError("Missing required field: mealData")

    record = await store.insert(RecordKind.FAVORITE, request.meal_data)
    logger.info(f"Added favorite meal {record.id}")
    return {"message": "Meal added to favorites.", "id": record.id}


@router.post("/remove-favorite")
async def remove_favorite(
    request: RemoveFavoriteRequest,
    store: RecordStore = Depends(get_record_store)
):
    """Remove a favorite meal by id."""
    if request.meal_id is None:
        raise ValidationError("Missing required field: mealId")

    if not await store.delete(RecordKind.FAVORITE, request.meal_id):
        raise NotFoundError(f"Favorite meal {request.meal_id} not found")

    logger.info(f"Removed favorite meal {request.meal_id}")
    return {"message": "Meal removed from favorites."}


@router.get("/favorites", response_model=List[StoredRecordResponse])
async def list_favorites(
    store: RecordStore = Depends(get_record_store)
):
    """List favorite meals, newest first."""
    records = await store.select_all(RecordKind.FAVORITE)
    return [record.to_dict() for record in records]
