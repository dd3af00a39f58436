# app/routes/saved_plans.py
"""Meal Planner API - Saved Plan Routes."""

import logging
from typing import List

from fastapi import APIRouter, Depends

from app.dependencies import get_record_store
from app.schemas.records import RecordSavedResponse, SavePlanRequest, StoredRecordResponse
from app.services.record_store import RecordKind, RecordStore
from app.utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/save-plan", response_model=RecordSavedResponse)
async def save_plan(
    request: SavePlanRequest,
    store: RecordStore = Depends(get_record_store)
):
    """Save a generated meal plan."""
    if request.meal_plan is None:
        raise ValidationError("Missing required field: mealPlan")

    record = await store.insert(RecordKind.PLAN, request.meal_plan)
    logger.info(f"Saved meal plan {record.id}")
    return {"message": "Meal plan saved successfully.", "id": record.id}


@router.get("/saved-plans", response_model=List[StoredRecordResponse])
async def list_saved_plans(
    store: RecordStore = Depends(get_record_store)
):
    """List saved meal plans, newest first."""
    records = await store.select_all(RecordKind.PLAN)
    return [record.to_dict() for record in records]


@router.delete("/saved-plans/{plan_id}")
async def delete_saved_plan(
    plan_id: int,
    store: RecordStore = Depends(get_record_store)
):
    """Delete a saved meal plan."""
    if not await store.delete(RecordKind.PLAN, plan_id):
        raise NotFoundError(f"Saved plan {plan_id} not found")

    logger.info(f"Deleted meal plan {plan_id}")
    return {"message": "Meal plan deleted successfully."}
