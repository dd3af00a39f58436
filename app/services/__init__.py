"""Meal Planner API - Services Package."""

from .gemini import gemini_service, GeminiService
from .meal_planner import MealPlannerService, RequestStage
from .prompts import PromptMode, build_prompt, build_meal_plan_prompt, build_recipe_prompt
from .response_parser import sanitize, decode, find_plan_contract_violations
from .record_store import (
    RecordKind,
    RecordStore,
    StoredRecord,
    InMemoryRecordStore,
    MongoRecordStore,
    build_record_store,
)

__all__ = [
    "gemini_service",
    "GeminiService",
    "MealPlannerService",
    "RequestStage",
    "PromptMode",
    "build_prompt",
    "build_meal_plan_prompt",
    "build_recipe_prompt",
    "sanitize",
    "decode",
    "find_plan_contract_violations",
    "RecordKind",
    "RecordStore",
    "StoredRecord",
    "InMemoryRecordStore",
    "MongoRecordStore",
    "build_record_store",
]
