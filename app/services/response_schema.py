"""
Meal Planner API - Gemini Response Schemas.

Static response schemas handed to Gemini in JSON mode so the model is
forced to emit the documents described in ``app.schemas.meal_plan``.
Types use the Gemini OpenAPI subset ("OBJECT", "ARRAY", "STRING").

The prompt builder renders the same ``MEAL_ENTRY_REQUIRED_FIELDS`` tuple, so
the textual contract and the schema cannot drift apart.
"""

from typing import Any, Dict

from app.schemas.meal_plan import MealType


MEAL_ENTRY_REQUIRED_FIELDS = ("title", "instructions", "ingredientsUsed", "missingIngredients")

_STRING_LIST = {"type": "ARRAY", "items": {"type": "STRING"}}


MEAL_ENTRY_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING"},
        "instructions": {
            **_STRING_LIST,
            "description": "Detailed step-by-step instructions. Must not be empty.",
        },
        "ingredientsUsed": _STRING_LIST,
        "missingIngredients": {
            **_STRING_LIST,
            "description": "Ingredients the user still needs. Can be empty.",
        },
    },
    "required": list(MEAL_ENTRY_REQUIRED_FIELDS),
}

DAY_PLAN_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "day": {"type": "STRING"},
        **{meal_type.slot: MEAL_ENTRY_SCHEMA for meal_type in MealType},
    },
    "required": ["day"],
}

MEAL_PLAN_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "shopping_list": {
            **_STRING_LIST,
            "description": "A list of ingredients the user needs to buy. Can be empty.",
        },
        "meal_plan": {"type": "ARRAY", "items": DAY_PLAN_SCHEMA},
    },
    "required": ["meal_plan"],
}

RECIPE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "name": {"type": "STRING"},
        "description": {"type": "STRING"},
        "ingredients": _STRING_LIST,
        "instructions": _STRING_LIST,
        "shopping_list": {
            **_STRING_LIST,
            "description": "Ingredients the user needs to buy. Can be empty.",
        },
    },
    "required": ["name", "ingredients", "instructions"],
}
