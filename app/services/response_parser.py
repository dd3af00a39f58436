"""
Meal Planner API - Response Sanitizer and Decoder.

Reduces raw model text to a JSON document. The model sometimes wraps its
JSON in markdown code fences even in JSON mode.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from app.schemas.meal_plan import MealPlanDocument, RecipeDocument
from app.utils.errors import DecodeError

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```(?:json)?", re.IGNORECASE)
_FENCE_CLOSE = "```"


def sanitize(text: Optional[str]) -> str:
    """
    Strip surrounding whitespace and code fences from model output.

    Total and idempotent: ``None`` or empty input gives ``""`` and the result
    never starts or ends with a fence marker.
    """
    if not text:
        return ""

    cleaned = text.strip()
    while True:
        previous = cleaned
        match = _FENCE_OPEN.match(cleaned)
        if match:
            cleaned = cleaned[match.end():].lstrip()
        if cleaned.endswith(_FENCE_CLOSE):
            cleaned = cleaned[:-len(_FENCE_CLOSE)].rstrip()
        if cleaned == previous:
            return cleaned


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def strict_loads(text: str) -> Any:
    """``json.loads`` that rejects ``NaN``, ``Infinity`` and ``-Infinity``."""
    return json.loads(text, parse_constant=_reject_constant)


def decode(text: str) -> Dict[str, Any]:
    """
    Parse sanitized text as a JSON object.

    Strict JSON: the ``NaN`` and ``Infinity`` literals Python would accept
    are rejected.

    Raises:
        DecodeError: The text is not valid JSON or not a JSON object. The
            offending text is kept on the exception for logging.
    """
    try:
        document = strict_loads(text)
    except (ValueError, TypeError) as e:
        raise DecodeError(raw_text=text, detail=f"JSON parsing error: {e}")

    if not isinstance(document, dict):
        raise DecodeError(
            raw_text=text,
            detail=f"Expected a JSON object, got {type(document).__name__}"
        )
    return document


def _validation_messages(error: PydanticValidationError) -> List[str]:
    return [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    ]


def find_plan_contract_violations(document: Dict[str, Any]) -> List[str]:
    """
    Check a decoded meal plan against the mandatory-field contract.

    Returns a list of human-readable violations (empty when the plan is
    well formed): days without any meal, meals missing a mandatory field,
    meals with empty instructions.
    """
    try:
        plan = MealPlanDocument.model_validate(document)
    except PydanticValidationError as e:
        return _validation_messages(e)

    violations = []
    for index, day in enumerate(plan.meal_plan):
        if not day.meals():
            violations.append(f"meal_plan.{index}: day '{day.day}' has no meals")
    return violations


def find_recipe_contract_violations(document: Dict[str, Any]) -> List[str]:
    """Check a decoded recipe for a name, ingredients and at least one step."""
    try:
        RecipeDocument.model_validate(document)
    except PydanticValidationError as e:
        return _validation_messages(e)
    return []
