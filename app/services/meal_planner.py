"""
Meal Planner API - Request Orchestrator.

Wires prompt building, the Gemini call, sanitizing and decoding for each
generation endpoint. Each request runs start to finish with no retries
beyond what the generation service is configured for, and no
intermediate persistence.

Stages:
    BUILDING_PROMPT -> INVOKING -> SANITIZING -> DECODING -> SUCCEEDED | FAILED
"""

import json
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol

from settings import settings
from app.schemas.meal_plan import PlanRequest, RecipeRequest
from app.services.prompts import PromptMode, build_prompt, resolve_plan_mode
from app.services.response_parser import (
    decode,
    find_plan_contract_violations,
    find_recipe_contract_violations,
    sanitize,
)
from app.services.response_schema import MEAL_PLAN_SCHEMA, RECIPE_SCHEMA
from app.utils.errors import (
    ContractViolationError,
    DecodeError,
    GenerationError,
    MealPlannerException,
    ValidationError,
)

logger = logging.getLogger(__name__)


class RequestStage(Enum):
    """Orchestrator stage for a single request."""
    BUILDING_PROMPT = "building_prompt"
    INVOKING = "invoking"
    SANITIZING = "sanitizing"
    DECODING = "decoding"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class TextGenerator(Protocol):
    """Anything that turns a prompt into raw model text."""

    async def generate(
        self,
        prompt: str,
        model_id: Optional[str] = None,
        schema: Optional[Dict[str, Any]] = None
    ) -> str:
        ...


class MealPlannerService:
    """
    Generates meal plans and recipes through a text generator.

    Usage:
        planner = MealPlannerService(gemini_service)
        plan = await planner.generate_meal_plan(request)
    """

    def __init__(
        self,
        generator: TextGenerator,
        model_id: Optional[str] = None,
        use_response_schema: Optional[bool] = None,
        strict_plan_validation: Optional[bool] = None
    ):
        self.generator = generator
        self.model_id = model_id or settings.GEMINI_MODEL
        self.use_response_schema = (
            settings.GEMINI_USE_RESPONSE_SCHEMA if use_response_schema is None else use_response_schema
        )
        self.strict_plan_validation = (
            settings.STRICT_PLAN_VALIDATION if strict_plan_validation is None else strict_plan_validation
        )

    async def generate_meal_plan(self, request: PlanRequest) -> Dict[str, Any]:
        """
        Generate a meal plan document.

        Raises:
            GenerationError: The Gemini call failed.
            DecodeError: The response was not a JSON object.
            ContractViolationError: A meal entry is missing a mandatory
                field while strict validation is on.
        """
        mode = resolve_plan_mode(request)
        document = await self._run(
            endpoint="meal plan",
            mode=mode,
            request=request,
            schema=MEAL_PLAN_SCHEMA,
        )

        self._check_contract("meal plan", document, find_plan_contract_violations(document))

        logger.info(
            f"Meal plan generated: mode={mode.value}, days={len(document.get('meal_plan') or [])}, "
            f"shopping_list={'shopping_list' in document}"
        )
        return document

    async def generate_recipe(self, request: RecipeRequest) -> Dict[str, Any]:
        """
        Generate a single recipe document.

        Raises:
            ValidationError: Neither ``recipeRequest`` nor ``mealName`` was given.
            GenerationError: The Gemini call failed.
            DecodeError: The response was not a JSON object.
            ContractViolationError: The recipe has no name, ingredients or
                steps while strict validation is on.
        """
        document = await self._run(
            endpoint="recipe",
            mode=PromptMode.SINGLE_RECIPE,
            request=request,
            schema=RECIPE_SCHEMA,
        )
        self._check_contract("recipe", document, find_recipe_contract_violations(document))
        return document

    def _check_contract(self, endpoint: str, document: Dict[str, Any], violations: List[str]) -> None:
        if not violations:
            return
        logger.warning(f"{endpoint.capitalize()} breaks the field contract ({len(violations)} issues): {violations}")
        if self.strict_plan_validation:
            self._log_stage(endpoint, RequestStage.FAILED)
            raise ContractViolationError(
                raw_text=json.dumps(document),
                detail=f"Contract violations: {violations}"
            )

    def _validate(self, mode: PromptMode, request: Any) -> None:
        if mode == PromptMode.SINGLE_RECIPE and request.dish_identifier is None:
            raise ValidationError("Missing required field: recipeRequest or mealName")

    def _log_stage(self, endpoint: str, stage: RequestStage) -> None:
        logger.debug(f"[{endpoint}] -> {stage.name}")

    async def _run(
        self,
        endpoint: str,
        mode: PromptMode,
        request: Any,
        schema: Dict[str, Any]
    ) -> Dict[str, Any]:
        stage = RequestStage.BUILDING_PROMPT
        try:
            self._log_stage(endpoint, stage)
            self._validate(mode, request)
            prompt = build_prompt(mode, request)

            stage = RequestStage.INVOKING
            self._log_stage(endpoint, stage)
            try:
                raw_text = await self.generator.generate(
                    prompt,
                    model_id=self.model_id,
                    schema=schema if self.use_response_schema else None
                )
            except GenerationError as e:
                raise GenerationError(
                    message=f"Failed to generate {endpoint} due to a server error.",
                    detail=e.detail
                )
            except Exception as e:
                raise GenerationError(
                    message=f"Failed to generate {endpoint} due to a server error.",
                    detail=str(e)
                )

            stage = RequestStage.SANITIZING
            self._log_stage(endpoint, stage)
            cleaned = sanitize(raw_text)

            stage = RequestStage.DECODING
            self._log_stage(endpoint, stage)
            document = decode(cleaned)
        except DecodeError as e:
            self._log_stage(endpoint, RequestStage.FAILED)
            logger.error(
                f"Fatal Error: AI response for {endpoint} could not be parsed as JSON "
                f"({e.detail}). Response was: {e.raw_text!r}"
            )
            raise
        except MealPlannerException as e:
            self._log_stage(endpoint, RequestStage.FAILED)
            logger.error(f"{endpoint} request failed at {stage.name}: {e.detail}")
            raise

        self._log_stage(endpoint, RequestStage.SUCCEEDED)
        logger.debug(f"Backend sending JSON: {json.dumps(document, indent=2)}")
        return document
