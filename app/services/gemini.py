"""
Meal Planner API - Gemini AI Service.

Thin async wrapper around the google-genai client. Returns raw model text;
sanitizing and decoding happen in the orchestrator.
"""

import asyncio
import logging
from typing import Optional, Dict, Any

from google import genai

from settings import settings
from app.utils.errors import GenerationError


logger = logging.getLogger(__name__)


class GeminiService:
    """
    Gemini API service for plan and recipe generation.

    Usage:
        text = await gemini_service.generate(prompt, schema=MEAL_PLAN_SCHEMA)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        max_retries: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
        client: Optional[Any] = None
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Gemini API key (defaults to settings).
            model_name: Default model id (defaults to settings).
            max_retries: Extra attempts after a failure (defaults to settings).
            timeout_seconds: Per-call timeout (defaults to settings).
            client: Pre-built client, mainly for tests.
        """
        self.api_key = api_key or settings.GEMINI_API_KEY
        self.model_name = model_name or settings.GEMINI_MODEL
        self.max_retries = settings.GEMINI_MAX_RETRIES if max_retries is None else max_retries
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else settings.GEMINI_TIMEOUT_SECONDS
        if client is not None:
            self.client = client
        elif self.api_key:
            self.client = genai.Client(api_key=self.api_key)
        else:
            self.client = None

    def _build_config(self, schema: Optional[Dict[str, Any]]):
        if schema is None:
            return None
        return genai.types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=schema
        )

    def _generate_sync(self, model_id: str, prompt: str, schema: Optional[Dict[str, Any]]) -> str:
        config = self._build_config(schema)
        if config is None:
            response = self.client.models.generate_content(model=model_id, contents=prompt)
        else:
            response = self.client.models.generate_content(
                model=model_id,
                contents=prompt,
                config=config
            )
        return response.text or ""

    async def _attempt(self, model_id: str, prompt: str, schema: Optional[Dict[str, Any]]) -> str:
        call = asyncio.to_thread(self._generate_sync, model_id, prompt, schema)
        if self.timeout_seconds:
            return await asyncio.wait_for(call, timeout=self.timeout_seconds)
        return await call

    async def generate(
        self,
        prompt: str,
        model_id: Optional[str] = None,
        schema: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Run one generation call and return the raw text.

        Args:
            prompt: Instruction text.
            model_id: Model to use (defaults to the configured model).
            schema: Optional response schema; enables JSON mode.

        Returns:
            Raw model text, ``""`` when the model returned nothing.

        Raises:
            GenerationError: Missing API key, timeout, or service error
                after the configured number of attempts.
        """
        if not self.client:
            logger.error("Gemini API key not configured")
            raise GenerationError(detail="Gemini API key not configured")

        model_id = model_id or self.model_name
        attempts = self.max_retries + 1

        for attempt in range(attempts):
            try:
                logger.info(f"Calling {model_id} (attempt {attempt + 1}/{attempts}, schema={'yes' if schema else 'no'})")
                return await self._attempt(model_id, prompt, schema)
            except asyncio.TimeoutError:
                error = f"Gemini call timed out after {self.timeout_seconds}s"
            except Exception as e:
                error = f"Gemini call failed: {e}"

            logger.error(f"{error} (attempt {attempt + 1}/{attempts})")
            if attempt < attempts - 1:
                await asyncio.sleep(2 ** attempt)  # Exponential backoff

        raise GenerationError(detail=error)


# Global Gemini service instance
gemini_service = GeminiService()
