"""Shared fixtures: fake generator, in-memory record store, test client."""

import os

os.environ["ENV"] = "test"
os.environ["RECORD_STORE_BACKEND"] = "memory"
os.environ["SENTRY_DSN"] = ""

from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_generator, get_record_store
from app.services.record_store import InMemoryRecordStore


THAI_PLAN_TEXT = (
    '```json\n'
    '{"meal_plan":[{"day":"Day 1","lunch":{"title":"Thai Chicken Rice",'
    '"instructions":["Cook rice","Stir-fry chicken"],'
    '"ingredientsUsed":["chicken","rice"],"missingIngredients":[]}}]}\n'
    '```'
)


class FakeGenerator:
    """Returns canned text (or raises) and records every call."""

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def generate(
        self,
        prompt: str,
        model_id: Optional[str] = None,
        schema: Optional[Dict[str, Any]] = None
    ) -> str:
        self.calls.append({"prompt": prompt, "model_id": model_id, "schema": schema})
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def thai_plan_text() -> str:
    return THAI_PLAN_TEXT


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator(text=THAI_PLAN_TEXT)


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def client(fake_generator, record_store):
    from main import app

    app.dependency_overrides[get_generator] = lambda: fake_generator
    app.dependency_overrides[get_record_store] = lambda: record_store
    yield TestClient(app)
    app.dependency_overrides.clear()
