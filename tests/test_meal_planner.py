"""Request orchestrator with a fake generator."""

import json
import logging

import pytest

from app.schemas.meal_plan import PlanRequest, RecipeRequest
from app.services.meal_planner import MealPlannerService
from app.services.response_schema import MEAL_PLAN_SCHEMA, RECIPE_SCHEMA
from app.utils.errors import ContractViolationError, DecodeError, GenerationError, ValidationError
from tests.conftest import FakeGenerator


THAI_REQUEST = {
    "ingredientsText": "chicken, rice",
    "cuisine": "Thai",
    "days": 2,
    "mealTypes": ["Lunch", "Dinner"],
    "familySize": 4,
}

RECIPE_TEXT = json.dumps({
    "name": "Thai Chicken Rice",
    "description": "Fragrant one-pan rice.",
    "ingredients": ["chicken", "rice"],
    "instructions": ["Cook rice", "Stir-fry chicken"],
    "shopping_list": ["lemongrass"],
})


def make_planner(generator, **kwargs) -> MealPlannerService:
    kwargs.setdefault("model_id", "gemini-test")
    kwargs.setdefault("use_response_schema", True)
    kwargs.setdefault("strict_plan_validation", False)
    return MealPlannerService(generator, **kwargs)


async def test_thai_plan_end_to_end(fake_generator):
    planner = make_planner(fake_generator)

    document = await planner.generate_meal_plan(PlanRequest.model_validate(THAI_REQUEST))

    assert "shopping_list" not in document
    assert len(document["meal_plan"]) == 1
    assert document["meal_plan"][0]["lunch"]["title"] == "Thai Chicken Rice"
    assert document["meal_plan"][0]["lunch"]["missingIngredients"] == []


async def test_plan_call_uses_model_and_schema(fake_generator):
    planner = make_planner(fake_generator)

    await planner.generate_meal_plan(PlanRequest.model_validate(THAI_REQUEST))

    call = fake_generator.calls[0]
    assert call["model_id"] == "gemini-test"
    assert call["schema"] is MEAL_PLAN_SCHEMA
    assert "- Cuisine: Thai" in call["prompt"]


async def test_schema_can_be_disabled(fake_generator):
    planner = make_planner(fake_generator, use_response_schema=False)

    await planner.generate_meal_plan(PlanRequest.model_validate(THAI_REQUEST))

    assert fake_generator.calls[0]["schema"] is None


async def test_generation_failure_becomes_generation_error():
    planner = make_planner(FakeGenerator(error=GenerationError(detail="503 from Gemini")))

    with pytest.raises(GenerationError) as exc_info:
        await planner.generate_meal_plan(PlanRequest.model_validate(THAI_REQUEST))

    assert exc_info.value.message == "Failed to generate meal plan due to a server error."
    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "503 from Gemini"


async def test_unexpected_generator_exception_becomes_generation_error():
    planner = make_planner(FakeGenerator(error=ConnectionError("network down")))

    with pytest.raises(GenerationError) as exc_info:
        await planner.generate_recipe(RecipeRequest(meal_name="Tom Yum"))

    assert exc_info.value.message == "Failed to generate recipe due to a server error."


async def test_unreadable_output_becomes_decode_error(caplog):
    planner = make_planner(FakeGenerator(text="not json"))

    with caplog.at_level(logging.ERROR, logger="app.services.meal_planner"):
        with pytest.raises(DecodeError) as exc_info:
            await planner.generate_meal_plan(PlanRequest.model_validate(THAI_REQUEST))

    assert exc_info.value.raw_text == "not json"
    assert "not json" not in exc_info.value.message
    assert "not json" in caplog.text


async def test_empty_output_becomes_decode_error():
    planner = make_planner(FakeGenerator(text=""))

    with pytest.raises(DecodeError):
        await planner.generate_meal_plan(PlanRequest.model_validate(THAI_REQUEST))


async def test_recipe_without_identifier_never_calls_generator():
    generator = FakeGenerator(text=RECIPE_TEXT)
    planner = make_planner(generator)

    with pytest.raises(ValidationError) as exc_info:
        await planner.generate_recipe(RecipeRequest(meal_type="Dinner", family_size=2, recipe_request="  "))

    assert exc_info.value.status_code == 400
    assert "recipeRequest" in exc_info.value.message
    assert generator.calls == []


@pytest.mark.parametrize("fields", [{"meal_name": "Thai Chicken Rice"}, {"recipe_request": "a quick rice dish"}])
async def test_recipe_accepts_either_identifier(fields):
    generator = FakeGenerator(text=f"```json\n{RECIPE_TEXT}\n```")
    planner = make_planner(generator)

    document = await planner.generate_recipe(RecipeRequest(**fields))

    assert document == json.loads(RECIPE_TEXT)
    assert generator.calls[0]["schema"] is RECIPE_SCHEMA


async def test_contract_violations_are_logged_but_returned_by_default(caplog):
    text = json.dumps({"meal_plan": [{"day": "Day 1"}]})
    planner = make_planner(FakeGenerator(text=text))

    with caplog.at_level(logging.WARNING, logger="app.services.meal_planner"):
        document = await planner.generate_meal_plan(PlanRequest.model_validate(THAI_REQUEST))

    assert document == {"meal_plan": [{"day": "Day 1"}]}
    assert "field contract" in caplog.text


async def test_strict_validation_rejects_contract_violations():
    text = json.dumps({
        "meal_plan": [{"day": "Day 1", "lunch": {"title": "Rice", "instructions": []}}]
    })
    planner = make_planner(FakeGenerator(text=text), strict_plan_validation=True)

    with pytest.raises(ContractViolationError) as exc_info:
        await planner.generate_meal_plan(PlanRequest.model_validate(THAI_REQUEST))

    assert exc_info.value.status_code == 500
    assert "missing required fields" in exc_info.value.message
    assert exc_info.value.message != DecodeError().message
    assert "instructions" in exc_info.value.detail


async def test_strict_validation_accepts_well_formed_plans(fake_generator):
    planner = make_planner(fake_generator, strict_plan_validation=True)

    document = await planner.generate_meal_plan(PlanRequest.model_validate(THAI_REQUEST))

    assert document["meal_plan"][0]["day"] == "Day 1"


async def test_recipe_contract_violations_are_logged_but_returned_by_default(caplog):
    text = json.dumps({"name": "Tom Yum", "ingredients": ["shrimp"], "instructions": []})
    planner = make_planner(FakeGenerator(text=text))

    with caplog.at_level(logging.WARNING, logger="app.services.meal_planner"):
        document = await planner.generate_recipe(RecipeRequest(meal_name="Tom Yum"))

    assert document == json.loads(text)
    assert "Recipe breaks the field contract" in caplog.text


async def test_strict_validation_rejects_incomplete_recipes():
    text = json.dumps({"description": "Soup with no name or steps"})
    planner = make_planner(FakeGenerator(text=text), strict_plan_validation=True)

    with pytest.raises(ContractViolationError) as exc_info:
        await planner.generate_recipe(RecipeRequest(meal_name="Tom Yum"))

    assert "name" in exc_info.value.detail
    assert exc_info.value.raw_text == text


async def test_strict_validation_accepts_complete_recipes():
    planner = make_planner(FakeGenerator(text=RECIPE_TEXT), strict_plan_validation=True)

    document = await planner.generate_recipe(RecipeRequest(recipe_request="rice with chicken"))

    assert document["name"] == "Thai Chicken Rice"


async def test_non_standard_json_literals_are_decode_errors():
    planner = make_planner(FakeGenerator(text='{"meal_plan": [], "calories": NaN}'))

    with pytest.raises(DecodeError) as exc_info:
        await planner.generate_meal_plan(PlanRequest.model_validate(THAI_REQUEST))

    assert not isinstance(exc_info.value, ContractViolationError)
