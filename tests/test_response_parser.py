"""Sanitizer, decoder and plan contract checks."""

import json

import pytest

from app.services.response_parser import (
    decode,
    find_plan_contract_violations,
    find_recipe_contract_violations,
    sanitize,
    strict_loads,
)
from app.utils.errors import DecodeError


SAMPLE_PLAN = {
    "shopping_list": ["jasmine rice", "fish sauce"],
    "meal_plan": [
        {
            "day": "Day 1",
            "breakfast": {
                "title": "Rice Porridge",
                "instructions": ["Simmer rice", "Season"],
                "ingredientsUsed": ["rice"],
                "missingIngredients": [],
            },
            "dinner": {
                "title": "Green Curry",
                "instructions": ["Fry paste", "Add coconut milk", "Simmer"],
                "ingredientsUsed": ["chicken"],
                "missingIngredients": ["green curry paste"],
            },
        }
    ],
}


@pytest.mark.parametrize("text, expected", [
    (None, ""),
    ("", ""),
    ("   \n\t ", ""),
    ('{"a": 1}', '{"a": 1}'),
    ('  {"a": 1}  \n', '{"a": 1}'),
    ('```json\n{"a": 1}\n```', '{"a": 1}'),
    ('```JSON {"a": 1}```', '{"a": 1}'),
    ('```\n{"a": 1}\n```', '{"a": 1}'),
    ('```json\n{"a": 1}', '{"a": 1}'),
    ('{"a": 1}\n```', '{"a": 1}'),
    ("```json", ""),
    ("```", ""),
])
def test_sanitize_strips_whitespace_and_fences(text, expected):
    assert sanitize(text) == expected


@pytest.mark.parametrize("text", [
    None,
    "",
    "```",
    "``````",
    "```json```json {} ``` ```",
    "  ```json\n  [1, 2]\n```  ",
    "plain text",
    "````",
    "```json\n```json\n{}\n```\n```",
])
def test_sanitize_is_idempotent_and_leaves_no_fence(text):
    once = sanitize(text)
    assert sanitize(once) == once
    assert not once.startswith("```")
    assert not once.endswith("```")


def test_decode_round_trips_a_fenced_plan():
    text = f"```json\n{json.dumps(SAMPLE_PLAN, indent=2)}\n```"
    assert decode(sanitize(text)) == SAMPLE_PLAN


def test_decode_round_trips_an_unfenced_plan():
    assert decode(sanitize(json.dumps(SAMPLE_PLAN))) == SAMPLE_PLAN


def test_decode_rejects_non_json_and_keeps_raw_text():
    with pytest.raises(DecodeError) as exc_info:
        decode("not json")

    assert exc_info.value.raw_text == "not json"
    assert exc_info.value.status_code == 500
    assert "not json" not in exc_info.value.message


def test_decode_rejects_empty_text():
    with pytest.raises(DecodeError):
        decode(sanitize(None))


@pytest.mark.parametrize("text", ["[1, 2, 3]", "42", '"meal"', "null"])
def test_decode_requires_a_json_object(text):
    with pytest.raises(DecodeError):
        decode(text)


def test_well_formed_plan_has_no_violations():
    assert find_plan_contract_violations(SAMPLE_PLAN) == []


def test_day_without_meals_is_a_violation():
    violations = find_plan_contract_violations({"meal_plan": [{"day": "Day 1"}]})

    assert len(violations) == 1
    assert "has no meals" in violations[0]


def test_meal_missing_instructions_is_a_violation():
    plan = {
        "meal_plan": [
            {
                "day": "Day 1",
                "lunch": {"title": "Pad Thai", "ingredientsUsed": [], "missingIngredients": []},
            }
        ]
    }

    violations = find_plan_contract_violations(plan)

    assert any("lunch.instructions" in v for v in violations)


def test_meal_with_empty_instructions_is_a_violation():
    plan = {
        "meal_plan": [
            {
                "day": "Day 1",
                "dinner": {
                    "title": "Pad Thai",
                    "instructions": [],
                    "ingredientsUsed": [],
                    "missingIngredients": [],
                },
            }
        ]
    }

    assert find_plan_contract_violations(plan)


def test_missing_meal_plan_key_is_a_violation():
    assert find_plan_contract_violations({"shopping_list": []})


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
def test_decode_rejects_non_standard_number_literals(literal):
    text = f'{{"meal_plan": [], "calories": {literal}}}'

    with pytest.raises(DecodeError) as exc_info:
        decode(text)

    assert exc_info.value.raw_text == text
    assert literal.lstrip("-") in exc_info.value.detail


def test_strict_loads_accepts_any_json_value():
    assert strict_loads('[1, 2.5, "x", null]') == [1, 2.5, "x", None]


def test_well_formed_recipe_has_no_violations():
    recipe = {
        "name": "Som Tam",
        "ingredients": ["green papaya", "lime"],
        "instructions": ["Shred papaya", "Pound dressing"],
    }

    assert find_recipe_contract_violations(recipe) == []


def test_recipe_without_steps_is_a_violation():
    violations = find_recipe_contract_violations({"name": "Som Tam", "ingredients": [], "instructions": []})

    assert len(violations) == 1
    assert violations[0].startswith("instructions:")


def test_recipe_missing_name_and_ingredients():
    violations = find_recipe_contract_violations({"instructions": ["Mix"]})

    assert {v.split(":")[0] for v in violations} == {"name", "ingredients"}
