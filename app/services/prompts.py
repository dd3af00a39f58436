"""
Meal Planner API - Prompt Builder.

Maps validated requests to the instruction text sent to Gemini. One
parameterized builder covers every mode; the output shape is written into
the prompt literally so the instructions and the parser agree on keys.
"""

import json
from enum import Enum
from typing import Any, Dict, Optional, Union

from app.schemas.meal_plan import PlanRequest, RecipeRequest
from app.services.response_schema import MEAL_ENTRY_REQUIRED_FIELDS


class PromptMode(str, Enum):
    """Prompt variants."""
    INGREDIENTS_DRIVEN = "ingredients_driven"
    FROM_SCRATCH = "from_scratch"
    SINGLE_RECIPE = "single_recipe"


_MEAL_ENTRY_SHAPE = {
    "title": "...",
    "instructions": ["Step 1 ...", "Step 2 ..."],
    "ingredientsUsed": ["..."],
    "missingIngredients": [],
}


def resolve_plan_mode(request: PlanRequest) -> PromptMode:
    """Pick the plan mode from ingredient presence."""
    if request.has_ingredients:
        return PromptMode.INGREDIENTS_DRIVEN
    return PromptMode.FROM_SCRATCH


def _diet_line(dietary_type: Optional[str]) -> str:
    if dietary_type and dietary_type.strip() and dietary_type.strip().lower() != "none":
        return f"The entire plan must be {dietary_type}."
    return "None"


def _meal_plan_shape(request: PlanRequest, mode: PromptMode) -> str:
    day: Dict[str, Any] = {"day": "Day 1"}
    for meal_type in request.meal_types:
        day[meal_type.slot] = _MEAL_ENTRY_SHAPE

    shape: Dict[str, Any] = {}
    if mode == PromptMode.FROM_SCRATCH:
        shape["shopping_list"] = ["..."]
    shape["meal_plan"] = [day]
    return json.dumps(shape, indent=2)


def _mandatory_fields_block() -> str:
    fields = ", ".join(MEAL_ENTRY_REQUIRED_FIELDS)
    return (
        f"Every meal entry MUST include ALL of these fields: {fields}.\n"
        '- "instructions" must be a non-empty list of detailed, step-by-step instructions.\n'
        '- "missingIngredients" may be an empty list, but it must always be present.'
    )


def build_meal_plan_prompt(request: PlanRequest, mode: Optional[PromptMode] = None) -> str:
    """
    Build the meal plan prompt.

    Args:
        request: Validated plan request.
        mode: INGREDIENTS_DRIVEN or FROM_SCRATCH. Resolved from the
            ingredient text when omitted.

    Returns:
        Instruction text. Identical requests give identical text.
    """
    mode = mode or resolve_plan_mode(request)
    if mode == PromptMode.SINGLE_RECIPE:
        raise ValueError("SINGLE_RECIPE is not a meal plan mode")

    if mode == PromptMode.FROM_SCRATCH:
        ingredients_line = (
            "The user is starting from scratch. Generate a meal plan and a "
            "comprehensive shopping list for all needed items."
        )
        mode_rules = (
            'Plan every meal from scratch and include a "shopping_list" with '
            "every ingredient the plan needs, scaled for the family size."
        )
    else:
        ingredients_line = (
            f"The user has these ingredients: {request.ingredients_text}. "
            "Prioritize using leftovers and ingredients with early expiry dates."
        )
        mode_rules = (
            "Build the meals around the available ingredients first. Put anything "
            'else a meal needs in that meal\'s "missingIngredients".'
        )

    meal_types = ", ".join(m.value for m in request.meal_types)

    return f"""You are an expert AI meal planner. Create a detailed meal plan based on the user's request.

Request Details:
- Cuisine: {request.cuisine}
- Duration: {request.days} days
- Family Size: {request.family_size} people
- Meals to Include: {meal_types}
- Dietary Needs: {_diet_line(request.dietary_type)}
- Available Ingredients: {ingredients_line}

{mode_rules}

Generate a complete plan with one entry per day ({request.days} entries), scaling all recipes for the specified family size. Only fill the meal slots listed above.

{_mandatory_fields_block()}

Return ONLY valid JSON (no markdown, no code blocks) with exactly this shape:
{_meal_plan_shape(request, mode)}
"""


def build_recipe_prompt(request: RecipeRequest) -> str:
    """Build the single recipe prompt. The request must name a dish."""
    dish = request.dish_identifier
    if dish is None:
        raise ValueError("recipe request has no dish identifier")

    details = []
    if request.meal_name and request.meal_name.strip():
        details.append(f"- Dish: {request.meal_name.strip()}")
    if request.recipe_request and request.recipe_request.strip():
        details.append(f"- User Request: {request.recipe_request.strip()}")
    details.append(f"- Meal Type: {request.meal_type or 'Any'}")
    details.append(f"- Family Size: {request.family_size} people")

    if request.has_ingredients:
        details.append(
            f"- Available Ingredients: {request.ingredients_text}. "
            "Prioritize using leftovers and ingredients with early expiry dates."
        )
        shopping_rule = 'List only the ingredients the user does not have in "shopping_list" (it may be empty).'
    else:
        details.append("- Available Ingredients: None provided.")
        shopping_rule = 'List every ingredient the recipe needs in "shopping_list".'

    shape = {
        "name": "...",
        "description": "...",
        "ingredients": ["..."],
        "instructions": ["Step 1 ...", "Step 2 ..."],
        "shopping_list": ["..."],
    }
    details_block = "\n".join(details)

    return f"""You are an expert chef. Create one complete recipe based on the user's request.

Request Details:
{details_block}

Scale the quantities for the family size. Instructions must be a non-empty list of clear, detailed steps.
{shopping_rule}

Return ONLY valid JSON (no markdown, no code blocks) with exactly this shape:
{json.dumps(shape, indent=2)}
"""


def build_prompt(mode: PromptMode, request: Union[PlanRequest, RecipeRequest]) -> str:
    """Dispatch to the builder for ``mode``."""
    if mode == PromptMode.SINGLE_RECIPE:
        if not isinstance(request, RecipeRequest):
            raise TypeError("SINGLE_RECIPE needs a RecipeRequest")
        return build_recipe_prompt(request)
    if not isinstance(request, PlanRequest):
        raise TypeError(f"{mode.value} needs a PlanRequest")
    return build_meal_plan_prompt(request, mode)
