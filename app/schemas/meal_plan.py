"""
Meal Planner API - Meal Plan and Recipe Schemas.

Pydantic schemas for generation requests and the documents the model is
asked to return. Request bodies use camelCase keys.
"""

from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MealType(str, Enum):
    """Meal slots a plan can include."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"

    @property
    def slot(self) -> str:
        """Key used for this meal inside a day of the plan."""
        return self.value.lower()


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlanRequest(_CamelModel):
    """
    Schema for meal plan generation request.

    Attributes:
        ingredients_text: Ingredients the user already has. Blank means
            the plan is built from scratch with a shopping list.
        cuisine: Cuisine style for every meal.
        days: Number of days to plan.
        meal_types: Meals to include each day, in order.
        family_size: Number of people each recipe serves.
        dietary_type: Dietary constraint applied to the whole plan.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "ingredientsText": "chicken, rice",
                "cuisine": "Thai",
                "days": 2,
                "mealTypes": ["Lunch", "Dinner"],
                "familySize": 4,
                "dietaryType": "None"
            }
        }
    )

    ingredients_text: Optional[str] = Field(None, description="Available ingredients")
    cuisine: str = Field(..., min_length=1, description="Cuisine style")
    days: int = Field(..., ge=1, description="Number of days to plan")
    meal_types: List[MealType] = Field(..., min_length=1, description="Meals to include each day")
    family_size: int = Field(..., ge=1, description="Number of people")
    dietary_type: Optional[str] = Field(None, description="Dietary constraint, e.g. vegetarian")

    @property
    def has_ingredients(self) -> bool:
        return bool(self.ingredients_text and self.ingredients_text.strip())


class RecipeRequest(_CamelModel):
    """
    Schema for single recipe generation request.

    Either ``recipe_request`` (a free-form description) or ``meal_name``
    (a specific dish, e.g. one taken from a generated plan) must be given.
    The check is done by the orchestrator so the client gets a 400 that
    names the missing field.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "mealName": "Thai Chicken Rice",
                "mealType": "Lunch",
                "familySize": 4
            }
        }
    )

    ingredients_text: Optional[str] = None
    recipe_request: Optional[str] = None
    meal_name: Optional[str] = None
    meal_type: Optional[str] = None
    family_size: int = Field(default=1, ge=1)

    @property
    def has_ingredients(self) -> bool:
        return bool(self.ingredients_text and self.ingredients_text.strip())

    @property
    def dish_identifier(self) -> Optional[str]:
        """The non-blank recipe identifier, preferring the explicit meal name."""
        for value in (self.meal_name, self.recipe_request):
            if value and value.strip():
                return value.strip()
        return None


class MealEntry(BaseModel):
    """A single meal inside a day of the plan."""

    title: str
    instructions: List[str] = Field(..., min_length=1)
    ingredientsUsed: List[str]
    missingIngredients: List[str]


class DayPlan(BaseModel):
    """One day of the plan; only requested meal slots are filled."""

    day: str
    breakfast: Optional[MealEntry] = None
    lunch: Optional[MealEntry] = None
    dinner: Optional[MealEntry] = None
    snack: Optional[MealEntry] = None

    def meals(self) -> List[MealEntry]:
        return [m for m in (self.breakfast, self.lunch, self.dinner, self.snack) if m is not None]


class MealPlanDocument(BaseModel):
    """Meal plan as returned by the model."""

    shopping_list: Optional[List[str]] = None
    meal_plan: List[DayPlan]


class RecipeDocument(BaseModel):
    """Single recipe as returned by the model."""

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    ingredients: List[str]
    instructions: List[str] = Field(..., min_length=1)
    shopping_list: List[str] = Field(default_factory=list)
