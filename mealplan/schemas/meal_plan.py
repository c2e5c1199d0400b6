"""Meal type and meal plan schemas."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from mealplan.schemas.nutrition import NutritionValuesSchema

# --- Meal types ---


class MealTypeCreate(BaseModel):
    """Create a meal type; it is appended after the existing ones."""

    name: str = Field(..., min_length=1, max_length=100)


class MealTypeUpdate(BaseModel):
    """Rename a meal type."""

    name: str = Field(..., min_length=1, max_length=100)


class MealTypeOrder(BaseModel):
    """Meal type ids in their new display order."""

    meal_type_ids: list[int]


class MealTypeResponse(BaseModel):
    """Meal type response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    sort_order: int


# --- Meal plan entries ---


class MealPlanEntryCreate(BaseModel):
    """Plan a recipe in a meal slot of a day."""

    date: dt.date
    meal_type_id: int
    recipe_id: int
    porciones: int = Field(1, ge=1)


class MealPlanEntryUpdate(BaseModel):
    """Change the portions or slot of a planned meal."""

    date: dt.date | None = None
    meal_type_id: int | None = None
    porciones: int | None = Field(None, ge=1)


class MealPlanEntryResponse(BaseModel):
    """A planned meal with its nutrition for the planned portions."""

    id: int
    date: dt.date
    meal_type_id: int
    meal_type: str
    recipe_id: int
    recipe_name: str
    porciones: int
    recipe_porciones: int
    nutrition: NutritionValuesSchema


class MacroShare(BaseModel):
    """Share of total macro grams against the recommended share, in percent."""

    actual: int
    recommended: int


class NutrientProgress(BaseModel):
    """Rounded intake against a target."""

    actual: int
    target: float
    percentage: int


class PersonProgress(BaseModel):
    """A person's progress towards their daily targets."""

    person_id: int
    name: str
    progress: dict[str, NutrientProgress]


class DayPlanResponse(BaseModel):
    """All meals of a day with their combined nutrition."""

    date: dt.date
    meals: list[MealPlanEntryResponse]
    totals: NutritionValuesSchema
    rounded_totals: dict[str, int]
    macro_distribution: dict[str, MacroShare]
    persons: list[PersonProgress]


class WeeklyPlanResponse(BaseModel):
    """Meal plan for a date range, one entry per day."""

    start: dt.date
    end: dt.date
    days: list[DayPlanResponse]
