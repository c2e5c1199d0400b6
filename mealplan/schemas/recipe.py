"""Recipe schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from mealplan.schemas.common import reject_explicit_nulls
from mealplan.schemas.nutrition import NutritionValuesSchema

# --- Recipe Ingredient ---


class RecipeIngredientCreate(BaseModel):
    """An ingredient line; ``unit_name`` defaults to the ingredient's base unit."""

    ingredient_id: int
    quantity: float = Field(..., gt=0)
    unit_name: str | None = Field(None, max_length=50)


class RecipeIngredientResponse(BaseModel):
    """Recipe ingredient with its base-unit conversion and nutrition contribution."""

    id: int
    ingredient_id: int
    ingredient_name: str
    quantity: float
    unit_name: str
    base_unit: str
    quantity_in_base: float
    conversion_text: str | None
    nutrition: NutritionValuesSchema


# --- Recipe ---


def _check_instructions(steps: list[str] | None) -> list[str] | None:
    if steps is None:
        return None
    steps = [step.strip() for step in steps]
    if any(not step for step in steps):
        raise ValueError("Instruction steps must not be empty")
    return steps


class RecipeCreate(BaseModel):
    """Create a new recipe with its ingredients."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=200)
    image_url: str | None = Field(None, max_length=1000)
    instructions: list[str] = []
    tags: list[str] = []
    porciones: int = Field(1, ge=1)
    ingredients: list[RecipeIngredientCreate] = Field(..., min_length=1)

    @field_validator("instructions")
    @classmethod
    def validate_instructions(cls, value: list[str]) -> list[str]:
        return _check_instructions(value)


class RecipeUpdate(BaseModel):
    """Update a recipe. A provided ``ingredients`` list replaces the existing one."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=200)
    image_url: str | None = Field(None, max_length=1000)
    instructions: list[str] | None = None
    tags: list[str] | None = None
    porciones: int | None = Field(None, ge=1)
    ingredients: list[RecipeIngredientCreate] | None = Field(None, min_length=1)

    @field_validator("instructions")
    @classmethod
    def validate_instructions(cls, value: list[str] | None) -> list[str] | None:
        return _check_instructions(value)

    @model_validator(mode="after")
    def validate_nulls(self) -> "RecipeUpdate":
        reject_explicit_nulls(self, nullable=("description", "image_url", "ingredients"))
        return self


class RecipeListResponse(BaseModel):
    """Recipe summary for list views; nutrition is the cached total."""

    id: int
    name: str
    description: str | None
    image_url: str | None
    tags: list[str]
    porciones: int
    ingredient_count: int
    total_nutrition: NutritionValuesSchema | None
    created_at: datetime


class RecipeResponse(BaseModel):
    """Recipe response with ingredients and live nutrition."""

    id: int
    name: str
    description: str | None
    image_url: str | None
    instructions: list[str]
    tags: list[str]
    porciones: int
    ingredients: list[RecipeIngredientResponse]
    total_nutrition: NutritionValuesSchema
    nutrition_per_portion: NutritionValuesSchema
    nutrition_computed_at: datetime | None
    created_at: datetime
    updated_at: datetime
