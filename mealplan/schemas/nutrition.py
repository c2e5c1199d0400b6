"""Nutrition schemas."""

from pydantic import BaseModel


class NutritionValuesSchema(BaseModel):
    """The six tracked nutrients."""

    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0
    sugar: float = 0


class NutritionResponse(BaseModel):
    """Recipe nutrition for its full yield, per portion and for requested portions."""

    recipe_id: int
    porciones: int
    portions: float
    total: NutritionValuesSchema
    per_portion: NutritionValuesSchema
    scaled: NutritionValuesSchema
    scaled_rounded: dict[str, int]
