"""Pydantic schemas for API requests and responses."""

from mealplan.schemas.ingredient import IngredientCreate, IngredientResponse, IngredientUpdate
from mealplan.schemas.meal_plan import (
    MealPlanEntryCreate,
    MealPlanEntryResponse,
    MealPlanEntryUpdate,
    MealTypeCreate,
    MealTypeResponse,
    WeeklyPlanResponse,
)
from mealplan.schemas.nutrition import NutritionResponse, NutritionValuesSchema
from mealplan.schemas.person import PersonCreate, PersonResponse, PersonUpdate
from mealplan.schemas.recipe import RecipeCreate, RecipeResponse, RecipeUpdate
from mealplan.schemas.shopping_list import (
    LiveShoppingListResponse,
    ShoppingItemUpdate,
    ShoppingListCreate,
    ShoppingListResponse,
)

__all__ = [
    "IngredientCreate",
    "IngredientUpdate",
    "IngredientResponse",
    "RecipeCreate",
    "RecipeUpdate",
    "RecipeResponse",
    "PersonCreate",
    "PersonUpdate",
    "PersonResponse",
    "MealTypeCreate",
    "MealTypeResponse",
    "MealPlanEntryCreate",
    "MealPlanEntryUpdate",
    "MealPlanEntryResponse",
    "WeeklyPlanResponse",
    "NutritionValuesSchema",
    "NutritionResponse",
    "LiveShoppingListResponse",
    "ShoppingListCreate",
    "ShoppingListResponse",
    "ShoppingItemUpdate",
]
