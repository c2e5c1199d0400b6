"""SQLAlchemy models."""

from mealplan.models.ingredient import Ingredient, UnitEquivalence
from mealplan.models.meal_plan import MealPlanEntry, MealType
from mealplan.models.person import Person
from mealplan.models.recipe import Recipe, RecipeIngredient
from mealplan.models.shopping_list import ShoppingList, ShoppingListItem

__all__ = [
    "Ingredient",
    "UnitEquivalence",
    "Recipe",
    "RecipeIngredient",
    "Person",
    "MealType",
    "MealPlanEntry",
    "ShoppingList",
    "ShoppingListItem",
]
