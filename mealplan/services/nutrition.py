"""Nutrition totals for a recipe's full yield."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from mealplan.services.records import (
    IngredientData,
    NutritionValues,
    RecipeIngredientData,
    recipe_ingredients_from_rows,
)
from mealplan.services.units import conversion_text, convert_to_base_unit

logger = logging.getLogger(__name__)


def ingredient_contribution(row: RecipeIngredientData) -> NutritionValues:
    """Nutrients contributed by one recipe ingredient line.

    The line's quantity is converted to the base unit and taken as a proportion
    of the ingredient's ``base_quantity``, which is what its nutrients refer to.
    """
    ingredient = row.ingredient
    if ingredient.base_quantity <= 0:
        logger.warning(
            f"Ingredient {ingredient.id} ({ingredient.name}) has base quantity "
            f"{ingredient.base_quantity}; it contributes no nutrition"
        )
        return NutritionValues()
    quantity_in_base = convert_to_base_unit(row.quantity, row.unit_name, ingredient)
    return ingredient.nutrition.scaled(quantity_in_base / ingredient.base_quantity)


def compute_recipe_nutrition(recipe_ingredients: Iterable[Any] | None) -> NutritionValues:
    """Total nutrition of a recipe, for all of its ``porciones``."""
    total = NutritionValues()
    for row in recipe_ingredients_from_rows(recipe_ingredients):
        total = total + ingredient_contribution(row)
    return total


@dataclass(frozen=True)
class IngredientLine:
    """Per-row detail shown next to a recipe's ingredients."""

    ingredient: IngredientData
    quantity: float
    unit_name: str
    quantity_in_base: float
    conversion_text: str | None
    nutrition: NutritionValues


def ingredient_breakdown(recipe_ingredients: Iterable[Any] | None) -> list[IngredientLine]:
    lines = []
    for row in recipe_ingredients_from_rows(recipe_ingredients):
        lines.append(
            IngredientLine(
                ingredient=row.ingredient,
                quantity=row.quantity,
                unit_name=row.unit_name,
                quantity_in_base=convert_to_base_unit(row.quantity, row.unit_name, row.ingredient),
                conversion_text=conversion_text(row.quantity, row.unit_name, row.ingredient),
                nutrition=ingredient_contribution(row),
            )
        )
    return lines
