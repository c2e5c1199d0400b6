"""Daily nutrition summaries for the meal planner."""

from collections.abc import Iterable
from typing import Any

from mealplan.services.nutrition import compute_recipe_nutrition
from mealplan.services.portions import resolve_base_portions, scale_to_planned_portions
from mealplan.services.records import (
    NUTRIENT_FIELDS,
    NutritionValues,
    PlannedMeal,
    round_half_up,
    row_value,
    to_number,
)

# Recommended share of total macro grams, in percent
RECOMMENDED_MACROS = {"carbs": 50, "protein": 20, "fat": 30}


def planned_meal_nutrition(meal: PlannedMeal) -> NutritionValues:
    """Live recipe nutrition scaled from the recipe's yield to the planned portions."""
    total = compute_recipe_nutrition(meal.recipe.ingredients)
    base = resolve_base_portions(meal.recipe.porciones)
    return scale_to_planned_portions(total, base, meal.porciones)


def daily_totals(meals: Iterable[PlannedMeal]) -> NutritionValues:
    total = NutritionValues()
    for meal in meals:
        total = total + planned_meal_nutrition(meal)
    return total


def macro_distribution(totals: NutritionValues) -> dict[str, dict[str, int]]:
    """Protein, carbs and fat as a share of total macro grams.

    Empty when the day has no macros at all.
    """
    macro_total = totals.protein + totals.carbs + totals.fat
    if macro_total <= 0:
        return {}
    return {
        name: {
            "actual": round_half_up(getattr(totals, name) / macro_total * 100),
            "recommended": recommended,
        }
        for name, recommended in RECOMMENDED_MACROS.items()
    }


def target_progress(totals: NutritionValues, person: Any) -> dict[str, dict[str, float]]:
    """Rounded actual intake against a person's targets, per nutrient."""
    progress = {}
    for name in NUTRIENT_FIELDS:
        actual = getattr(totals, name)
        target = to_number(row_value(person, name, 0.0))
        percentage = round_half_up(actual / target * 100) if target > 0 else 0
        progress[name] = {
            "actual": round_half_up(actual),
            "target": target,
            "percentage": percentage,
        }
    return progress
