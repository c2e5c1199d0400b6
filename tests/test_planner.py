"""Meal planner summary tests."""

from datetime import date

import pytest

from mealplan.services.planner import (
    RECOMMENDED_MACROS,
    daily_totals,
    macro_distribution,
    planned_meal_nutrition,
    target_progress,
)
from mealplan.services.records import DateRange, NutritionValues, PlannedMeal

RICE = {
    "id": 1,
    "name": "Rice",
    "base_unit": "g",
    "base_quantity": 100,
    "calories": 130,
    "protein": 2.7,
    "carbs": 28,
    "fat": 0.3,
}
RICE_RECIPE = {
    "id": 10,
    "name": "Plain rice",
    "porciones": 2,
    "ingredients": [{"ingredients": RICE, "quantity": 200, "unit_name": "g"}],
}


def meal(porciones, recipe=RICE_RECIPE, day="2024-01-01"):
    return PlannedMeal.from_row(
        {"id": 1, "date": day, "meal_type": "Lunch", "porciones": porciones, "recipe": recipe}
    )


def test_planned_meal_scales_from_recipe_yield():
    assert planned_meal_nutrition(meal(1)).calories == pytest.approx(130)
    assert planned_meal_nutrition(meal(3)).calories == pytest.approx(390)


def test_planned_meal_with_missing_recipe_portions():
    recipe = {**RICE_RECIPE, "porciones": None}
    assert planned_meal_nutrition(meal(2, recipe=recipe)).calories == pytest.approx(520)


def test_daily_totals():
    totals = daily_totals([meal(1), meal(2)])
    assert totals.calories == pytest.approx(390)
    assert daily_totals([]) == NutritionValues()


def test_macro_distribution():
    distribution = macro_distribution(NutritionValues(protein=20, carbs=50, fat=30))
    assert distribution == {
        "carbs": {"actual": 50, "recommended": 50},
        "protein": {"actual": 20, "recommended": 20},
        "fat": {"actual": 30, "recommended": 30},
    }
    assert set(RECOMMENDED_MACROS) == {"carbs", "protein", "fat"}


def test_macro_distribution_of_empty_day():
    assert macro_distribution(NutritionValues()) == {}


def test_target_progress():
    person = {"name": "Alex", "calories": 2000, "protein": 0}
    progress = target_progress(NutritionValues(calories=1500.4, protein=40), person)
    assert progress["calories"] == {"actual": 1500, "target": 2000, "percentage": 75}
    assert progress["protein"]["percentage"] == 0
    assert progress["fiber"] == {"actual": 0, "target": 0, "percentage": 0}


def test_invalid_rows_are_not_planned():
    assert PlannedMeal.from_row({"date": "2024-13-45", "recipe": RICE_RECIPE}) is None
    assert PlannedMeal.from_row({"date": "2024-01-01", "recipe": None}) is None


def test_week_of():
    week = DateRange.week_of(date(2024, 1, 4))
    assert week == DateRange(date(2024, 1, 1), date(2024, 1, 7))
    assert len(week.days()) == 7

    sunday_week = DateRange.week_of(date(2024, 1, 4), week_starts_on=6)
    assert sunday_week.start == date(2023, 12, 31)
    assert sunday_week.contains(date(2024, 1, 6))
    assert not sunday_week.contains(date(2024, 1, 7))
