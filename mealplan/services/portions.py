"""Scaling between a recipe's yield and the portions actually planned."""

from mealplan.services.records import NutritionValues, to_number


def resolve_base_portions(*candidates) -> float:
    """First positive candidate (e.g. live porciones, then recipe.porciones), else 1."""
    for candidate in candidates:
        value = to_number(candidate, 0.0)
        if value > 0:
            return value
    return 1.0


def nutrition_per_portion(total: NutritionValues, *base_portions) -> NutritionValues:
    return total.scaled(1 / resolve_base_portions(*base_portions))


def scale_to_planned_portions(
    total: NutritionValues, base_portions: float, planned_portions: float
) -> NutritionValues:
    """Nutrition for ``planned_portions`` of a recipe whose total covers ``base_portions``."""
    if base_portions <= 0:
        return total.scaled(0.0)
    return total.scaled(planned_portions / base_portions)


def scale_quantity(quantity: float, base_portions: float, planned_portions: float) -> float:
    """Ingredient quantity for ``planned_portions``; a non-positive base counts as 1."""
    per_portion = quantity / (base_portions if base_portions > 0 else 1)
    return per_portion * planned_portions
