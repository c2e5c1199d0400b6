"""Unit conversion between an ingredient's base unit and its declared equivalences."""

import logging
from dataclasses import dataclass
from typing import Any

from mealplan.services.records import IngredientData, round_half_up

logger = logging.getLogger(__name__)

# Units offered when creating an ingredient, with their size in the metric base
STANDARD_UNITS = [
    {"value": "g", "label": "Grams (g)", "grams": 1.0},
    {"value": "kg", "label": "Kilograms (kg)", "grams": 1000.0},
    {"value": "oz", "label": "Ounces (oz)", "grams": 28.35},
    {"value": "lb", "label": "Pounds (lb)", "grams": 453.59},
    {"value": "ml", "label": "Milliliters (ml)", "grams": None},
    {"value": "l", "label": "Liters (l)", "grams": None},
    {"value": "u", "label": "Units (u)", "grams": None},
]


def _as_ingredient(ingredient: Any) -> IngredientData:
    return IngredientData.from_row(ingredient)


def resolve_conversion_factor(ingredient: Any, unit_name: str | None) -> float:
    """Base-unit quantity represented by one ``unit_name``.

    The base unit and any unit the ingredient doesn't declare resolve to 1.
    """
    ingredient = _as_ingredient(ingredient)
    if not unit_name or unit_name == ingredient.base_unit:
        return 1.0
    factor = ingredient.units().get(unit_name)
    if factor is None:
        logger.warning(
            f"Unknown unit '{unit_name}' for ingredient {ingredient.id} "
            f"({ingredient.name}); treating it as the base unit"
        )
        return 1.0
    return factor


def convert_to_base_unit(quantity: float, from_unit: str | None, ingredient: Any) -> float:
    """Express ``quantity`` of ``from_unit`` in the ingredient's base unit."""
    return quantity * resolve_conversion_factor(ingredient, from_unit)


def convert_from_base_unit(quantity_in_base: float, to_unit: str | None, ingredient: Any) -> float:
    """Express a base-unit quantity in ``to_unit``. A non-positive factor yields 0."""
    factor = resolve_conversion_factor(ingredient, to_unit)
    if factor <= 0:
        return 0.0
    return quantity_in_base / factor


@dataclass(frozen=True)
class Equivalence:
    """A quantity expressed in one of the ingredient's units, rounded for display."""

    unit: str
    quantity: float

    def as_dict(self) -> dict:
        return {"unit": self.unit, "quantity": self.quantity}


def list_equivalences(ingredient: Any, quantity_in_base: float) -> list[Equivalence]:
    """The base quantity expressed in every available unit, base unit first."""
    ingredient = _as_ingredient(ingredient)
    result = [Equivalence(ingredient.base_unit, round_half_up(quantity_in_base, 2))]
    for equivalence in ingredient.equivalences:
        if equivalence.unit_name == ingredient.base_unit:
            continue
        if equivalence.conversion_factor > 0:
            value = quantity_in_base / equivalence.conversion_factor
        else:
            value = 0.0
        result.append(Equivalence(equivalence.unit_name, round_half_up(value, 2)))
    return result


def conversion_text(quantity: float, unit_name: str | None, ingredient: Any) -> str | None:
    """Parenthetical base-unit hint such as ``"(30 ml)"`` for non-base units."""
    ingredient = _as_ingredient(ingredient)
    if not unit_name or unit_name == ingredient.base_unit:
        return None
    factor = ingredient.units().get(unit_name)
    if factor is None:
        return None
    value = round_half_up(quantity * factor, 2)
    return f"({value:g} {ingredient.base_unit})"
