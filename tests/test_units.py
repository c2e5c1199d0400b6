"""Unit conversion tests."""

import pytest

from mealplan.services.records import IngredientData, round_half_up
from mealplan.services.units import (
    conversion_text,
    convert_from_base_unit,
    convert_to_base_unit,
    list_equivalences,
    resolve_conversion_factor,
)

OIL = {
    "id": 1,
    "name": "Olive oil",
    "base_unit": "ml",
    "base_quantity": 100,
    "calories": 884,
    "unit_equivalences": [
        {"unit_name": "tbsp", "conversion_factor": 15},
        {"unit_name": "tsp", "conversion_factor": 5},
    ],
}


def test_base_unit_is_unchanged():
    assert convert_to_base_unit(30, "ml", OIL) == 30


def test_declared_unit_is_multiplied():
    """2 tbsp of oil is 30 ml."""
    assert convert_to_base_unit(2, "tbsp", OIL) == 30


def test_unknown_unit_passes_through_with_warning(caplog):
    with caplog.at_level("WARNING"):
        assert convert_to_base_unit(3, "cup", OIL) == 3
    assert "Unknown unit 'cup'" in caplog.text


def test_resolve_conversion_factor():
    assert resolve_conversion_factor(OIL, "ml") == 1
    assert resolve_conversion_factor(OIL, "tsp") == 5
    assert resolve_conversion_factor(OIL, None) == 1


def test_from_base_unit():
    assert convert_from_base_unit(30, "tbsp", OIL) == 2
    assert convert_from_base_unit(30, "ml", OIL) == 30


def test_from_base_unit_with_zero_factor():
    ingredient = {**OIL, "unit_equivalences": [{"unit_name": "drop", "conversion_factor": 0}]}
    assert convert_from_base_unit(30, "drop", ingredient) == 0


@pytest.mark.parametrize("quantity", [1, 2.5, 7.3, 100])
@pytest.mark.parametrize("unit", ["ml", "tbsp", "tsp"])
def test_round_trip(quantity, unit):
    base = convert_to_base_unit(quantity, unit, OIL)
    assert convert_from_base_unit(base, unit, OIL) == pytest.approx(quantity, abs=0.01)


def test_list_equivalences_base_first():
    equivalences = list_equivalences(OIL, 30)
    assert [(e.unit, e.quantity) for e in equivalences] == [
        ("ml", 30),
        ("tbsp", 2),
        ("tsp", 6),
    ]


def test_list_equivalences_rounds_to_two_decimals():
    ingredient = {**OIL, "unit_equivalences": [{"unit_name": "cup", "conversion_factor": 240}]}
    equivalences = list_equivalences(ingredient, 100)
    assert equivalences[1].quantity == 0.42


def test_list_equivalences_without_declared_units():
    ingredient = {**OIL, "unit_equivalences": []}
    assert [e.as_dict() for e in list_equivalences(ingredient, 12.346)] == [
        {"unit": "ml", "quantity": 12.35}
    ]


def test_conversion_text():
    assert conversion_text(2, "tbsp", OIL) == "(30 ml)"
    assert conversion_text(30, "ml", OIL) is None
    assert conversion_text(1, "cup", OIL) is None


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(-2.5) == -2


def test_round_half_up_with_extreme_values():
    assert round_half_up(float("inf")) == 0
    assert round_half_up(float("nan"), 2) == 0
    assert round_half_up(1e308, 2) == 1e308
    assert round_half_up(1e308) == int(1e308)


def test_list_equivalences_with_tiny_factor():
    pinch = {"unit_name": "pinch", "conversion_factor": 1e-310}
    ingredient = {**OIL, "unit_equivalences": [pinch]}
    equivalences = list_equivalences(ingredient, 1e10)
    assert [e.unit for e in equivalences] == ["ml", "pinch"]
    assert equivalences[1].quantity == 0


def test_base_unit_wins_over_colliding_equivalence():
    ingredient = IngredientData.from_row(
        {**OIL, "unit_equivalences": [{"unit_name": "ml", "conversion_factor": 3}]}
    )
    assert ingredient.units()["ml"] == 1
    assert convert_to_base_unit(10, "ml", ingredient) == 10
