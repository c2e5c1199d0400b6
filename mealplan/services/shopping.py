"""Shopping list aggregation.

A single aggregation step merges ingredient contributions by ingredient id. It is
fed either from meal-plan entries in a date range (the live list) or from the
rows of a persisted list (saved and copied lists), so both paths produce the same
``ShoppingItem`` shape.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from mealplan.services.portions import scale_quantity
from mealplan.services.records import (
    DateRange,
    IngredientData,
    PlannedMeal,
    row_value,
    to_number,
)
from mealplan.services.units import Equivalence, convert_to_base_unit, list_equivalences

logger = logging.getLogger(__name__)

SUGGESTED_TAGS = [
    "Vegetable",
    "Fruit",
    "Meat",
    "Fish",
    "Dairy",
    "Grain",
    "Legume",
    "Nut",
    "Condiment",
    "Oil",
    "Drink",
]
UNCATEGORIZED = "Uncategorized"


@dataclass(frozen=True)
class Provenance:
    """How much of an ingredient one recipe needs on one day, in the base unit."""

    recipe_id: Any
    recipe_name: str
    date: str
    quantity: float
    porciones: float
    meal_type: str | None = None

    @property
    def key(self) -> tuple:
        return (self.recipe_id, self.date)

    def as_dict(self) -> dict:
        return {
            "recipe_id": self.recipe_id,
            "recipe_name": self.recipe_name,
            "date": self.date,
            "meal_type": self.meal_type,
            "quantity": self.quantity,
            "porciones": self.porciones,
        }

    @classmethod
    def from_row(cls, row: Any) -> "Provenance":
        return cls(
            recipe_id=row_value(row, "recipe_id"),
            recipe_name=str(row_value(row, "recipe_name", "")),
            date=str(row_value(row, "date", "")),
            quantity=to_number(row_value(row, "quantity", 0.0)),
            porciones=to_number(row_value(row, "porciones", 0.0)),
            meal_type=row_value(row, "meal_type"),
        )


@dataclass
class ShoppingItem:
    """One consolidated line of a shopping list.

    ``total_quantity`` is always in the ingredient's base unit. A manual override
    (``custom_quantity`` in ``custom_unit``) replaces it for display only.
    """

    ingredient: IngredientData
    total_quantity: float = 0.0
    custom_quantity: float | None = None
    custom_unit: str | None = None
    purchased: bool = False
    recipes: list[Provenance] = field(default_factory=list)

    @property
    def has_override(self) -> bool:
        return self.custom_quantity is not None

    @property
    def display_quantity(self) -> float:
        return self.custom_quantity if self.has_override else self.total_quantity

    @property
    def display_unit(self) -> str:
        if self.has_override and self.custom_unit:
            return self.custom_unit
        return self.ingredient.base_unit

    @property
    def active_quantity_in_base(self) -> float:
        if not self.has_override:
            return self.total_quantity
        return convert_to_base_unit(self.custom_quantity, self.display_unit, self.ingredient)

    @property
    def total_portions(self) -> float:
        return sum(source.porciones for source in self.recipes)

    def equivalences(self) -> list[Equivalence]:
        return list_equivalences(self.ingredient, self.active_quantity_in_base)

    def as_dict(self) -> dict:
        return {
            "ingredient_id": self.ingredient.id,
            "name": self.ingredient.name,
            "base_unit": self.ingredient.base_unit,
            "tags": list(self.ingredient.tags),
            "image_url": self.ingredient.image_url,
            "total_quantity": self.total_quantity,
            "custom_quantity": self.custom_quantity,
            "custom_unit": self.custom_unit,
            "display_quantity": self.display_quantity,
            "display_unit": self.display_unit,
            "purchased": self.purchased,
            "total_portions": self.total_portions,
            "recipes": [source.as_dict() for source in self.recipes],
            "equivalences": [equivalence.as_dict() for equivalence in self.equivalences()],
        }


@dataclass(frozen=True)
class Contribution:
    """A base-unit quantity of an ingredient destined for one shopping item.

    Contributions sharing a ``source_key`` come from the same planned meal (or
    saved row); their portions are only counted once per recipe and day.
    """

    ingredient: IngredientData
    quantity: float
    provenance: tuple[Provenance, ...] = ()
    source_key: Any = None
    custom_quantity: float | None = None
    custom_unit: str | None = None
    purchased: bool = False


def aggregate_contributions(contributions: Iterable[Contribution]) -> dict[Any, ShoppingItem]:
    """Merge contributions by ingredient id, in order of first appearance.

    Provenance merges by recipe and date, adding quantities. Portions are added
    once per meal-plan entry: a recipe listing the same ingredient on two rows
    contributes both quantities but its planned portions only once. This only
    affects ``total_portions``, never ``total_quantity``.
    """
    items: dict[Any, ShoppingItem] = {}
    counted_portions: set[tuple] = set()

    for contribution in contributions:
        ingredient = contribution.ingredient
        if ingredient.id is None:
            continue

        item = items.get(ingredient.id)
        if item is None:
            item = items[ingredient.id] = ShoppingItem(ingredient=ingredient)

        item.total_quantity += contribution.quantity
        if contribution.custom_quantity is not None:
            item.custom_quantity = contribution.custom_quantity
            item.custom_unit = contribution.custom_unit
        item.purchased = item.purchased or contribution.purchased

        for source in contribution.provenance:
            portions_key = (ingredient.id, source.recipe_id, source.date, contribution.source_key)
            porciones = 0.0 if portions_key in counted_portions else source.porciones
            counted_portions.add(portions_key)

            for index, existing in enumerate(item.recipes):
                if existing.key == source.key:
                    item.recipes[index] = replace(
                        existing,
                        quantity=existing.quantity + source.quantity,
                        porciones=existing.porciones + porciones,
                    )
                    break
            else:
                item.recipes.append(replace(source, porciones=porciones))

    return items


def meal_plan_contributions(entries: Iterable[Any], date_range: DateRange) -> list[Contribution]:
    """Contributions from meal-plan entries whose date falls inside ``date_range``."""
    contributions = []
    for index, entry in enumerate(entries):
        meal = PlannedMeal.from_row(entry)
        if meal is None or not date_range.contains(meal.date):
            continue

        recipe = meal.recipe
        source_key = meal.entry_id if meal.entry_id is not None else f"#{index}"
        for row in recipe.ingredients:
            quantity = scale_quantity(row.quantity, recipe.porciones, meal.porciones)
            quantity_in_base = convert_to_base_unit(quantity, row.unit_name, row.ingredient)
            source = Provenance(
                recipe_id=recipe.id,
                recipe_name=recipe.name,
                date=meal.date.isoformat(),
                quantity=quantity_in_base,
                porciones=meal.porciones,
                meal_type=meal.meal_type,
            )
            contributions.append(
                Contribution(
                    ingredient=row.ingredient,
                    quantity=quantity_in_base,
                    provenance=(source,),
                    source_key=source_key,
                )
            )
    return contributions


def build_shopping_list(date_range: DateRange, entries: Iterable[Any]) -> dict[Any, ShoppingItem]:
    """Consolidated ingredient needs for every meal planned in ``date_range``."""
    return aggregate_contributions(meal_plan_contributions(entries, date_range))


def saved_item_contributions(rows: Iterable[Any]) -> list[Contribution]:
    """Contributions from persisted shopping-list rows."""
    contributions = []
    for index, row in enumerate(rows):
        ingredient = row_value(row, "ingredient") or row_value(row, "ingredients")
        if ingredient is None:
            logger.debug(f"Skipping shopping list row without ingredient: {row!r}")
            continue
        custom_quantity = row_value(row, "custom_quantity")
        contributions.append(
            Contribution(
                ingredient=IngredientData.from_row(ingredient),
                quantity=to_number(row_value(row, "quantity", 0.0)),
                provenance=tuple(
                    Provenance.from_row(source) for source in row_value(row, "recipe_sources", ())
                ),
                source_key=f"saved:{row_value(row, 'id', index)}",
                custom_quantity=None if custom_quantity is None else to_number(custom_quantity),
                custom_unit=row_value(row, "custom_unit"),
                purchased=bool(row_value(row, "purchased", False)),
            )
        )
    return contributions


def load_shopping_list(rows: Iterable[Any]) -> dict[Any, ShoppingItem]:
    """Rebuild the items of a saved or copied list."""
    return aggregate_contributions(saved_item_contributions(rows))


def _iter_items(items) -> list[ShoppingItem]:
    return list(items.values()) if isinstance(items, dict) else list(items)


def available_tags(items) -> list[str]:
    tags = set()
    for item in _iter_items(items):
        tags.update(item.ingredient.tags)
    return sorted(tags)


def filter_by_tags(items, tags: Iterable[str] | None) -> list[ShoppingItem]:
    """Items carrying any of ``tags``; everything when no tag is selected."""
    wanted = set(tags or ())
    if not wanted:
        return _iter_items(items)
    return [item for item in _iter_items(items) if wanted.intersection(item.ingredient.tags)]


def group_by_tags(items) -> dict[str, list[ShoppingItem]]:
    """Items grouped per tag; an item with several tags appears in each group."""
    groups: dict[str, list[ShoppingItem]] = {}
    for item in _iter_items(items):
        for tag in item.ingredient.tags or (UNCATEGORIZED,):
            groups.setdefault(tag, []).append(item)
    ordered = {tag: groups[tag] for tag in sorted(groups) if tag != UNCATEGORIZED}
    if UNCATEGORIZED in groups:
        ordered[UNCATEGORIZED] = groups[UNCATEGORIZED]
    return ordered
