"""Plain records consumed by the nutrition and shopping calculations.

Rows reach the calculations either as ORM objects or as mappings shaped like the
store's tables. ``from_row`` normalizes both into these records and defaults
missing or null numbers to 0, so nothing downstream has to guess about
partially populated rows.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any

logger = logging.getLogger(__name__)

NUTRIENT_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sugar")


def row_value(row: Any, name: str, default: Any = None) -> Any:
    """Read a field from a mapping or an object, falling back to ``default`` on None."""
    if row is None:
        return default
    if isinstance(row, Mapping):
        value = row.get(name, default)
    else:
        value = getattr(row, name, default)
    return default if value is None else value


def to_number(value: Any, default: float = 0.0) -> float:
    """Coerce to a finite float, or return ``default``."""
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half up (towards +inf on ties), like ``Math.round(x * 10**d) / 10**d``."""
    if not math.isfinite(value):
        return 0
    scale = 10**digits
    shifted = value * scale + 0.5
    if not math.isfinite(shifted):
        return int(value) if digits == 0 else value
    rounded = math.floor(shifted) / scale
    return int(rounded) if digits == 0 else rounded


def parse_date(value: Any) -> date | None:
    """Parse an ISO ``yyyy-MM-dd`` string (or date/datetime) into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class NutritionValues:
    """The six tracked nutrients. All fields are always present."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0

    @classmethod
    def from_row(cls, row: Any) -> "NutritionValues":
        return cls(**{name: to_number(row_value(row, name, 0.0)) for name in NUTRIENT_FIELDS})

    def __add__(self, other: "NutritionValues") -> "NutritionValues":
        if not isinstance(other, NutritionValues):
            return NotImplemented
        return NutritionValues(
            **{name: getattr(self, name) + getattr(other, name) for name in NUTRIENT_FIELDS}
        )

    def scaled(self, factor: float) -> "NutritionValues":
        return NutritionValues(**{name: getattr(self, name) * factor for name in NUTRIENT_FIELDS})

    def rounded(self) -> dict[str, int]:
        """Integer values for presentation."""
        return {name: round_half_up(getattr(self, name)) for name in NUTRIENT_FIELDS}

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in NUTRIENT_FIELDS}


@dataclass(frozen=True)
class EquivalenceData:
    """``1 unit_name == conversion_factor x base_unit``."""

    unit_name: str
    conversion_factor: float

    @classmethod
    def from_row(cls, row: Any) -> "EquivalenceData":
        return cls(
            unit_name=str(row_value(row, "unit_name", "")),
            conversion_factor=to_number(row_value(row, "conversion_factor", 0.0)),
        )


@dataclass(frozen=True)
class IngredientData:
    """Ingredient snapshot. Nutrition is per ``base_quantity`` of ``base_unit``."""

    id: Any
    name: str
    base_unit: str
    base_quantity: float
    nutrition: NutritionValues = field(default_factory=NutritionValues)
    tags: tuple[str, ...] = ()
    image_url: str | None = None
    equivalences: tuple[EquivalenceData, ...] = ()

    @classmethod
    def from_row(cls, row: Any) -> "IngredientData":
        if isinstance(row, IngredientData):
            return row
        return cls(
            id=row_value(row, "id"),
            name=str(row_value(row, "name", "")),
            base_unit=str(row_value(row, "base_unit", "")),
            base_quantity=to_number(row_value(row, "base_quantity", 0.0)),
            nutrition=NutritionValues.from_row(row),
            tags=tuple(str(tag) for tag in row_value(row, "tags", ())),
            image_url=row_value(row, "image_url"),
            equivalences=tuple(
                EquivalenceData.from_row(equivalence)
                for equivalence in row_value(row, "unit_equivalences", ())
            ),
        )

    def units(self) -> dict[str, float]:
        """Available units and their factors; the base unit always maps to 1."""
        units = {self.base_unit: 1.0}
        for equivalence in self.equivalences:
            units.setdefault(equivalence.unit_name, equivalence.conversion_factor)
        return units


def _ingredient_of(row: Any) -> Any:
    # ORM rows expose ``ingredient``; joined store rows name it ``ingredients``
    return row_value(row, "ingredient") or row_value(row, "ingredients")


@dataclass(frozen=True)
class RecipeIngredientData:
    """One ingredient line of a recipe, in any of the ingredient's units."""

    ingredient: IngredientData
    quantity: float
    unit_name: str

    @classmethod
    def from_row(cls, row: Any) -> "RecipeIngredientData | None":
        """Build from a row, or None when the ingredient reference is missing."""
        if isinstance(row, RecipeIngredientData):
            return row
        ingredient = _ingredient_of(row)
        if ingredient is None:
            logger.debug(f"Skipping recipe ingredient row without ingredient: {row!r}")
            return None
        ingredient = IngredientData.from_row(ingredient)
        return cls(
            ingredient=ingredient,
            quantity=to_number(row_value(row, "quantity", 0.0)),
            unit_name=str(row_value(row, "unit_name", ingredient.base_unit)),
        )


def recipe_ingredients_from_rows(rows: Iterable[Any] | None) -> list[RecipeIngredientData]:
    """Normalize recipe ingredient rows, dropping those without an ingredient."""
    records = []
    for row in rows or ():
        record = RecipeIngredientData.from_row(row)
        if record is not None:
            records.append(record)
    return records


@dataclass(frozen=True)
class RecipeData:
    """Recipe snapshot; ``porciones`` is the yield its ingredient list represents."""

    id: Any
    name: str
    porciones: float = 1.0
    ingredients: tuple[RecipeIngredientData, ...] = ()
    tags: tuple[str, ...] = ()
    image_url: str | None = None

    @classmethod
    def from_row(cls, row: Any) -> "RecipeData":
        if isinstance(row, RecipeData):
            return row
        return cls(
            id=row_value(row, "id"),
            name=str(row_value(row, "name", "")),
            porciones=to_number(row_value(row, "porciones", 1), 1.0),
            ingredients=tuple(recipe_ingredients_from_rows(row_value(row, "ingredients", ()))),
            tags=tuple(str(tag) for tag in row_value(row, "tags", ())),
            image_url=row_value(row, "image_url"),
        )


@dataclass(frozen=True)
class PlannedMeal:
    """A meal-plan entry: a recipe planned for ``porciones`` portions on a day."""

    date: date
    recipe: RecipeData
    porciones: float = 1.0
    meal_type: str | None = None
    meal_type_id: Any = None
    entry_id: Any = None

    @classmethod
    def from_row(cls, row: Any) -> "PlannedMeal | None":
        """Build from a row, or None when the date or recipe can't be resolved."""
        if isinstance(row, PlannedMeal):
            return row
        day = parse_date(row_value(row, "date"))
        recipe = row_value(row, "recipe")
        if day is None or recipe is None:
            logger.warning(f"Skipping meal plan row without a valid date or recipe: {row!r}")
            return None
        meal_type = row_value(row, "meal_type")
        if meal_type is not None and not isinstance(meal_type, str):
            meal_type = row_value(meal_type, "name")
        return cls(
            date=day,
            recipe=RecipeData.from_row(recipe),
            porciones=to_number(row_value(row, "porciones", 1), 1.0),
            meal_type=meal_type,
            meal_type_id=row_value(row, "meal_type_id"),
            entry_id=row_value(row, "id"),
        )


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar days."""

    start: date
    end: date

    @classmethod
    def week_of(cls, day: date, week_starts_on: int = 0) -> "DateRange":
        """The 7-day week containing ``day``; ``week_starts_on`` uses 0 for Monday."""
        offset = (day.weekday() - week_starts_on) % 7
        start = day - timedelta(days=offset)
        return cls(start=start, end=start + timedelta(days=6))

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def days(self) -> list[date]:
        if self.end < self.start:
            return []
        return [self.start + timedelta(days=i) for i in range((self.end - self.start).days + 1)]
