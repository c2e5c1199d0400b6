"""Ingredient schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mealplan.schemas.common import reject_explicit_nulls

# --- Unit equivalences ---


class UnitEquivalenceCreate(BaseModel):
    """Declare ``1 unit_name == conversion_factor x base_unit``."""

    unit_name: str = Field(..., min_length=1, max_length=50)
    conversion_factor: float = Field(..., gt=0)

    @field_validator("unit_name")
    @classmethod
    def strip_unit_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("unit_name must not be blank")
        return value


class UnitEquivalenceResponse(BaseModel):
    """Unit equivalence response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    unit_name: str
    conversion_factor: float


def _check_equivalences(base_unit: str | None, equivalences: list[UnitEquivalenceCreate] | None):
    if equivalences is None:
        return
    names = [equivalence.unit_name for equivalence in equivalences]
    if len(names) != len(set(names)):
        raise ValueError("Equivalence unit names must be unique")
    if base_unit is not None and base_unit in names:
        raise ValueError("An equivalence cannot use the base unit")


# --- Ingredient ---


class IngredientCreate(BaseModel):
    """Create a new ingredient. Nutrition is per ``base_quantity`` of ``base_unit``."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    image_url: str | None = Field(None, max_length=1000)
    base_unit: str = Field(..., min_length=1, max_length=50)
    base_quantity: float = Field(100, gt=0)
    calories: float = Field(0, ge=0)
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fat: float = Field(0, ge=0)
    fiber: float = Field(0, ge=0)
    sugar: float = Field(0, ge=0)
    tags: list[str] = []
    equivalences: list[UnitEquivalenceCreate] = []

    @model_validator(mode="after")
    def validate_equivalences(self) -> "IngredientCreate":
        _check_equivalences(self.base_unit, self.equivalences)
        return self


class IngredientUpdate(BaseModel):
    """Update an ingredient. A provided ``equivalences`` list replaces the existing one."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    image_url: str | None = Field(None, max_length=1000)
    base_unit: str | None = Field(None, min_length=1, max_length=50)
    base_quantity: float | None = Field(None, gt=0)
    calories: float | None = Field(None, ge=0)
    protein: float | None = Field(None, ge=0)
    carbs: float | None = Field(None, ge=0)
    fat: float | None = Field(None, ge=0)
    fiber: float | None = Field(None, ge=0)
    sugar: float | None = Field(None, ge=0)
    tags: list[str] | None = None
    equivalences: list[UnitEquivalenceCreate] | None = None

    @model_validator(mode="after")
    def validate_equivalences(self) -> "IngredientUpdate":
        reject_explicit_nulls(self, nullable=("description", "image_url", "equivalences"))
        _check_equivalences(self.base_unit, self.equivalences)
        return self


class IngredientResponse(BaseModel):
    """Ingredient response with its unit equivalences."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    image_url: str | None
    base_unit: str
    base_quantity: float
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    sugar: float
    tags: list[str]
    unit_equivalences: list[UnitEquivalenceResponse]
    created_at: datetime
    updated_at: datetime


# --- Conversions ---


class EquivalenceResponse(BaseModel):
    """A quantity expressed in one unit."""

    unit: str
    quantity: float


class IngredientEquivalencesResponse(BaseModel):
    """A quantity of an ingredient expressed in every available unit."""

    ingredient_id: int
    quantity: float
    unit: str
    quantity_in_base: float
    equivalences: list[EquivalenceResponse]


class StandardUnitResponse(BaseModel):
    """A unit offered when creating an ingredient."""

    value: str
    label: str
    grams: float | None
