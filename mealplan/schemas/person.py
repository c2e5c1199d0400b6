"""Person schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mealplan.schemas.common import reject_explicit_nulls


class PersonCreate(BaseModel):
    """Create a person with daily nutrition targets."""

    name: str = Field(..., min_length=1, max_length=255)
    calories: float = Field(0, ge=0)
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fat: float = Field(0, ge=0)
    fiber: float = Field(0, ge=0)
    sugar: float = Field(0, ge=0)


class PersonUpdate(BaseModel):
    """Update a person."""

    name: str | None = Field(None, min_length=1, max_length=255)
    calories: float | None = Field(None, ge=0)
    protein: float | None = Field(None, ge=0)
    carbs: float | None = Field(None, ge=0)
    fat: float | None = Field(None, ge=0)
    fiber: float | None = Field(None, ge=0)
    sugar: float | None = Field(None, ge=0)

    @model_validator(mode="after")
    def validate_nulls(self) -> "PersonUpdate":
        reject_explicit_nulls(self)
        return self


class PersonResponse(BaseModel):
    """Person response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    sugar: float
    created_at: datetime
