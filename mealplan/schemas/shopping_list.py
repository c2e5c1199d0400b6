"""Shopping list schemas."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from mealplan.models.enums import ShoppingListKind
from mealplan.schemas.ingredient import EquivalenceResponse


class ProvenanceResponse(BaseModel):
    """How much one recipe on one day contributes to an item."""

    recipe_id: int | None
    recipe_name: str
    date: str
    meal_type: str | None
    quantity: float
    porciones: float


class ShoppingItemResponse(BaseModel):
    """A consolidated ingredient line."""

    ingredient_id: int
    name: str
    base_unit: str
    tags: list[str]
    image_url: str | None
    total_quantity: float
    custom_quantity: float | None
    custom_unit: str | None
    display_quantity: float
    display_unit: str
    purchased: bool
    total_portions: float
    recipes: list[ProvenanceResponse]
    equivalences: list[EquivalenceResponse]


class LiveShoppingListResponse(BaseModel):
    """Shopping list computed from the meal plan of a date range."""

    start: date
    end: date
    kind: ShoppingListKind = ShoppingListKind.LIVE
    items: list[ShoppingItemResponse]
    groups: dict[str, list[int]]
    available_tags: list[str]
    suggested_tags: list[str]


class ShoppingListCreate(BaseModel):
    """Save the live list of a date range as a snapshot."""

    name: str | None = Field(None, max_length=255)
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def validate_range(self) -> "ShoppingListCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ShoppingListSummary(BaseModel):
    """Saved list without its items."""

    id: int
    name: str
    start_date: date
    end_date: date
    original_list_id: int | None
    kind: ShoppingListKind
    item_count: int
    created_at: datetime


class ShoppingListResponse(ShoppingListSummary):
    """Saved list with its items."""

    items: list[ShoppingItemResponse]
    groups: dict[str, list[int]]
    available_tags: list[str]


class ShoppingItemUpdate(BaseModel):
    """Override the displayed quantity of an item; null clears the override."""

    custom_quantity: float | None = Field(None, gt=0)
    custom_unit: str | None = Field(None, max_length=50)
