"""Shopping list service for live, saved and copied lists."""

import logging
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from mealplan.config import Settings
from mealplan.models.shopping_list import ShoppingList, ShoppingListItem
from mealplan.schemas.shopping_list import (
    LiveShoppingListResponse,
    ShoppingItemResponse,
    ShoppingItemUpdate,
    ShoppingListCreate,
    ShoppingListResponse,
    ShoppingListSummary,
)
from mealplan.services.meal_plan_service import MealPlanService
from mealplan.services.records import DateRange
from mealplan.services.shopping import (
    SUGGESTED_TAGS,
    ShoppingItem,
    available_tags,
    build_shopping_list,
    filter_by_tags,
    group_by_tags,
    load_shopping_list,
)

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (consolidated)"


def items_payload(items: dict[Any, ShoppingItem], tags: list[str] | None = None) -> dict:
    """Serialized items (optionally filtered by tag) with their tag groups."""
    selected = filter_by_tags(items, tags)
    return {
        "items": [ShoppingItemResponse(**item.as_dict()) for item in selected],
        "groups": {
            tag: [item.ingredient.id for item in group]
            for tag, group in group_by_tags(selected).items()
        },
        "available_tags": available_tags(items),
    }


class ShoppingListService:
    """Service for shopping list operations."""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    # --- Live ---

    def live_items(self, date_range: DateRange) -> dict[Any, ShoppingItem]:
        entries = MealPlanService(self.db).planned_meals(date_range)
        return build_shopping_list(date_range, entries)

    def live_response(
        self, date_range: DateRange, tags: list[str] | None = None
    ) -> LiveShoppingListResponse:
        return LiveShoppingListResponse(
            start=date_range.start,
            end=date_range.end,
            suggested_tags=SUGGESTED_TAGS,
            **items_payload(self.live_items(date_range), tags),
        )

    # --- Saved ---

    def list_shopping_lists(self) -> list[ShoppingList]:
        return (
            self.db.query(ShoppingList)
            .order_by(ShoppingList.created_at.desc(), ShoppingList.id.desc())
            .all()
        )

    def get_shopping_list(self, list_id: int) -> ShoppingList:
        shopping_list = self.db.query(ShoppingList).filter(ShoppingList.id == list_id).first()
        if not shopping_list:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Shopping list not found"
            )
        return shopping_list

    def save_shopping_list(self, data: ShoppingListCreate) -> ShoppingList:
        """Snapshot the live list of a date range."""
        date_range = DateRange(data.start_date, data.end_date)
        items = self.live_items(date_range)
        shopping_list = ShoppingList(
            name=data.name or f"Shopping list {data.start_date} - {data.end_date}",
            start_date=data.start_date,
            end_date=data.end_date,
        )
        shopping_list.items = [
            ShoppingListItem(
                ingredient_id=item.ingredient.id,
                quantity=item.total_quantity,
                purchased=False,
                recipe_sources=[source.as_dict() for source in item.recipes],
            )
            for item in items.values()
        ]
        self.db.add(shopping_list)
        self.db.commit()
        self.db.refresh(shopping_list)
        logger.info(f"Saved shopping list {shopping_list.id} with {len(items)} items")
        return shopping_list

    def copy_shopping_list(self, original: ShoppingList) -> ShoppingList:
        """Copy a list, keeping overrides; the copy starts with nothing purchased."""
        copy = ShoppingList(
            name=f"{original.name}{COPY_SUFFIX}",
            start_date=original.start_date,
            end_date=original.end_date,
            original_list_id=original.id,
            is_copy=True,
        )
        copy.items = [
            ShoppingListItem(
                ingredient_id=item.ingredient_id,
                quantity=item.quantity,
                custom_quantity=item.custom_quantity,
                custom_unit=item.custom_unit,
                purchased=False,
                recipe_sources=list(item.recipe_sources or []),
            )
            for item in original.items
        ]
        self.db.add(copy)
        self.db.commit()
        self.db.refresh(copy)
        logger.info(f"Copied shopping list {original.id} to {copy.id}")
        return copy

    def delete_shopping_list(self, shopping_list: ShoppingList) -> None:
        """Delete a list and the lists copied from it.

        Only one level goes: copies of those copies are detached and stay copies.
        """
        copies = (
            self.db.query(ShoppingList)
            .filter(ShoppingList.original_list_id == shopping_list.id)
            .all()
        )
        copy_ids = [copy.id for copy in copies]
        if copy_ids:
            self.db.query(ShoppingList).filter(
                ShoppingList.original_list_id.in_(copy_ids)
            ).update({ShoppingList.original_list_id: None}, synchronize_session="fetch")
        for copy in copies:
            self.db.delete(copy)
        self.db.flush()
        self.db.delete(shopping_list)
        self.db.commit()
        logger.info(f"Deleted shopping list {shopping_list.id}")

    def _get_item(self, shopping_list: ShoppingList, ingredient_id: int) -> ShoppingListItem:
        for item in shopping_list.items:
            if item.ingredient_id == ingredient_id:
                return item
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Item not found in shopping list"
        )

    def update_item(
        self, shopping_list: ShoppingList, ingredient_id: int, data: ShoppingItemUpdate
    ) -> ShoppingListItem:
        """Set or clear the manual quantity override of an item."""
        if not shopping_list.kind.allows_quantity_edits(self.settings.only_copied_lists_editable):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Quantities can only be edited on a copied list",
            )
        item = self._get_item(shopping_list, ingredient_id)

        if data.custom_quantity is None:
            item.custom_quantity = None
            item.custom_unit = None
        else:
            ingredient = item.ingredient
            unit = data.custom_unit or ingredient.base_unit
            declared = {ingredient.base_unit} | {e.unit_name for e in ingredient.unit_equivalences}
            if unit not in declared:
                raise HTTPException(
                    status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                    detail=f"Unit '{unit}' is not declared for ingredient '{ingredient.name}'",
                )
            item.custom_quantity = data.custom_quantity
            item.custom_unit = unit

        self.db.commit()
        self.db.refresh(item)
        return item

    def toggle_purchased(self, shopping_list: ShoppingList, ingredient_id: int) -> ShoppingListItem:
        if not shopping_list.kind.allows_purchase_toggle():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Items can only be marked purchased on a saved list",
            )
        item = self._get_item(shopping_list, ingredient_id)
        item.purchased = not item.purchased
        self.db.commit()
        self.db.refresh(item)
        return item

    # --- Responses ---

    def summary(self, shopping_list: ShoppingList) -> ShoppingListSummary:
        return ShoppingListSummary(
            id=shopping_list.id,
            name=shopping_list.name,
            start_date=shopping_list.start_date,
            end_date=shopping_list.end_date,
            original_list_id=shopping_list.original_list_id,
            kind=shopping_list.kind,
            item_count=len(shopping_list.items),
            created_at=shopping_list.created_at,
        )

    def response(
        self, shopping_list: ShoppingList, tags: list[str] | None = None
    ) -> ShoppingListResponse:
        items = load_shopping_list(shopping_list.items)
        return ShoppingListResponse(
            **self.summary(shopping_list).model_dump(),
            **items_payload(items, tags),
        )
