"""Shopping list API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from mealplan.api.dependencies import get_date_range, get_shopping_list_service
from mealplan.schemas.shopping_list import (
    LiveShoppingListResponse,
    ShoppingItemUpdate,
    ShoppingListCreate,
    ShoppingListResponse,
    ShoppingListSummary,
)
from mealplan.services.records import DateRange
from mealplan.services.shopping_list_service import ShoppingListService

router = APIRouter(prefix="/api/v1/shopping-lists", tags=["shopping-lists"])

ShoppingListServiceDep = Annotated[ShoppingListService, Depends(get_shopping_list_service)]
TagsQuery = Annotated[list[str] | None, Query()]


# --- Static routes first (before /{list_id}) ---


@router.get("/live", response_model=LiveShoppingListResponse)
async def get_live_list(
    service: ShoppingListServiceDep,
    date_range: Annotated[DateRange, Depends(get_date_range)],
    tags: TagsQuery = None,
):
    """Compute the shopping list for the meals planned in a date range."""
    return service.live_response(date_range, tags)


@router.get("", response_model=list[ShoppingListSummary])
async def list_shopping_lists(service: ShoppingListServiceDep):
    """List saved and copied shopping lists, newest first."""
    return [service.summary(shopping_list) for shopping_list in service.list_shopping_lists()]


@router.post("", response_model=ShoppingListResponse, status_code=status.HTTP_201_CREATED)
async def save_shopping_list(data: ShoppingListCreate, service: ShoppingListServiceDep):
    """Save the live list of a date range."""
    return service.response(service.save_shopping_list(data))


@router.get("/{list_id}", response_model=ShoppingListResponse)
async def get_shopping_list(list_id: int, service: ShoppingListServiceDep, tags: TagsQuery = None):
    """Get a saved list with its items."""
    return service.response(service.get_shopping_list(list_id), tags)


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shopping_list(list_id: int, service: ShoppingListServiceDep):
    """Delete a list and the lists copied from it."""
    service.delete_shopping_list(service.get_shopping_list(list_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{list_id}/copy", response_model=ShoppingListResponse, status_code=status.HTTP_201_CREATED
)
async def copy_shopping_list(list_id: int, service: ShoppingListServiceDep):
    """Copy a list so its quantities can be edited."""
    copy = service.copy_shopping_list(service.get_shopping_list(list_id))
    return service.response(copy)


@router.put("/{list_id}/items/{ingredient_id}", response_model=ShoppingListResponse)
async def update_item(
    list_id: int,
    ingredient_id: int,
    data: ShoppingItemUpdate,
    service: ShoppingListServiceDep,
):
    """Override (or clear) the quantity and unit shown for an item."""
    shopping_list = service.get_shopping_list(list_id)
    service.update_item(shopping_list, ingredient_id, data)
    return service.response(shopping_list)


@router.post(
    "/{list_id}/items/{ingredient_id}/toggle-purchased", response_model=ShoppingListResponse
)
async def toggle_purchased(list_id: int, ingredient_id: int, service: ShoppingListServiceDep):
    """Mark an item as purchased, or not."""
    shopping_list = service.get_shopping_list(list_id)
    service.toggle_purchased(shopping_list, ingredient_id)
    return service.response(shopping_list)
