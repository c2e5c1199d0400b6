"""Ingredient API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from mealplan.api.dependencies import get_ingredient_service
from mealplan.schemas.ingredient import (
    IngredientCreate,
    IngredientEquivalencesResponse,
    IngredientResponse,
    IngredientUpdate,
    StandardUnitResponse,
)
from mealplan.services.ingredient_service import IngredientService
from mealplan.services.units import STANDARD_UNITS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ingredients", tags=["ingredients"])

IngredientServiceDep = Annotated[IngredientService, Depends(get_ingredient_service)]


def queue_nutrition_refresh(recipe_ids: list[int]) -> None:
    """Queue a cached nutrition refresh for each affected recipe."""
    from mealplan.tasks.nutrition import refresh_recipe_nutrition

    for recipe_id in recipe_ids:
        refresh_recipe_nutrition.delay(recipe_id)
    if recipe_ids:
        logger.info(f"Queued nutrition refresh for recipes {recipe_ids}")


# --- Static routes first (before /{ingredient_id}) ---


@router.get("/units", response_model=list[StandardUnitResponse])
async def list_units():
    """Get the standard units offered for new ingredients."""
    return STANDARD_UNITS


@router.get("/tags", response_model=list[str])
async def list_tags(service: IngredientServiceDep):
    """Get every tag used by an ingredient."""
    return service.all_tags()


@router.get("", response_model=list[IngredientResponse])
async def list_ingredients(
    service: IngredientServiceDep,
    search: str | None = None,
    tags: Annotated[list[str] | None, Query()] = None,
):
    """List ingredients, optionally filtered by name and tags."""
    return service.list_ingredients(search=search, tags=tags)


@router.post("", response_model=IngredientResponse, status_code=status.HTTP_201_CREATED)
async def create_ingredient(data: IngredientCreate, service: IngredientServiceDep):
    """Create an ingredient with its unit equivalences."""
    return service.create_ingredient(data)


@router.get("/{ingredient_id}", response_model=IngredientResponse)
async def get_ingredient(ingredient_id: int, service: IngredientServiceDep):
    """Get an ingredient."""
    return service.get_ingredient(ingredient_id)


@router.put("/{ingredient_id}", response_model=IngredientResponse)
async def update_ingredient(
    ingredient_id: int, data: IngredientUpdate, service: IngredientServiceDep
):
    """Update an ingredient and refresh the nutrition of recipes using it."""
    ingredient = service.get_ingredient(ingredient_id)
    queue_nutrition_refresh(service.update_ingredient(ingredient, data))
    return ingredient


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ingredient(
    ingredient_id: int,
    service: IngredientServiceDep,
    force: bool = False,
):
    """Delete an ingredient; one used in recipes needs ``force=true``."""
    ingredient = service.get_ingredient(ingredient_id)
    queue_nutrition_refresh(service.delete_ingredient(ingredient, force=force))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{ingredient_id}/equivalences", response_model=IngredientEquivalencesResponse)
async def get_equivalences(
    ingredient_id: int,
    service: IngredientServiceDep,
    quantity: float | None = None,
    unit: str | None = None,
):
    """Express a quantity of the ingredient in every unit it declares."""
    ingredient = service.get_ingredient(ingredient_id)
    if quantity is None:
        quantity = ingredient.base_quantity
    return service.equivalences(ingredient, quantity, unit)
