"""Recipe API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from mealplan.api.dependencies import get_recipe_service
from mealplan.schemas.nutrition import NutritionResponse
from mealplan.schemas.recipe import (
    RecipeCreate,
    RecipeListResponse,
    RecipeResponse,
    RecipeUpdate,
)
from mealplan.services.recipe_service import RecipeService

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])

RecipeServiceDep = Annotated[RecipeService, Depends(get_recipe_service)]


# --- Static routes first (before /{recipe_id}) ---


@router.post("/nutrition/refresh", status_code=status.HTTP_202_ACCEPTED)
async def refresh_all_nutrition():
    """Queue a recomputation of every recipe's cached nutrition."""
    from mealplan.tasks.nutrition import refresh_all_recipe_nutrition

    refresh_all_recipe_nutrition.delay()
    return {"queued": True}


@router.get("", response_model=list[RecipeListResponse])
async def list_recipes(
    service: RecipeServiceDep,
    search: str | None = None,
    tags: Annotated[list[str] | None, Query()] = None,
):
    """List recipes, optionally filtered by name and tags."""
    return [service.to_list_response(recipe) for recipe in service.list_recipes(search, tags)]


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
async def create_recipe(data: RecipeCreate, service: RecipeServiceDep):
    """Create a recipe with its ingredients."""
    return service.to_response(service.create_recipe(data))


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(recipe_id: int, service: RecipeServiceDep):
    """Get a recipe with per-ingredient conversions and live nutrition."""
    return service.to_response(service.get_recipe(recipe_id))


@router.put("/{recipe_id}", response_model=RecipeResponse)
async def update_recipe(recipe_id: int, data: RecipeUpdate, service: RecipeServiceDep):
    """Update a recipe; a provided ingredient list replaces the existing one."""
    recipe = service.get_recipe(recipe_id)
    return service.to_response(service.update_recipe(recipe, data))


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(recipe_id: int, service: RecipeServiceDep):
    """Delete a recipe, its ingredient lines and its planned meals."""
    service.delete_recipe(service.get_recipe(recipe_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{recipe_id}/nutrition", response_model=NutritionResponse)
async def get_recipe_nutrition(
    recipe_id: int,
    service: RecipeServiceDep,
    portions: Annotated[float | None, Query(gt=0)] = None,
):
    """Get live nutrition for the recipe's yield, per portion and for ``portions``."""
    return service.nutrition(service.get_recipe(recipe_id), portions)
