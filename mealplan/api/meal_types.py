"""Meal type API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from mealplan.api.dependencies import get_meal_plan_service
from mealplan.schemas.meal_plan import (
    MealTypeCreate,
    MealTypeOrder,
    MealTypeResponse,
    MealTypeUpdate,
)
from mealplan.services.meal_plan_service import MealPlanService

router = APIRouter(prefix="/api/v1/meal-types", tags=["meal-types"])

MealPlanServiceDep = Annotated[MealPlanService, Depends(get_meal_plan_service)]


@router.get("", response_model=list[MealTypeResponse])
async def list_meal_types(service: MealPlanServiceDep):
    """List meal types in display order."""
    return service.list_meal_types()


@router.post("", response_model=MealTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_meal_type(data: MealTypeCreate, service: MealPlanServiceDep):
    """Create a meal type at the end of the order."""
    return service.create_meal_type(data.name)


@router.put("/order", response_model=list[MealTypeResponse])
async def reorder_meal_types(data: MealTypeOrder, service: MealPlanServiceDep):
    """Reorder meal types."""
    return service.reorder_meal_types(data.meal_type_ids)


@router.put("/{meal_type_id}", response_model=MealTypeResponse)
async def update_meal_type(meal_type_id: int, data: MealTypeUpdate, service: MealPlanServiceDep):
    """Rename a meal type."""
    return service.rename_meal_type(service.get_meal_type(meal_type_id), data.name)


@router.delete("/{meal_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal_type(meal_type_id: int, service: MealPlanServiceDep):
    """Delete a meal type and the meals planned in it."""
    service.delete_meal_type(service.get_meal_type(meal_type_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
