"""Meal plan API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from mealplan.api.dependencies import get_date_range, get_meal_plan_service
from mealplan.schemas.meal_plan import (
    MealPlanEntryCreate,
    MealPlanEntryResponse,
    MealPlanEntryUpdate,
    WeeklyPlanResponse,
)
from mealplan.services.meal_plan_service import MealPlanService
from mealplan.services.records import DateRange

router = APIRouter(prefix="/api/v1/meal-plans", tags=["meal-plans"])

MealPlanServiceDep = Annotated[MealPlanService, Depends(get_meal_plan_service)]


@router.get("", response_model=WeeklyPlanResponse)
async def get_plan(
    service: MealPlanServiceDep,
    date_range: Annotated[DateRange, Depends(get_date_range)],
):
    """Get the plan for a date range (the current week by default) with daily summaries."""
    return service.weekly_plan(date_range)


@router.post("", response_model=MealPlanEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_entry(data: MealPlanEntryCreate, service: MealPlanServiceDep):
    """Plan a recipe in a meal slot."""
    return service.entry_response(service.create_entry(data))


@router.put("/{entry_id}", response_model=MealPlanEntryResponse)
async def update_entry(entry_id: int, data: MealPlanEntryUpdate, service: MealPlanServiceDep):
    """Change the portions, day or meal slot of a planned meal."""
    entry = service.update_entry(service.get_entry(entry_id), data)
    return service.entry_response(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(entry_id: int, service: MealPlanServiceDep):
    """Remove a planned meal."""
    service.delete_entry(service.get_entry(entry_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
