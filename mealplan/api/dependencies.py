"""FastAPI dependencies for services and query parameters."""

from datetime import date
from typing import Annotated

from fastapi import Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from mealplan.config import Settings, get_settings
from mealplan.database import get_db
from mealplan.services.ingredient_service import IngredientService
from mealplan.services.meal_plan_service import MealPlanService
from mealplan.services.recipe_service import RecipeService
from mealplan.services.records import DateRange
from mealplan.services.shopping_list_service import ShoppingListService


def get_date_range(
    settings: Annotated[Settings, Depends(get_settings)],
    start: Annotated[date | None, Query()] = None,
    end: Annotated[date | None, Query()] = None,
) -> DateRange:
    """Date range from query parameters; defaults to the current week."""
    if start is None and end is None:
        return DateRange.week_of(date.today(), settings.week_starts_on)
    if start is None:
        start = DateRange.week_of(end, settings.week_starts_on).start
    if end is None:
        end = DateRange.week_of(start, settings.week_starts_on).end
    if end < start:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end must not be before start",
        )
    return DateRange(start, end)


def get_ingredient_service(
    db: Annotated[Session, Depends(get_db)],
) -> IngredientService:
    """Get ingredient service with dependencies."""
    return IngredientService(db)


def get_recipe_service(
    db: Annotated[Session, Depends(get_db)],
) -> RecipeService:
    """Get recipe service with dependencies."""
    return RecipeService(db)


def get_meal_plan_service(
    db: Annotated[Session, Depends(get_db)],
) -> MealPlanService:
    """Get meal plan service with dependencies."""
    return MealPlanService(db)


def get_shopping_list_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ShoppingListService:
    """Get shopping list service with dependencies."""
    return ShoppingListService(db, settings)
