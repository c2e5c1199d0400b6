"""Meal plan service for meal types, planned meals and daily summaries."""

import logging
from collections import defaultdict

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from mealplan.models.meal_plan import MealPlanEntry, MealType
from mealplan.models.person import Person
from mealplan.models.recipe import Recipe
from mealplan.schemas.meal_plan import (
    DayPlanResponse,
    MealPlanEntryCreate,
    MealPlanEntryResponse,
    MealPlanEntryUpdate,
    PersonProgress,
    WeeklyPlanResponse,
)
from mealplan.schemas.nutrition import NutritionValuesSchema
from mealplan.services.planner import (
    daily_totals,
    macro_distribution,
    planned_meal_nutrition,
    target_progress,
)
from mealplan.services.records import DateRange, PlannedMeal

logger = logging.getLogger(__name__)


class MealPlanService:
    """Service for meal planning operations."""

    def __init__(self, db: Session):
        self.db = db

    # --- Meal types ---

    def list_meal_types(self) -> list[MealType]:
        return self.db.query(MealType).order_by(MealType.sort_order, MealType.id).all()

    def get_meal_type(self, meal_type_id: int) -> MealType:
        meal_type = self.db.query(MealType).filter(MealType.id == meal_type_id).first()
        if not meal_type:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meal type not found")
        return meal_type

    def create_meal_type(self, name: str) -> MealType:
        last = self.db.query(func.max(MealType.sort_order)).scalar() or 0
        meal_type = MealType(name=name.strip(), sort_order=last + 1)
        self.db.add(meal_type)
        self.db.commit()
        self.db.refresh(meal_type)
        return meal_type

    def rename_meal_type(self, meal_type: MealType, name: str) -> MealType:
        meal_type.name = name.strip()
        self.db.commit()
        self.db.refresh(meal_type)
        return meal_type

    def reorder_meal_types(self, meal_type_ids: list[int]) -> list[MealType]:
        """Set ``sort_order`` to each meal type's 1-based position in ``meal_type_ids``."""
        meal_types = {meal_type.id: meal_type for meal_type in self.list_meal_types()}
        if sorted(meal_type_ids) != sorted(meal_types):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Order must list every meal type exactly once",
            )
        for index, meal_type_id in enumerate(meal_type_ids):
            meal_types[meal_type_id].sort_order = index + 1
        self.db.commit()
        return self.list_meal_types()

    def delete_meal_type(self, meal_type: MealType) -> None:
        """Delete a meal type together with the meals planned in it."""
        self.db.delete(meal_type)
        self.db.commit()

    # --- Entries ---

    def get_entry(self, entry_id: int) -> MealPlanEntry:
        entry = self.db.query(MealPlanEntry).filter(MealPlanEntry.id == entry_id).first()
        if not entry:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Meal plan entry not found"
            )
        return entry

    def _get_recipe(self, recipe_id: int) -> Recipe:
        recipe = self.db.query(Recipe).filter(Recipe.id == recipe_id).first()
        if not recipe:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
        return recipe

    def entries_in_range(self, date_range: DateRange) -> list[MealPlanEntry]:
        """Entries ordered by day, then meal type order."""
        return (
            self.db.query(MealPlanEntry)
            .join(MealType)
            .filter(MealPlanEntry.date >= date_range.start, MealPlanEntry.date <= date_range.end)
            .order_by(MealPlanEntry.date, MealType.sort_order, MealPlanEntry.id)
            .all()
        )

    def planned_meals(self, date_range: DateRange) -> list[PlannedMeal]:
        meals = []
        for entry in self.entries_in_range(date_range):
            meal = PlannedMeal.from_row(entry)
            if meal is not None:
                meals.append(meal)
        return meals

    def create_entry(self, data: MealPlanEntryCreate) -> MealPlanEntry:
        entry = MealPlanEntry(
            date=data.date,
            porciones=data.porciones,
            meal_type=self.get_meal_type(data.meal_type_id),
            recipe=self._get_recipe(data.recipe_id),
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        logger.info(
            f"Planned recipe {entry.recipe_id} on {entry.date} ({entry.porciones} portions)"
        )
        return entry

    def update_entry(self, entry: MealPlanEntry, data: MealPlanEntryUpdate) -> MealPlanEntry:
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if "meal_type_id" in update_data:
            entry.meal_type = self.get_meal_type(update_data.pop("meal_type_id"))
        for field, value in update_data.items():
            setattr(entry, field, value)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def delete_entry(self, entry: MealPlanEntry) -> None:
        self.db.delete(entry)
        self.db.commit()

    # --- Responses ---

    def entry_response(self, entry: MealPlanEntry) -> MealPlanEntryResponse:
        meal = PlannedMeal.from_row(entry)
        return MealPlanEntryResponse(
            id=entry.id,
            date=entry.date,
            meal_type_id=entry.meal_type_id,
            meal_type=entry.meal_type.name,
            recipe_id=entry.recipe_id,
            recipe_name=entry.recipe.name,
            porciones=entry.porciones,
            recipe_porciones=entry.recipe.porciones,
            nutrition=NutritionValuesSchema(**planned_meal_nutrition(meal).as_dict()),
        )

    def weekly_plan(self, date_range: DateRange) -> WeeklyPlanResponse:
        """Every day of the range with its meals, totals and per-person progress."""
        by_day = defaultdict(list)
        for entry in self.entries_in_range(date_range):
            by_day[entry.date].append(entry)
        persons = self.db.query(Person).order_by(Person.name).all()

        days = []
        for day in date_range.days():
            entries = by_day.get(day, [])
            meals = [PlannedMeal.from_row(entry) for entry in entries]
            totals = daily_totals(meal for meal in meals if meal is not None)
            days.append(
                DayPlanResponse(
                    date=day,
                    meals=[self.entry_response(entry) for entry in entries],
                    totals=NutritionValuesSchema(**totals.as_dict()),
                    rounded_totals=totals.rounded(),
                    macro_distribution=macro_distribution(totals),
                    persons=[
                        PersonProgress(
                            person_id=person.id,
                            name=person.name,
                            progress=target_progress(totals, person),
                        )
                        for person in persons
                    ],
                )
            )
        return WeeklyPlanResponse(start=date_range.start, end=date_range.end, days=days)
