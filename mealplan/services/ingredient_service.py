"""Ingredient service for CRUD, equivalence replacement and usage checks."""

import logging

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from mealplan.models.ingredient import Ingredient, UnitEquivalence
from mealplan.models.recipe import RecipeIngredient
from mealplan.models.shopping_list import ShoppingListItem
from mealplan.schemas.ingredient import (
    EquivalenceResponse,
    IngredientCreate,
    IngredientEquivalencesResponse,
    IngredientUpdate,
    UnitEquivalenceCreate,
)
from mealplan.services.units import convert_to_base_unit, list_equivalences

logger = logging.getLogger(__name__)

NUTRITION_COLUMNS = {
    "base_unit",
    "base_quantity",
    "calories",
    "protein",
    "carbs",
    "fat",
    "fiber",
    "sugar",
}


class IngredientService:
    """Service for ingredient-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_ingredients(self, search: str | None = None, tags: list[str] | None = None):
        query = self.db.query(Ingredient)
        if search:
            query = query.filter(Ingredient.name.ilike(f"%{search.strip()}%"))
        ingredients = query.order_by(Ingredient.name).all()
        if tags:
            wanted = set(tags)
            ingredients = [i for i in ingredients if wanted.intersection(i.tags or [])]
        return ingredients

    def get_ingredient(self, ingredient_id: int) -> Ingredient:
        ingredient = self.db.query(Ingredient).filter(Ingredient.id == ingredient_id).first()
        if not ingredient:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found"
            )
        return ingredient

    def all_tags(self) -> list[str]:
        tags = set()
        for (ingredient_tags,) in self.db.query(Ingredient.tags).all():
            tags.update(ingredient_tags or [])
        return sorted(tags)

    def create_ingredient(self, data: IngredientCreate) -> Ingredient:
        ingredient = Ingredient(**data.model_dump(exclude={"equivalences"}))
        ingredient.unit_equivalences = [
            UnitEquivalence(unit_name=e.unit_name, conversion_factor=e.conversion_factor)
            for e in data.equivalences
        ]
        self.db.add(ingredient)
        self.db.commit()
        self.db.refresh(ingredient)
        logger.info(f"Created ingredient {ingredient.id}: {ingredient.name}")
        return ingredient

    def update_ingredient(self, ingredient: Ingredient, data: IngredientUpdate) -> list[int]:
        """Apply an update and return the ids of recipes whose nutrition it affects."""
        update_data = data.model_dump(exclude_unset=True, exclude={"equivalences"})
        base_unit = update_data.get("base_unit") or ingredient.base_unit

        equivalences = data.equivalences
        if equivalences is None:
            existing = {e.unit_name for e in ingredient.unit_equivalences}
            if base_unit in existing:
                raise HTTPException(
                    status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                    detail=f"Base unit '{base_unit}' is already declared as an equivalence",
                )
        elif base_unit in {e.unit_name for e in equivalences}:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="An equivalence cannot use the base unit",
            )

        try:
            for field, value in update_data.items():
                setattr(ingredient, field, value)
            if equivalences is not None:
                self._replace_equivalences(ingredient, equivalences)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(ingredient)

        if equivalences is None and not set(update_data).intersection(NUTRITION_COLUMNS):
            return []
        return self.affected_recipe_ids(ingredient.id)

    def _replace_equivalences(
        self, ingredient: Ingredient, equivalences: list[UnitEquivalenceCreate]
    ) -> None:
        # Delete and flush first so re-used unit names don't hit the unique constraint
        for equivalence in list(ingredient.unit_equivalences):
            ingredient.unit_equivalences.remove(equivalence)
        self.db.flush()
        for equivalence in equivalences:
            ingredient.unit_equivalences.append(
                UnitEquivalence(
                    unit_name=equivalence.unit_name,
                    conversion_factor=equivalence.conversion_factor,
                )
            )

    def usage_count(self, ingredient_id: int) -> int:
        return (
            self.db.query(func.count(RecipeIngredient.id))
            .filter(RecipeIngredient.ingredient_id == ingredient_id)
            .scalar()
        )

    def affected_recipe_ids(self, ingredient_id: int) -> list[int]:
        rows = (
            self.db.query(RecipeIngredient.recipe_id)
            .filter(RecipeIngredient.ingredient_id == ingredient_id)
            .distinct()
            .all()
        )
        return sorted(recipe_id for (recipe_id,) in rows)

    def delete_ingredient(self, ingredient: Ingredient, force: bool = False) -> list[int]:
        """Delete an ingredient and return the ids of recipes that used it.

        An ingredient used in recipes is only deleted with ``force``; its recipe
        lines go first, then its equivalences, then the ingredient itself.
        """
        usage = self.usage_count(ingredient.id)
        if usage and not force:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=(
                    f"Ingredient is used in {usage} recipe ingredient(s); "
                    "pass force=true to delete"
                ),
            )
        recipe_ids = self.affected_recipe_ids(ingredient.id)

        self.db.query(RecipeIngredient).filter(
            RecipeIngredient.ingredient_id == ingredient.id
        ).delete(synchronize_session=False)
        self.db.query(ShoppingListItem).filter(
            ShoppingListItem.ingredient_id == ingredient.id
        ).delete(synchronize_session=False)
        self.db.query(UnitEquivalence).filter(
            UnitEquivalence.ingredient_id == ingredient.id
        ).delete(synchronize_session=False)
        self.db.expire(ingredient)
        self.db.delete(ingredient)
        self.db.commit()
        logger.info(f"Deleted ingredient {ingredient.id}, used by recipes {recipe_ids}")
        return recipe_ids

    def equivalences(
        self, ingredient: Ingredient, quantity: float, unit: str | None = None
    ) -> IngredientEquivalencesResponse:
        unit = unit or ingredient.base_unit
        quantity_in_base = convert_to_base_unit(quantity, unit, ingredient)
        return IngredientEquivalencesResponse(
            ingredient_id=ingredient.id,
            quantity=quantity,
            unit=unit,
            quantity_in_base=quantity_in_base,
            equivalences=[
                EquivalenceResponse(**e.as_dict())
                for e in list_equivalences(ingredient, quantity_in_base)
            ],
        )
