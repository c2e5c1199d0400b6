"""Recipe service for saving recipes and computing their nutrition."""

import logging
from datetime import UTC, datetime

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from mealplan.models.ingredient import Ingredient
from mealplan.models.recipe import Recipe, RecipeIngredient
from mealplan.schemas.nutrition import NutritionResponse, NutritionValuesSchema
from mealplan.schemas.recipe import (
    RecipeCreate,
    RecipeIngredientCreate,
    RecipeIngredientResponse,
    RecipeListResponse,
    RecipeResponse,
    RecipeUpdate,
)
from mealplan.services.nutrition import compute_recipe_nutrition, ingredient_breakdown
from mealplan.services.portions import (
    nutrition_per_portion,
    resolve_base_portions,
    scale_to_planned_portions,
)
from mealplan.services.records import IngredientData, NutritionValues

logger = logging.getLogger(__name__)


def nutrition_schema(values: NutritionValues) -> NutritionValuesSchema:
    return NutritionValuesSchema(**values.as_dict())


class RecipeService:
    """Service for recipe-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_recipes(self, search: str | None = None, tags: list[str] | None = None):
        query = self.db.query(Recipe)
        if search:
            query = query.filter(Recipe.name.ilike(f"%{search.strip()}%"))
        recipes = query.order_by(Recipe.name).all()
        if tags:
            wanted = set(tags)
            recipes = [r for r in recipes if wanted.intersection(r.tags or [])]
        return recipes

    def get_recipe(self, recipe_id: int) -> Recipe:
        recipe = self.db.query(Recipe).filter(Recipe.id == recipe_id).first()
        if not recipe:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
        return recipe

    def _build_ingredients(self, rows: list[RecipeIngredientCreate]) -> list[RecipeIngredient]:
        """Validate ingredient references and units before anything is written."""
        ids = {row.ingredient_id for row in rows}
        ingredients = {
            ingredient.id: ingredient
            for ingredient in self.db.query(Ingredient).filter(Ingredient.id.in_(ids)).all()
        }
        missing = sorted(ids - set(ingredients))
        if missing:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Unknown ingredient id(s): {missing}",
            )

        result = []
        for row in rows:
            ingredient = ingredients[row.ingredient_id]
            unit_name = row.unit_name or ingredient.base_unit
            if unit_name not in IngredientData.from_row(ingredient).units():
                raise HTTPException(
                    status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                    detail=f"Unit '{unit_name}' is not declared for ingredient '{ingredient.name}'",
                )
            result.append(
                RecipeIngredient(ingredient=ingredient, quantity=row.quantity, unit_name=unit_name)
            )
        return result

    def refresh_nutrition(self, recipe: Recipe) -> NutritionValues:
        """Recompute the cached total; the caller commits."""
        total = compute_recipe_nutrition(recipe.ingredients)
        recipe.total_nutrition = total.as_dict()
        recipe.nutrition_computed_at = datetime.now(UTC)
        return total

    def create_recipe(self, data: RecipeCreate) -> Recipe:
        ingredients = self._build_ingredients(data.ingredients)
        recipe = Recipe(**data.model_dump(exclude={"ingredients"}))
        recipe.ingredients = ingredients
        self.db.add(recipe)
        self.refresh_nutrition(recipe)
        self.db.commit()
        self.db.refresh(recipe)
        logger.info(f"Created recipe {recipe.id}: {recipe.name}")
        return recipe

    def update_recipe(self, recipe: Recipe, data: RecipeUpdate) -> Recipe:
        """Update a recipe; a new ingredient list replaces the old one in one transaction."""
        update_data = data.model_dump(exclude_unset=True, exclude={"ingredients"})
        ingredients = None
        if data.ingredients is not None:
            ingredients = self._build_ingredients(data.ingredients)

        try:
            for field, value in update_data.items():
                setattr(recipe, field, value)
            if ingredients is not None:
                for row in list(recipe.ingredients):
                    recipe.ingredients.remove(row)
                self.db.flush()
                recipe.ingredients.extend(ingredients)
            self.refresh_nutrition(recipe)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(recipe)
        return recipe

    def delete_recipe(self, recipe: Recipe) -> None:
        """Delete a recipe with its ingredient lines and meal-plan entries."""
        self.db.delete(recipe)
        self.db.commit()
        logger.info(f"Deleted recipe {recipe.id}")

    def to_response(self, recipe: Recipe) -> RecipeResponse:
        rows = []
        for row in recipe.ingredients:
            line = ingredient_breakdown([row])[0]
            rows.append(
                RecipeIngredientResponse(
                    id=row.id,
                    ingredient_id=row.ingredient_id,
                    ingredient_name=line.ingredient.name,
                    quantity=line.quantity,
                    unit_name=line.unit_name,
                    base_unit=line.ingredient.base_unit,
                    quantity_in_base=line.quantity_in_base,
                    conversion_text=line.conversion_text,
                    nutrition=nutrition_schema(line.nutrition),
                )
            )
        total = compute_recipe_nutrition(recipe.ingredients)
        return RecipeResponse(
            id=recipe.id,
            name=recipe.name,
            description=recipe.description,
            image_url=recipe.image_url,
            instructions=recipe.instructions or [],
            tags=recipe.tags or [],
            porciones=recipe.porciones,
            ingredients=rows,
            total_nutrition=nutrition_schema(total),
            nutrition_per_portion=nutrition_schema(nutrition_per_portion(total, recipe.porciones)),
            nutrition_computed_at=recipe.nutrition_computed_at,
            created_at=recipe.created_at,
            updated_at=recipe.updated_at,
        )

    def to_list_response(self, recipe: Recipe) -> RecipeListResponse:
        cached = recipe.total_nutrition
        return RecipeListResponse(
            id=recipe.id,
            name=recipe.name,
            description=recipe.description,
            image_url=recipe.image_url,
            tags=recipe.tags or [],
            porciones=recipe.porciones,
            ingredient_count=len(recipe.ingredients),
            total_nutrition=NutritionValuesSchema(**cached) if cached else None,
            created_at=recipe.created_at,
        )

    def nutrition(self, recipe: Recipe, portions: float | None = None) -> NutritionResponse:
        """Live nutrition for the full yield, one portion and ``portions`` portions."""
        total = compute_recipe_nutrition(recipe.ingredients)
        base = resolve_base_portions(recipe.porciones)
        portions = base if portions is None else portions
        scaled = scale_to_planned_portions(total, base, portions)
        return NutritionResponse(
            recipe_id=recipe.id,
            porciones=recipe.porciones,
            portions=portions,
            total=nutrition_schema(total),
            per_portion=nutrition_schema(nutrition_per_portion(total, base)),
            scaled=nutrition_schema(scaled),
            scaled_rounded=scaled.rounded(),
        )
