"""Celery tasks for recomputing cached recipe nutrition."""

import logging

from mealplan.celery_app import app as celery_app
from mealplan.database import SessionLocal
from mealplan.models.recipe import Recipe
from mealplan.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3)
def refresh_recipe_nutrition(self, recipe_id: int) -> dict:
    """Recompute the cached total nutrition of a recipe.

    Args:
        recipe_id: ID of the Recipe to refresh

    Returns:
        dict with the refreshed totals
    """
    db = SessionLocal()
    try:
        recipe = db.query(Recipe).filter(Recipe.id == recipe_id).first()
        if not recipe:
            return {"error": "Recipe not found"}

        total = RecipeService(db).refresh_nutrition(recipe)
        db.commit()
        logger.info(f"Refreshed nutrition for recipe {recipe_id}: {total.calories:.0f} kcal")
        return {"success": True, "recipe_id": recipe_id, **total.as_dict()}

    except Exception as e:
        logger.error(f"Error refreshing nutrition for recipe {recipe_id}: {e}", exc_info=True)
        db.rollback()

        if self.request.retries < self.max_retries:
            raise self.retry(exc=e, countdown=60) from e

        return {"error": str(e)}
    finally:
        db.close()


@celery_app.task(bind=True, max_retries=3)
def refresh_all_recipe_nutrition(self) -> dict:
    """Recompute the cached total nutrition of every recipe."""
    db = SessionLocal()
    try:
        service = RecipeService(db)
        recipes = db.query(Recipe).order_by(Recipe.id).all()
        for recipe in recipes:
            service.refresh_nutrition(recipe)
        db.commit()
        logger.info(f"Refreshed nutrition for {len(recipes)} recipes")
        return {"success": True, "refreshed": len(recipes)}

    except Exception as e:
        logger.error(f"Error refreshing recipe nutrition: {e}", exc_info=True)
        db.rollback()

        if self.request.retries < self.max_retries:
            raise self.retry(exc=e, countdown=60) from e

        return {"error": str(e)}
    finally:
        db.close()
