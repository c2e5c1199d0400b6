#!/usr/bin/env python3
"""Inspect and repair cached recipe nutrition.

Usage:
    python scripts/recipe_nutrition.py list-ingredients
    python scripts/recipe_nutrition.py show 12
    python scripts/recipe_nutrition.py refresh --dry-run
"""

import argparse
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mealplan.database import SessionLocal
from mealplan.models import Ingredient, Recipe
from mealplan.services.nutrition import compute_recipe_nutrition, ingredient_breakdown
from mealplan.services.recipe_service import RecipeService
from mealplan.services.records import round_half_up


def list_ingredients(db) -> None:
    """Print every ingredient with its base quantity and nutrients."""
    for ingredient in db.query(Ingredient).order_by(Ingredient.name).all():
        print(
            f"{ingredient.id:>4}  {ingredient.name[:30]:<30} "
            f"per {ingredient.base_quantity:g} {ingredient.base_unit:<4} | "
            f"{ingredient.calories:>7.1f} kcal  P {ingredient.protein:>5.1f}  "
            f"C {ingredient.carbs:>5.1f}  F {ingredient.fat:>5.1f}"
        )
        for equivalence in ingredient.unit_equivalences:
            factor = equivalence.conversion_factor
            print(f"        1 {equivalence.unit_name} = {factor:g} {ingredient.base_unit}")


def show_recipe(db, recipe_id: int) -> int:
    """Print a recipe's rows with their contributions, and cached vs live totals."""
    recipe = db.query(Recipe).filter(Recipe.id == recipe_id).first()
    if not recipe:
        print(f"Recipe {recipe_id} not found")
        return 1

    print(f"{recipe.name} ({recipe.porciones} portions)")
    print("-" * 60)
    for line in ingredient_breakdown(recipe.ingredients):
        hint = f" {line.conversion_text}" if line.conversion_text else ""
        print(
            f"  {line.ingredient.name[:25]:<25} {line.quantity:g} {line.unit_name}{hint}"
            f" -> {line.nutrition.calories:.1f} kcal"
        )

    live = compute_recipe_nutrition(recipe.ingredients)
    print()
    print(f"Cached total: {recipe.total_nutrition}")
    print(f"Live total:   {live.rounded()}")
    if recipe.total_nutrition and live.rounded() != {
        name: round_half_up(value) for name, value in recipe.total_nutrition.items()
    }:
        print("Cached total is stale; run `refresh` to update it")
    return 0


def refresh(db, dry_run: bool = False) -> int:
    """Recompute the cached total nutrition of every recipe."""
    service = RecipeService(db)
    recipes = db.query(Recipe).order_by(Recipe.id).all()
    for recipe in recipes:
        before = recipe.total_nutrition
        total = service.refresh_nutrition(recipe)
        print(f"{recipe.name[:40]:<40} | {before} -> {total.rounded()}")

    if dry_run:
        db.rollback()
        print()
        print("DRY RUN - no changes saved")
    else:
        db.commit()
        print()
        print(f"Refreshed {len(recipes)} recipes")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Inspect and repair cached recipe nutrition")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("list-ingredients", help="List ingredients and their nutrients")
    show_parser = subparsers.add_parser("show", help="Show a recipe's nutrition breakdown")
    show_parser.add_argument("recipe_id", type=int)
    refresh_parser = subparsers.add_parser("refresh", help="Recompute every recipe's cached total")
    refresh_parser.add_argument(
        "--dry-run", "-n", action="store_true", help="Preview without saving"
    )
    args = parser.parse_args()

    db = SessionLocal()
    try:
        if args.command == "list-ingredients":
            list_ingredients(db)
            return 0
        if args.command == "show":
            return show_recipe(db, args.recipe_id)
        return refresh(db, dry_run=args.dry_run)
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
