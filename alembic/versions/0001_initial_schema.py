"""initial meal planner schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def _nutrients() -> list[sa.Column]:
    return [
        sa.Column(name, sa.Float(), nullable=False, server_default="0")
        for name in ("calories", "protein", "carbs", "fat", "fiber", "sugar")
    ]


def upgrade() -> None:
    op.create_table(
        "ingredients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(1000), nullable=True),
        sa.Column("base_unit", sa.String(50), nullable=False),
        sa.Column("base_quantity", sa.Float(), nullable=False, server_default="100"),
        *_nutrients(),
        sa.Column("tags", postgresql.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_ingredients_id", "ingredients", ["id"])
    op.create_index("ix_ingredients_name", "ingredients", ["name"])

    op.create_table(
        "unit_equivalences",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("ingredient_id", sa.Integer(), sa.ForeignKey("ingredients.id"), nullable=False),
        sa.Column("unit_name", sa.String(50), nullable=False),
        sa.Column("conversion_factor", sa.Float(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("ingredient_id", "unit_name", name="uq_ingredient_unit"),
    )
    op.create_index("ix_unit_equivalences_id", "unit_equivalences", ["id"])
    op.create_index("ix_unit_equivalences_ingredient_id", "unit_equivalences", ["ingredient_id"])

    op.create_table(
        "recipes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(200), nullable=True),
        sa.Column("image_url", sa.String(1000), nullable=True),
        sa.Column("instructions", postgresql.JSON(), nullable=False),
        sa.Column("tags", postgresql.JSON(), nullable=False),
        sa.Column("porciones", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("total_nutrition", postgresql.JSON(), nullable=True),
        sa.Column("nutrition_computed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_recipes_id", "recipes", ["id"])
    op.create_index("ix_recipes_name", "recipes", ["name"])

    op.create_table(
        "recipe_ingredients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("recipe_id", sa.Integer(), sa.ForeignKey("recipes.id"), nullable=False),
        sa.Column("ingredient_id", sa.Integer(), sa.ForeignKey("ingredients.id"), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("unit_name", sa.String(50), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_recipe_ingredients_id", "recipe_ingredients", ["id"])
    op.create_index("ix_recipe_ingredients_recipe_id", "recipe_ingredients", ["recipe_id"])
    op.create_index("ix_recipe_ingredients_ingredient_id", "recipe_ingredients", ["ingredient_id"])

    op.create_table(
        "persons",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        *_nutrients(),
        *_timestamps(),
    )
    op.create_index("ix_persons_id", "persons", ["id"])

    op.create_table(
        "meal_types",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="1"),
        *_timestamps(),
    )
    op.create_index("ix_meal_types_id", "meal_types", ["id"])

    op.create_table(
        "meal_plans",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("meal_type_id", sa.Integer(), sa.ForeignKey("meal_types.id"), nullable=False),
        sa.Column("recipe_id", sa.Integer(), sa.ForeignKey("recipes.id"), nullable=False),
        sa.Column("porciones", sa.Integer(), nullable=False, server_default="1"),
        *_timestamps(),
    )
    op.create_index("ix_meal_plans_id", "meal_plans", ["id"])
    op.create_index("ix_meal_plans_date", "meal_plans", ["date"])
    op.create_index("ix_meal_plans_meal_type_id", "meal_plans", ["meal_type_id"])
    op.create_index("ix_meal_plans_recipe_id", "meal_plans", ["recipe_id"])

    op.create_table(
        "shopping_lists",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column(
            "original_list_id", sa.Integer(), sa.ForeignKey("shopping_lists.id"), nullable=True
        ),
        sa.Column("is_copy", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_shopping_lists_id", "shopping_lists", ["id"])
    op.create_index("ix_shopping_lists_original_list_id", "shopping_lists", ["original_list_id"])

    op.create_table(
        "shopping_list_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "shopping_list_id", sa.Integer(), sa.ForeignKey("shopping_lists.id"), nullable=False
        ),
        sa.Column("ingredient_id", sa.Integer(), sa.ForeignKey("ingredients.id"), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False, server_default="0"),
        sa.Column("custom_quantity", sa.Float(), nullable=True),
        sa.Column("custom_unit", sa.String(50), nullable=True),
        sa.Column("purchased", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("recipe_sources", postgresql.JSON(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint(
            "shopping_list_id", "ingredient_id", name="uq_shopping_list_ingredient"
        ),
    )
    op.create_index("ix_shopping_list_items_id", "shopping_list_items", ["id"])
    op.create_index(
        "ix_shopping_list_items_shopping_list_id", "shopping_list_items", ["shopping_list_id"]
    )
    op.create_index(
        "ix_shopping_list_items_ingredient_id", "shopping_list_items", ["ingredient_id"]
    )


def downgrade() -> None:
    op.drop_table("shopping_list_items")
    op.drop_table("shopping_lists")
    op.drop_table("meal_plans")
    op.drop_table("meal_types")
    op.drop_table("persons")
    op.drop_table("recipe_ingredients")
    op.drop_table("recipes")
    op.drop_table("unit_equivalences")
    op.drop_table("ingredients")
