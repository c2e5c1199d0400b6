"""Recipe and RecipeIngredient models."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSON
from sqlalchemy.orm import relationship

from mealplan.database import Base
from mealplan.models.mixins import TimestampMixin


class Recipe(Base, TimestampMixin):
    """Recipe model; its ingredient quantities yield ``porciones`` portions."""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(200), nullable=True)
    image_url = Column(String(1000), nullable=True)
    instructions = Column(JSON, nullable=False, default=list)  # ["Step 1", "Step 2"]
    tags = Column(JSON, nullable=False, default=list)
    porciones = Column(Integer, nullable=False, default=1)

    # Cached total for the full yield; recomputed by tasks.nutrition
    total_nutrition = Column(JSON, nullable=True)
    nutrition_computed_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.id",
    )
    meal_plan_entries = relationship(
        "MealPlanEntry", back_populates="recipe", cascade="all, delete-orphan"
    )


class RecipeIngredient(Base, TimestampMixin):
    """Ingredient line within a recipe, in the base unit or a declared equivalence."""

    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False, index=True)
    quantity = Column(Float, nullable=False)
    unit_name = Column(String(50), nullable=False)

    # Relationships
    recipe = relationship("Recipe", back_populates="ingredients")
    ingredient = relationship("Ingredient")
