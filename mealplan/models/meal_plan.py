"""MealType and MealPlanEntry models."""

from sqlalchemy import Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from mealplan.database import Base
from mealplan.models.mixins import TimestampMixin


class MealType(Base, TimestampMixin):
    """User-defined meal slot such as breakfast or dinner."""

    __tablename__ = "meal_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    sort_order = Column(Integer, nullable=False, default=1)

    # Relationships
    entries = relationship(
        "MealPlanEntry", back_populates="meal_type", cascade="all, delete-orphan"
    )


class MealPlanEntry(Base, TimestampMixin):
    """A recipe planned for some portions in a meal slot of a day."""

    __tablename__ = "meal_plans"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, index=True)
    meal_type_id = Column(Integer, ForeignKey("meal_types.id"), nullable=False, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id"), nullable=False, index=True)
    porciones = Column(Integer, nullable=False, default=1)

    # Relationships
    meal_type = relationship("MealType", back_populates="entries")
    recipe = relationship("Recipe", back_populates="meal_plan_entries")
