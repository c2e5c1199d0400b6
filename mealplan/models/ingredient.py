"""Ingredient and UnitEquivalence models."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSON
from sqlalchemy.orm import relationship

from mealplan.database import Base
from mealplan.models.mixins import TimestampMixin


class Ingredient(Base, TimestampMixin):
    """Ingredient with nutrition per ``base_quantity`` of ``base_unit``."""

    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    image_url = Column(String(1000), nullable=True)
    base_unit = Column(String(50), nullable=False)  # "g", "ml", "u", ...
    base_quantity = Column(Float, nullable=False, default=100)

    # Nutrition per base_quantity of base_unit
    calories = Column(Float, nullable=False, default=0)
    protein = Column(Float, nullable=False, default=0)
    carbs = Column(Float, nullable=False, default=0)
    fat = Column(Float, nullable=False, default=0)
    fiber = Column(Float, nullable=False, default=0)
    sugar = Column(Float, nullable=False, default=0)

    # ["Vegetable", "Dairy", ...]
    tags = Column(JSON, nullable=False, default=list)

    # Relationships
    unit_equivalences = relationship(
        "UnitEquivalence",
        back_populates="ingredient",
        cascade="all, delete-orphan",
        order_by="UnitEquivalence.id",
    )


class UnitEquivalence(Base, TimestampMixin):
    """``1 unit_name == conversion_factor x ingredient.base_unit``."""

    __tablename__ = "unit_equivalences"
    __table_args__ = (
        UniqueConstraint("ingredient_id", "unit_name", name="uq_ingredient_unit"),
    )

    id = Column(Integer, primary_key=True, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False, index=True)
    unit_name = Column(String(50), nullable=False)
    conversion_factor = Column(Float, nullable=False)

    # Relationships
    ingredient = relationship("Ingredient", back_populates="unit_equivalences")
