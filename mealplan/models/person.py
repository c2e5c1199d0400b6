"""Person model."""

from sqlalchemy import Column, Float, Integer, String

from mealplan.database import Base
from mealplan.models.mixins import TimestampMixin


class Person(Base, TimestampMixin):
    """A person whose daily nutrition targets the planner tracks."""

    __tablename__ = "persons"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    # Daily targets
    calories = Column(Float, nullable=False, default=0)
    protein = Column(Float, nullable=False, default=0)
    carbs = Column(Float, nullable=False, default=0)
    fat = Column(Float, nullable=False, default=0)
    fiber = Column(Float, nullable=False, default=0)
    sugar = Column(Float, nullable=False, default=0)
