"""ShoppingList and ShoppingListItem models."""

from sqlalchemy import Boolean, Column, Date, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSON
from sqlalchemy.orm import relationship

from mealplan.database import Base
from mealplan.models.enums import ShoppingListKind
from mealplan.models.mixins import TimestampMixin


class ShoppingList(Base, TimestampMixin):
    """Persisted shopping list; copies point at the list they came from."""

    __tablename__ = "shopping_lists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    original_list_id = Column(Integer, ForeignKey("shopping_lists.id"), nullable=True, index=True)
    # Stays set after the source list is deleted
    is_copy = Column(Boolean, nullable=False, default=False)

    # Relationships
    items = relationship(
        "ShoppingListItem",
        back_populates="shopping_list",
        cascade="all, delete-orphan",
        order_by="ShoppingListItem.id",
    )
    original = relationship("ShoppingList", remote_side=[id], backref="copies")

    @property
    def kind(self) -> ShoppingListKind:
        if self.is_copy:
            return ShoppingListKind.COPIED
        return ShoppingListKind.SAVED


class ShoppingListItem(Base, TimestampMixin):
    """Snapshot of one consolidated ingredient in a saved list."""

    __tablename__ = "shopping_list_items"
    __table_args__ = (
        UniqueConstraint("shopping_list_id", "ingredient_id", name="uq_shopping_list_ingredient"),
    )

    id = Column(Integer, primary_key=True, index=True)
    shopping_list_id = Column(
        Integer, ForeignKey("shopping_lists.id"), nullable=False, index=True
    )
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False, index=True)
    quantity = Column(Float, nullable=False, default=0)  # total in base unit
    custom_quantity = Column(Float, nullable=True)
    custom_unit = Column(String(50), nullable=True)
    purchased = Column(Boolean, nullable=False, default=False)
    # [{"recipe_id": 1, "recipe_name": "Rice", "date": "2024-01-01", "quantity": 200, ...}]
    recipe_sources = Column(JSON, nullable=False, default=list)

    # Relationships
    shopping_list = relationship("ShoppingList", back_populates="items")
    ingredient = relationship("Ingredient")
