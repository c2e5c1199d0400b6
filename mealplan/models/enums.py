"""Enums for model fields."""

from enum import Enum


class ShoppingListKind(str, Enum):
    """Lifecycle stage of a shopping list."""

    LIVE = "live"
    SAVED = "saved"
    COPIED = "copied"

    def allows_quantity_edits(self, only_copied_editable: bool = True) -> bool:
        """Check if manual quantity/unit overrides are allowed."""
        if self == ShoppingListKind.LIVE:
            return False
        return self == ShoppingListKind.COPIED or not only_copied_editable

    def allows_purchase_toggle(self) -> bool:
        """Check if items can be marked as purchased."""
        return self != ShoppingListKind.LIVE
