"""
Domain model representing an Item row from the DB.
"""
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Item:
    """One inventory row. ``id == 0`` means not yet assigned by the store."""

    id: int = 0
    name: str = ""
    price: float = 0.0
    quantity: int = 0

    @classmethod
    def from_row(cls, row) -> "Item":
        """Build an Item from a sqlite3.Row object."""
        return cls(
            id=row["id"],
            name=row["name"],
            price=float(row["price"]),
            quantity=int(row["quantity"]),
        )

    def copy(self, **changes) -> "Item":
        """Return a new Item with ``changes`` applied; the original is untouched."""
        return replace(self, **changes)

    def formatted_price(self) -> str:
        """Price rendered for display with the configured currency."""
        from inventory.schemas.item import format_price

        return format_price(self.price)

    def to_item_details(self):
        """Mirror this item into a string-typed draft."""
        from inventory.schemas.item import ItemDetails

        return ItemDetails(
            id=self.id,
            name=self.name,
            price=str(self.price),
            quantity=str(self.quantity),
        )

    def to_item_ui_state(self, is_entry_valid: bool = False):
        """Wrap this item's draft mirror in an entry/edit UI state."""
        from inventory.schemas.item import ItemUiState

        return ItemUiState(
            item_details=self.to_item_details(),
            is_entry_valid=is_entry_valid,
        )
