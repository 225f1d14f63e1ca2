"""
Pydantic models for item drafts and per-screen UI state.

Drafts keep price and quantity as strings so half-typed or invalid input
survives until save, where it is coerced (lossily) into an Item.
"""
import logging
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from pydantic import BaseModel, Field

from inventory.core.config import settings
from inventory.models.item import Item

logger = logging.getLogger(__name__)

QUANTITY_MIN = -(2 ** 31)
QUANTITY_MAX = 2 ** 31 - 1

_QUANTITY_PATTERN = re.compile(r"[+-]?\d+")


# ---------------------------------------------------------------------------
# Draft
# ---------------------------------------------------------------------------

class ItemDetails(BaseModel):
    """String-typed mirror of an Item under user edit."""

    id: int = 0
    name: str = ""
    price: str = ""
    quantity: str = ""

    model_config = {"frozen": True}

    def is_valid(self) -> bool:
        """Presence check only: every editable field is non-blank."""
        return bool(self.name.strip() and self.price.strip() and self.quantity.strip())

    def to_item(self) -> Item:
        """Convert to an Item; unparsable price/quantity become 0.0 / 0."""
        return Item(
            id=self.id,
            name=self.name,
            price=_parse_price(self.price),
            quantity=_parse_quantity(self.quantity),
        )


def _parse_price(raw: str) -> float:
    if "_" in raw:
        logger.trace("Unparsable price %r, defaulting to 0.0", raw)
        return 0.0
    try:
        value = float(raw)
    except ValueError:
        logger.trace("Unparsable price %r, defaulting to 0.0", raw)
        return 0.0
    # The column is NOT NULL REAL; sqlite stores NaN as NULL
    return value if math.isfinite(value) else 0.0


def _parse_quantity(raw: str) -> int:
    # Signed decimal digits only, within the 32-bit range
    if _QUANTITY_PATTERN.fullmatch(raw):
        value = int(raw)
        if QUANTITY_MIN <= value <= QUANTITY_MAX:
            return value
    logger.trace("Unparsable quantity %r, defaulting to 0", raw)
    return 0


# ---------------------------------------------------------------------------
# Screen state
# ---------------------------------------------------------------------------

class ItemUiState(BaseModel):
    """Entry/edit screen state: the draft plus its validity flag."""

    item_details: ItemDetails = Field(default_factory=ItemDetails)
    is_entry_valid: bool = False

    model_config = {"frozen": True}

    @classmethod
    def from_details(cls, item_details: ItemDetails) -> "ItemUiState":
        return cls(item_details=item_details, is_entry_valid=item_details.is_valid())


class HomeUiState(BaseModel):
    """Home screen state: every item, ordered by name."""

    item_list: list[Item] = Field(default_factory=list)

    model_config = {"frozen": True}


class ItemDetailsUiState(BaseModel):
    """Details screen state."""

    out_of_stock: bool = True
    item_details: ItemDetails = Field(default_factory=ItemDetails)

    model_config = {"frozen": True}

    @classmethod
    def from_item(cls, item: Item) -> "ItemDetailsUiState":
        return cls(out_of_stock=item.quantity <= 0, item_details=item.to_item_details())


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

def format_price(
    price: float,
    symbol: Optional[str] = None,
    decimals: Optional[int] = None,
) -> str:
    """Render ``price`` as currency for display; stored values are untouched."""
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    decimals = settings.CURRENCY_DECIMALS if decimals is None else decimals
    amount = Decimal(str(price)).quantize(
        Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP
    )
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{decimals}f}"
