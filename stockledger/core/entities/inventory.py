"""Inventory domain entities."""

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def new_id() -> str:
    """Opaque identifier for items and movements."""
    return str(uuid.uuid4())


class MovementType(str, Enum):
    """Direction of a stock movement."""

    ENTRADA = "entrada"  # stock increase
    SALIDA = "salida"  # stock decrease


class MovementReason:
    """Fixed reasons for movements the ledger logs on its own."""

    INITIAL_CREATION = "initial item creation"
    EDIT_INCREASE = "quantity increased via edit"
    EDIT_DECREASE = "quantity decreased via edit"
    MANUAL_INCREMENT = "manual adjustment (increment)"
    MANUAL_DECREMENT = "manual adjustment (decrement)"


class ItemData(BaseModel):
    """Validated, typed input for creating or editing an item."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    quantity: int = Field(default=0, ge=0)
    price: float | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, max_length=50)
    low_stock_threshold: int | None = Field(default=None, ge=0)


class Item(ItemData):
    """A product line with its current quantity on hand."""

    id: str = Field(default_factory=new_id)
    date_added: datetime = Field(default_factory=utc_now)
    last_updated: datetime = Field(default_factory=utc_now)

    @property
    def total_value(self) -> float:
        """Stock value = quantity * price (0 when unpriced)."""
        return self.quantity * (self.price or 0.0)

    @property
    def is_low_stock(self) -> bool:
        return (
            self.low_stock_threshold is not None
            and self.quantity < self.low_stock_threshold
        )


class Movement(BaseModel):
    """Immutable audit record of one quantity change to one item."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    item_id: str  # weak reference, the item may be deleted later
    item_name: str  # snapshot for display after deletion
    movement_type: MovementType
    quantity_changed: int = Field(..., gt=0)  # always positive
    reason: str = ""
    date: datetime = Field(default_factory=utc_now)


@dataclass
class StockChange:
    """Outcome of a quantity-affecting ledger operation."""

    item: Item
    movement: Movement | None = None  # None when nothing actually changed
    low_stock_notified: bool = False
