"""Core domain entities."""

from stockledger.core.entities.inventory import (
    Item,
    ItemData,
    Movement,
    MovementReason,
    MovementType,
    StockChange,
    new_id,
    utc_now,
)
from stockledger.core.entities.notification import LowStockAlert
from stockledger.core.entities.suggestion import (
    CategorySuggestion,
    DescriptionSuggestion,
    PriceSuggestion,
)

__all__ = [
    # Inventory entities
    "Item",
    "ItemData",
    "Movement",
    "MovementReason",
    "MovementType",
    "StockChange",
    "new_id",
    "utc_now",
    # Notification entities
    "LowStockAlert",
    # Suggestion entities
    "DescriptionSuggestion",
    "CategorySuggestion",
    "PriceSuggestion",
]
