"""
Low-stock detection.

An item is low when ``quantity < low_stock_threshold``. Notifications are
edge-triggered: they fire when an item moves from at-or-above its threshold
to below it, or when it is created already below it. Staying below, or
recovering, never notifies.
"""

from enum import Enum


class StockLevel(str, Enum):
    """Stock level relative to an item's threshold."""

    ABOVE_OR_EQUAL = "above_or_equal"
    BELOW = "below"


def stock_level(quantity: int, threshold: int | None) -> StockLevel | None:
    """Classify ``quantity`` against ``threshold``; None when no threshold is set."""
    if threshold is None:
        return None
    return StockLevel.BELOW if quantity < threshold else StockLevel.ABOVE_OR_EQUAL


def crossed_below_threshold(
    old_quantity: int | None,
    new_quantity: int,
    threshold: int | None,
) -> bool:
    """
    Decide whether a quantity change deserves a low-stock notification.

    Args:
        old_quantity: Quantity before the change, None for a brand-new item
        new_quantity: Quantity after the change
        threshold: The item's threshold after the change

    Returns:
        True on an ABOVE_OR_EQUAL -> BELOW transition, or on creation below
        the threshold.
    """
    if stock_level(new_quantity, threshold) is not StockLevel.BELOW:
        return False
    if old_quantity is None:
        return True
    return stock_level(old_quantity, threshold) is StockLevel.ABOVE_OR_EQUAL
