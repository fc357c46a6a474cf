"""
Read-only views over ledger collections.

Dashboard aggregates, search and sort for item and movement lists, and
CSV export. Everything here is a pure function of the lists passed in.
"""

import csv
import io
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from stockledger.core.entities.inventory import Item, Movement, MovementType
from stockledger.core.exceptions import ValidationError

UNCATEGORIZED = "Uncategorized"

ITEM_SORT_FIELDS = (
    "name",
    "quantity",
    "price",
    "category",
    "date_added",
    "last_updated",
    "low_stock_threshold",
)
MOVEMENT_SORT_FIELDS = ("date", "item_name", "quantity_changed", "movement_type", "reason")

CSV_HEADER = [
    "ID",
    "Name",
    "Description",
    "Quantity",
    "Price",
    "Category",
    "Date Added",
    "Last Updated",
    "Low Stock Threshold",
]


@dataclass
class CategorySummary:
    """Totals for one category."""

    category: str
    unique_items: int = 0
    total_quantity: int = 0
    total_value: float = 0.0


@dataclass
class InventorySummary:
    """Dashboard aggregates."""

    total_unique_items: int = 0
    total_quantity: int = 0
    total_value: float = 0.0
    low_stock_count: int = 0
    most_stocked: Item | None = None
    categories: list[CategorySummary] = field(default_factory=list)


def summarize_inventory(items: list[Item]) -> InventorySummary:
    """Compute dashboard totals and the per-category breakdown."""
    summary = InventorySummary(total_unique_items=len(items))
    by_category: dict[str, CategorySummary] = {}

    for item in items:
        summary.total_quantity += item.quantity
        summary.total_value += item.total_value
        if item.is_low_stock:
            summary.low_stock_count += 1
        if summary.most_stocked is None or item.quantity > summary.most_stocked.quantity:
            summary.most_stocked = item

        name = item.category or UNCATEGORIZED
        group = by_category.setdefault(name, CategorySummary(category=name))
        group.unique_items += 1
        group.total_quantity += item.quantity
        group.total_value += item.total_value

    summary.categories = sorted(by_category.values(), key=lambda c: c.category.lower())
    return summary


def list_categories(items: list[Item]) -> list[str]:
    """Distinct non-empty categories, sorted case-insensitively."""
    return sorted(
        {item.category for item in items if item.category},
        key=lambda c: (c.lower(), c),
    )


def _sort_key(value: Any) -> Any:
    if isinstance(value, str):
        return value.lower()
    if isinstance(value, MovementType):
        return value.value
    return value


def _sorted_missing_last(records: list, attr: str, descending: bool) -> list:
    present = [r for r in records if getattr(r, attr) not in (None, "")]
    missing = [r for r in records if getattr(r, attr) in (None, "")]
    present.sort(key=lambda r: _sort_key(getattr(r, attr)), reverse=descending)
    return present + missing


def search_items(
    items: list[Item],
    term: str | None = None,
    category: str | None = None,
    sort_by: str = "name",
    descending: bool = False,
) -> list[Item]:
    """
    Filter and sort items.

    Args:
        items: Items to search
        term: Case-insensitive substring of name, description or category
        category: Exact category to keep
        sort_by: One of ITEM_SORT_FIELDS
        descending: Reverse the order; items missing the sort value stay last

    Raises:
        ValidationError: Unknown sort field
    """
    if sort_by not in ITEM_SORT_FIELDS:
        raise ValidationError("sort_by", f"Unknown sort field: {sort_by}", sort_by)

    results = list(items)
    if term:
        needle = term.lower()
        results = [
            item
            for item in results
            if needle in item.name.lower()
            or needle in item.description.lower()
            or needle in (item.category or "").lower()
        ]
    if category:
        results = [item for item in results if item.category == category]

    return _sorted_missing_last(results, sort_by, descending)


def search_movements(
    movements: list[Movement],
    term: str | None = None,
    movement_type: MovementType | None = None,
    sort_by: str = "date",
    descending: bool = True,
) -> list[Movement]:
    """Filter movements by item name / reason and type, then sort."""
    if sort_by not in MOVEMENT_SORT_FIELDS:
        raise ValidationError("sort_by", f"Unknown sort field: {sort_by}", sort_by)

    results = list(movements)
    if term:
        needle = term.lower()
        results = [
            m for m in results if needle in m.item_name.lower() or needle in m.reason.lower()
        ]
    if movement_type is not None:
        results = [m for m in results if m.movement_type == movement_type]

    return _sorted_missing_last(results, sort_by, descending)


def _format_date(value: datetime) -> str:
    return value.isoformat()


def export_items_csv(items: list[Item]) -> str:
    """Render items as CSV text, one row per item after the header."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for item in items:
        writer.writerow(
            [
                item.id,
                item.name,
                item.description,
                item.quantity,
                f"{item.price:.2f}" if item.price is not None else "",
                item.category or "",
                _format_date(item.date_added),
                _format_date(item.last_updated),
                item.low_stock_threshold if item.low_stock_threshold is not None else "",
            ]
        )
    return buffer.getvalue()
