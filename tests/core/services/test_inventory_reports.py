"""Tests for dashboard aggregates, search and CSV export."""

from datetime import UTC, datetime, timedelta

import pytest

from stockledger.core.entities.inventory import Item, Movement, MovementType
from stockledger.core.exceptions import ValidationError
from stockledger.core.services.inventory_reports import (
    CSV_HEADER,
    UNCATEGORIZED,
    export_items_csv,
    list_categories,
    search_items,
    search_movements,
    summarize_inventory,
)

BASE = datetime(2024, 3, 1, 9, 30, tzinfo=UTC)


@pytest.fixture
def items() -> list[Item]:
    return [
        Item(name="Stapler", quantity=10, price=4.5, category="Office", low_stock_threshold=3),
        Item(name="drill", quantity=2, price=80.0, category="Tools", low_stock_threshold=5),
        Item(name="Paper", description="A4 ream", quantity=40, price=None, category="office"),
        Item(name="Mystery box", quantity=1, price=2.0, category=None),
    ]


@pytest.fixture
def movements() -> list[Movement]:
    return [
        Movement(
            item_id="1", item_name="Stapler", movement_type=MovementType.ENTRADA,
            quantity_changed=10, reason="initial item creation", date=BASE,
        ),
        Movement(
            item_id="2", item_name="Drill", movement_type=MovementType.SALIDA,
            quantity_changed=1, reason="site visit", date=BASE + timedelta(hours=2),
        ),
        Movement(
            item_id="1", item_name="Stapler", movement_type=MovementType.SALIDA,
            quantity_changed=3, reason="", date=BASE + timedelta(hours=1),
        ),
    ]


class TestSummarizeInventory:
    def test_totals(self, items):
        summary = summarize_inventory(items)

        assert summary.total_unique_items == 4
        assert summary.total_quantity == 53
        assert summary.total_value == pytest.approx(10 * 4.5 + 2 * 80.0 + 1 * 2.0)
        assert summary.low_stock_count == 1
        assert summary.most_stocked.name == "Paper"

    def test_categories_grouped_and_sorted(self, items):
        summary = summarize_inventory(items)

        names = [c.category for c in summary.categories]
        assert names == ["Office", "office", "Tools", UNCATEGORIZED]
        tools = summary.categories[2]
        assert tools.unique_items == 1
        assert tools.total_value == pytest.approx(160.0)

    def test_empty(self):
        summary = summarize_inventory([])

        assert summary.total_unique_items == 0
        assert summary.most_stocked is None
        assert summary.categories == []

    def test_most_stocked_tie_keeps_first(self):
        first = Item(name="A", quantity=5)
        second = Item(name="B", quantity=5)

        assert summarize_inventory([first, second]).most_stocked is first


class TestListCategories:
    def test_distinct_non_empty(self, items):
        assert list_categories(items) == ["Office", "office", "Tools"]


class TestSearchItems:
    def test_default_sort_is_name_case_insensitive(self, items):
        names = [i.name for i in search_items(items)]
        assert names == ["drill", "Mystery box", "Paper", "Stapler"]

    def test_term_matches_description(self, items):
        results = search_items(items, term="a4")
        assert [i.name for i in results] == ["Paper"]

    def test_term_matches_category(self, items):
        results = search_items(items, term="TOOLS")
        assert [i.name for i in results] == ["drill"]

    def test_exact_category_filter(self, items):
        results = search_items(items, category="Office")
        assert [i.name for i in results] == ["Stapler"]

    def test_missing_values_sort_last_in_both_directions(self, items):
        ascending = search_items(items, sort_by="price")
        descending = search_items(items, sort_by="price", descending=True)

        assert [i.name for i in ascending] == ["Mystery box", "Stapler", "drill", "Paper"]
        assert [i.name for i in descending] == ["drill", "Stapler", "Mystery box", "Paper"]

    def test_sort_by_quantity_descending(self, items):
        results = search_items(items, sort_by="quantity", descending=True)
        assert [i.quantity for i in results] == [40, 10, 2, 1]

    def test_unknown_sort_field(self, items):
        with pytest.raises(ValidationError):
            search_items(items, sort_by="colour")


class TestSearchMovements:
    def test_default_newest_first(self, movements):
        reasons = [m.reason for m in search_movements(movements)]
        assert reasons == ["site visit", "", "initial item creation"]

    def test_term_matches_item_name_or_reason(self, movements):
        assert len(search_movements(movements, term="stapler")) == 2
        assert len(search_movements(movements, term="SITE")) == 1

    def test_type_filter(self, movements):
        results = search_movements(movements, movement_type=MovementType.ENTRADA)
        assert [m.quantity_changed for m in results] == [10]

    def test_sort_by_quantity_ascending(self, movements):
        results = search_movements(movements, sort_by="quantity_changed", descending=False)
        assert [m.quantity_changed for m in results] == [1, 3, 10]

    def test_unknown_sort_field(self, movements):
        with pytest.raises(ValidationError):
            search_movements(movements, sort_by="item_id")


class TestExportItemsCsv:
    def test_header_only(self):
        assert export_items_csv([]) == ",".join(CSV_HEADER) + "\n"

    def test_row_format(self):
        item = Item(
            name="Stapler, heavy duty",
            quantity=3,
            price=4.5,
            category=None,
            date_added=BASE,
            last_updated=BASE,
        )

        lines = export_items_csv([item]).splitlines()

        assert len(lines) == 2
        assert lines[1] == (
            f'{item.id},"Stapler, heavy duty",,3,4.50,,'
            f"{BASE.isoformat()},{BASE.isoformat()},"
        )
