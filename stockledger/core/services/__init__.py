"""
Core business logic services.

Layer-pure services that depend only on:
- stockledger/core/entities/*
- stockledger/core/interfaces/*
- stockledger/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from stockledger.core.services.inventory_reports import (
    CategorySummary,
    InventorySummary,
    export_items_csv,
    list_categories,
    search_items,
    search_movements,
    summarize_inventory,
)
from stockledger.core.services.ledger_engine import LedgerEngine, newest_first
from stockledger.core.services.low_stock import StockLevel, crossed_below_threshold, stock_level
from stockledger.core.services.suggestion_service import SuggestionService

__all__ = [
    # Ledger
    "LedgerEngine",
    "newest_first",
    # Low stock
    "StockLevel",
    "stock_level",
    "crossed_below_threshold",
    # Reports
    "InventorySummary",
    "CategorySummary",
    "summarize_inventory",
    "list_categories",
    "search_items",
    "search_movements",
    "export_items_csv",
    # Suggestions
    "SuggestionService",
]
