"""
Dependency injection container for FastAPI.

Provides service instances to route handlers. Tests swap the engine,
alert buffer or suggestion service through ``app.dependency_overrides``;
use cases receive the engine as a sub-dependency so one override covers
every route.
"""

from functools import lru_cache

from fastapi import Depends

from stockledger.application.services import (
    get_alert_buffer,
    get_ledger_engine,
    get_suggestion_service,
)
from stockledger.application.use_cases import (
    AdjustQuantityUseCase,
    BuildDashboardUseCase,
    RecordStockInputUseCase,
    RecordStockOutputUseCase,
    SaveItemUseCase,
)
from stockledger.config import Settings, get_settings
from stockledger.core.services import LedgerEngine, SuggestionService
from stockledger.infrastructure.notifications import AlertBuffer


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Service dependencies
def get_engine() -> LedgerEngine:
    """Get the ledger engine."""
    return get_ledger_engine()


def get_alerts() -> AlertBuffer:
    """Get the low-stock alert buffer."""
    return get_alert_buffer()


def get_suggestions() -> SuggestionService:
    """Get the suggestion service."""
    return get_suggestion_service()


# Use case dependencies
def get_save_item_use_case(engine: LedgerEngine = Depends(get_engine)) -> SaveItemUseCase:
    return SaveItemUseCase(engine=engine)


def get_record_stock_input_use_case(
    engine: LedgerEngine = Depends(get_engine),
) -> RecordStockInputUseCase:
    return RecordStockInputUseCase(engine=engine)


def get_record_stock_output_use_case(
    engine: LedgerEngine = Depends(get_engine),
) -> RecordStockOutputUseCase:
    return RecordStockOutputUseCase(engine=engine)


def get_adjust_quantity_use_case(
    engine: LedgerEngine = Depends(get_engine),
) -> AdjustQuantityUseCase:
    return AdjustQuantityUseCase(engine=engine)


def get_dashboard_use_case(engine: LedgerEngine = Depends(get_engine)) -> BuildDashboardUseCase:
    return BuildDashboardUseCase(engine=engine)
