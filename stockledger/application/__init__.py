"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that drive the ledger engine
3. Providing factory functions for dependency injection

Use cases are the entry point for mutating API handlers.
"""

from stockledger.application.services import (
    get_alert_buffer,
    get_ledger_engine,
    get_suggestion_service,
    reset_services,
    start_ledger_engine,
    stop_ledger_engine,
)
from stockledger.application.use_cases import (
    AdjustDirection,
    AdjustQuantityUseCase,
    BuildDashboardUseCase,
    RecordStockInputUseCase,
    RecordStockOutputUseCase,
    SaveItemUseCase,
)

__all__ = [
    # Use Cases
    "SaveItemUseCase",
    "RecordStockInputUseCase",
    "RecordStockOutputUseCase",
    "AdjustQuantityUseCase",
    "AdjustDirection",
    "BuildDashboardUseCase",
    # Service factories
    "get_ledger_engine",
    "start_ledger_engine",
    "stop_ledger_engine",
    "get_alert_buffer",
    "get_suggestion_service",
    "reset_services",
]
