"""Application use cases."""

from stockledger.application.use_cases.adjust_quantity import (
    AdjustDirection,
    AdjustQuantityUseCase,
)
from stockledger.application.use_cases.build_dashboard import (
    BuildDashboardUseCase,
    DashboardResult,
)
from stockledger.application.use_cases.record_stock_input import RecordStockInputUseCase
from stockledger.application.use_cases.record_stock_output import RecordStockOutputUseCase
from stockledger.application.use_cases.save_item import SaveItemUseCase

__all__ = [
    "SaveItemUseCase",
    "RecordStockInputUseCase",
    "RecordStockOutputUseCase",
    "AdjustQuantityUseCase",
    "AdjustDirection",
    "BuildDashboardUseCase",
    "DashboardResult",
]
