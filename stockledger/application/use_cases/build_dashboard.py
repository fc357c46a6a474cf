"""Build Dashboard Use Case: inventory totals and recent activity."""

from dataclasses import dataclass

from stockledger.application.dto.mappers import item_response, movement_response
from stockledger.application.dto.responses import CategorySummaryResponse, DashboardResponse
from stockledger.core.entities import Movement
from stockledger.core.services import InventorySummary, LedgerEngine, summarize_inventory

RECENT_MOVEMENTS = 5


@dataclass
class DashboardResult:
    summary: InventorySummary
    recent_movements: list[Movement]


class BuildDashboardUseCase:
    """Aggregate the current ledger snapshot for the dashboard."""

    def __init__(self, engine: LedgerEngine | None = None):
        self._engine = engine

    def _get_engine(self) -> LedgerEngine:
        if self._engine is None:
            from stockledger.application.services import get_ledger_engine

            self._engine = get_ledger_engine()
        return self._engine

    async def execute(self, recent: int = RECENT_MOVEMENTS) -> DashboardResult:
        engine = self._get_engine()
        return DashboardResult(
            summary=summarize_inventory(engine.items),
            recent_movements=engine.movements[:recent],
        )

    def to_response(self, result: DashboardResult) -> DashboardResponse:
        summary = result.summary
        return DashboardResponse(
            total_unique_items=summary.total_unique_items,
            total_quantity=summary.total_quantity,
            total_value=round(summary.total_value, 2),
            low_stock_count=summary.low_stock_count,
            most_stocked=item_response(summary.most_stocked) if summary.most_stocked else None,
            categories=[
                CategorySummaryResponse(
                    category=c.category,
                    unique_items=c.unique_items,
                    total_quantity=c.total_quantity,
                    total_value=round(c.total_value, 2),
                )
                for c in summary.categories
            ],
            recent_movements=[movement_response(m) for m in result.recent_movements],
        )
