"""Record Stock Output Use Case: salida movement with balance check."""

from stockledger.application.dto.mappers import stock_change_response
from stockledger.application.dto.requests import StockMovementRequest
from stockledger.application.dto.responses import StockChangeResponse
from stockledger.config import get_logger
from stockledger.core.entities import StockChange
from stockledger.core.services import LedgerEngine

logger = get_logger(__name__)


class RecordStockOutputUseCase:
    """Issue stock from an existing item; never partially fulfilled."""

    def __init__(self, engine: LedgerEngine | None = None):
        self._engine = engine

    def _get_engine(self) -> LedgerEngine:
        if self._engine is None:
            from stockledger.application.services import get_ledger_engine

            self._engine = get_ledger_engine()
        return self._engine

    async def execute(self, item_id: str, request: StockMovementRequest) -> StockChange:
        logger.info("record_stock_output_started", item_id=item_id, quantity=request.quantity)

        # Engine raises InsufficientStockError before touching anything
        change = await self._get_engine().record_stock_output(
            item_id,
            request.quantity,
            request.reason.strip(),
        )

        logger.info(
            "record_stock_output_complete",
            item_id=item_id,
            remaining_quantity=change.item.quantity,
            low_stock=change.low_stock_notified,
        )
        return change

    def to_response(self, result: StockChange) -> StockChangeResponse:
        return stock_change_response(result)
