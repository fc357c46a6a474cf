"""Adjust Quantity Use Case: quick increment / decrement from the item list."""

from enum import Enum

from stockledger.application.dto.mappers import stock_change_response
from stockledger.application.dto.requests import AdjustQuantityRequest
from stockledger.application.dto.responses import StockChangeResponse
from stockledger.config import get_logger
from stockledger.core.entities import MovementReason, StockChange
from stockledger.core.services import LedgerEngine

logger = get_logger(__name__)


class AdjustDirection(str, Enum):
    INCREMENT = "increment"
    DECREMENT = "decrement"


class AdjustQuantityUseCase:
    """Manual +/- adjustment; decrements floor at zero."""

    def __init__(self, engine: LedgerEngine | None = None):
        self._engine = engine

    def _get_engine(self) -> LedgerEngine:
        if self._engine is None:
            from stockledger.application.services import get_ledger_engine

            self._engine = get_ledger_engine()
        return self._engine

    async def execute(
        self,
        item_id: str,
        request: AdjustQuantityRequest,
        direction: AdjustDirection,
    ) -> StockChange:
        engine = self._get_engine()
        reason = (request.reason or "").strip()

        if direction is AdjustDirection.INCREMENT:
            change = await engine.increment_item_quantity(
                item_id,
                request.amount,
                reason or MovementReason.MANUAL_INCREMENT,
            )
        else:
            change = await engine.decrement_item_quantity(
                item_id,
                request.amount,
                reason or MovementReason.MANUAL_DECREMENT,
            )

        logger.info(
            "quantity_adjusted",
            item_id=item_id,
            direction=direction.value,
            requested=request.amount,
            applied=change.movement.quantity_changed if change.movement else 0,
        )
        return change

    def to_response(self, result: StockChange) -> StockChangeResponse:
        return stock_change_response(result)
