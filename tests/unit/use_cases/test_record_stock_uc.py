"""Tests for RecordStockInputUseCase and RecordStockOutputUseCase."""

from unittest.mock import AsyncMock

import pytest

from stockledger.application.dto.requests import StockMovementRequest
from stockledger.application.use_cases import (
    RecordStockInputUseCase,
    RecordStockOutputUseCase,
)
from stockledger.core.entities import Item, Movement, MovementType, StockChange
from stockledger.core.exceptions import InsufficientStockError, ItemNotFoundError
from stockledger.core.services import LedgerEngine


@pytest.fixture
def mock_engine():
    return AsyncMock(spec=LedgerEngine)


def change_for(item: Item, movement_type: MovementType, quantity: int) -> StockChange:
    return StockChange(
        item=item,
        movement=Movement(
            item_id=item.id,
            item_name=item.name,
            movement_type=movement_type,
            quantity_changed=quantity,
            reason="po-7",
        ),
    )


class TestRecordStockInputUseCase:
    async def test_passes_trimmed_reason(self, mock_engine):
        item = Item(name="Bolt", quantity=15)
        mock_engine.record_stock_input.return_value = change_for(item, MovementType.ENTRADA, 5)
        use_case = RecordStockInputUseCase(engine=mock_engine)

        change = await use_case.execute(item.id, StockMovementRequest(quantity=5, reason="  po-7 "))

        mock_engine.record_stock_input.assert_awaited_once_with(item.id, 5, "po-7")
        assert change.item.quantity == 15

    async def test_response(self, mock_engine):
        item = Item(name="Bolt", quantity=15, price=2.0)
        use_case = RecordStockInputUseCase(engine=mock_engine)

        response = use_case.to_response(change_for(item, MovementType.ENTRADA, 5))

        assert response.item.total_value == 30.0
        assert response.movement.movement_type == "entrada"
        assert response.low_stock_notified is False

    async def test_item_not_found(self, mock_engine):
        mock_engine.record_stock_input.side_effect = ItemNotFoundError("missing")
        use_case = RecordStockInputUseCase(engine=mock_engine)

        with pytest.raises(ItemNotFoundError):
            await use_case.execute("missing", StockMovementRequest(quantity=1))


class TestRecordStockOutputUseCase:
    async def test_successful_issue(self, mock_engine):
        item = Item(name="Bolt", quantity=70)
        mock_engine.record_stock_output.return_value = change_for(item, MovementType.SALIDA, 30)
        use_case = RecordStockOutputUseCase(engine=mock_engine)

        change = await use_case.execute(item.id, StockMovementRequest(quantity=30, reason="job"))

        mock_engine.record_stock_output.assert_awaited_once_with(item.id, 30, "job")
        assert change.movement.movement_type is MovementType.SALIDA

    async def test_insufficient_stock(self, mock_engine):
        mock_engine.record_stock_output.side_effect = InsufficientStockError("a", 50, 10)
        use_case = RecordStockOutputUseCase(engine=mock_engine)

        with pytest.raises(InsufficientStockError):
            await use_case.execute("a", StockMovementRequest(quantity=50))
