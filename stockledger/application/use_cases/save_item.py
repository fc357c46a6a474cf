"""Save Item Use Case: create or edit an item from the item form."""

from stockledger.application.dto.mappers import item_response
from stockledger.application.dto.requests import ItemFormRequest
from stockledger.application.dto.responses import ItemResponse
from stockledger.config import get_logger
from stockledger.core.entities import Item
from stockledger.core.services import LedgerEngine

logger = get_logger(__name__)


class SaveItemUseCase:
    """Create a new item, or replace the fields of an existing one.

    Quantity differences on edit are logged by the engine as movements.
    """

    def __init__(self, engine: LedgerEngine | None = None):
        self._engine = engine

    def _get_engine(self) -> LedgerEngine:
        if self._engine is None:
            from stockledger.application.services import get_ledger_engine

            self._engine = get_ledger_engine()
        return self._engine

    async def execute(self, request: ItemFormRequest, item_id: str | None = None) -> Item:
        data = request.to_item_data()
        engine = self._get_engine()

        if item_id is None:
            return await engine.add_item(data)

        logger.info("save_item_update", item_id=item_id)
        return await engine.update_item(item_id, data)

    def to_response(self, result: Item) -> ItemResponse:
        return item_response(result)
