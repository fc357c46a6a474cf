"""Entity to response DTO conversion."""

from stockledger.application.dto.responses import (
    AlertResponse,
    ItemResponse,
    MovementResponse,
    StockChangeResponse,
)
from stockledger.core.entities import Item, LowStockAlert, Movement, StockChange


def item_response(item: Item) -> ItemResponse:
    return ItemResponse(
        id=item.id,
        name=item.name,
        description=item.description,
        quantity=item.quantity,
        price=item.price,
        category=item.category,
        low_stock_threshold=item.low_stock_threshold,
        total_value=item.total_value,
        is_low_stock=item.is_low_stock,
        date_added=item.date_added,
        last_updated=item.last_updated,
    )


def movement_response(movement: Movement) -> MovementResponse:
    return MovementResponse(
        id=movement.id,
        item_id=movement.item_id,
        item_name=movement.item_name,
        movement_type=movement.movement_type.value,
        quantity_changed=movement.quantity_changed,
        reason=movement.reason,
        date=movement.date,
    )


def stock_change_response(change: StockChange) -> StockChangeResponse:
    return StockChangeResponse(
        item=item_response(change.item),
        movement=movement_response(change.movement) if change.movement else None,
        low_stock_notified=change.low_stock_notified,
    )


def alert_response(alert: LowStockAlert) -> AlertResponse:
    return AlertResponse(
        item_name=alert.item_name,
        current_quantity=alert.current_quantity,
        threshold=alert.threshold,
        message=alert.message,
        created_at=alert.created_at,
    )
