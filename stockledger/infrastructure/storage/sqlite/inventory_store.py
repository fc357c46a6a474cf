"""SQLite write-through mirror of the ledger collections."""

from datetime import UTC, datetime

import aiosqlite
from pydantic import ValidationError

from stockledger.config import get_logger
from stockledger.core.entities.inventory import Item, Movement, MovementType
from stockledger.core.exceptions import DatabaseError
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


def _to_text(value: datetime) -> str:
    return value.isoformat()


def _from_text(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


class SQLiteInventoryStore(IInventoryStore):
    """
    Items and movements in the ``inventory_items`` / ``inventory_movements`` tables.

    ``save_items`` replaces the item table in one transaction.
    ``save_movements`` only inserts movements not stored yet; the ledger
    never edits or removes a movement.
    """

    async def load_items(self) -> list[Item]:
        try:
            async with get_connection() as conn:
                cursor = await conn.execute("SELECT * FROM inventory_items ORDER BY date_added")
                rows = await cursor.fetchall()
                return [self._row_to_item(row) for row in rows]
        except aiosqlite.Error as e:
            raise DatabaseError("load items", str(e)) from e
        except (ValueError, ValidationError) as e:
            logger.warning("inventory_item_row_unreadable", error=str(e))
            raise DatabaseError("load items", f"unreadable row: {e}") from e

    async def save_items(self, items: list[Item]) -> None:
        try:
            async with get_transaction() as conn:
                await conn.execute("DELETE FROM inventory_items")
                await conn.executemany(
                    """
                    INSERT INTO inventory_items (
                        id, name, description, quantity, price, category,
                        low_stock_threshold, date_added, last_updated
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            item.id,
                            item.name,
                            item.description,
                            item.quantity,
                            item.price,
                            item.category,
                            item.low_stock_threshold,
                            _to_text(item.date_added),
                            _to_text(item.last_updated),
                        )
                        for item in items
                    ],
                )
        except aiosqlite.Error as e:
            raise DatabaseError("save items", str(e)) from e
        logger.debug("inventory_items_saved", count=len(items))

    async def load_movements(self) -> list[Movement]:
        try:
            async with get_connection() as conn:
                cursor = await conn.execute("SELECT * FROM inventory_movements ORDER BY seq")
                rows = await cursor.fetchall()
                return [self._row_to_movement(row) for row in rows]
        except aiosqlite.Error as e:
            raise DatabaseError("load movements", str(e)) from e
        except (ValueError, ValidationError) as e:
            logger.warning("inventory_movement_row_unreadable", error=str(e))
            raise DatabaseError("load movements", f"unreadable row: {e}") from e

    async def save_movements(self, movements: list[Movement]) -> None:
        try:
            async with get_transaction() as conn:
                await conn.executemany(
                    """
                    INSERT OR IGNORE INTO inventory_movements (
                        id, seq, item_id, item_name, movement_type,
                        quantity_changed, reason, date
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            m.id,
                            seq,
                            m.item_id,
                            m.item_name,
                            m.movement_type.value,
                            m.quantity_changed,
                            m.reason,
                            _to_text(m.date),
                        )
                        for seq, m in enumerate(movements)
                    ],
                )
        except aiosqlite.Error as e:
            raise DatabaseError("save movements", str(e)) from e
        logger.debug("inventory_movements_saved", count=len(movements))

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> Item:
        return Item(
            id=row["id"],
            name=row["name"],
            description=row["description"] or "",
            quantity=row["quantity"],
            price=row["price"],
            category=row["category"],
            low_stock_threshold=row["low_stock_threshold"],
            date_added=_from_text(row["date_added"]),
            last_updated=_from_text(row["last_updated"]),
        )

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> Movement:
        return Movement(
            id=row["id"],
            item_id=row["item_id"],
            item_name=row["item_name"],
            movement_type=MovementType(row["movement_type"]),
            quantity_changed=row["quantity_changed"],
            reason=row["reason"] or "",
            date=_from_text(row["date"]),
        )
