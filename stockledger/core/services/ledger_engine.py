"""
Inventory ledger engine.

Owns the in-memory item and movement collections and keeps them in
lockstep: every non-zero quantity change appends exactly one movement,
rejected operations leave both collections untouched, and low-stock
crossings are reported to the notification sink.

Two store flavours sit behind the same operations:
- IInventoryStore: write-through mirror, whole collections are saved
  after each mutation.
- ILiveInventoryStore: authoritative store, single documents are written
  and its change events are projected into memory, so changes made by
  other sessions sharing the store show up here too.

Validation and the in-memory mutation of an operation both happen before
its first ``await``; persistence failures are recorded, not raised.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from datetime import datetime
from typing import cast

from stockledger.config import get_logger
from stockledger.core.entities.inventory import (
    Item,
    ItemData,
    Movement,
    MovementReason,
    MovementType,
    StockChange,
    utc_now,
)
from stockledger.core.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    ItemNotFoundError,
    LedgerNotInitializedError,
    PersistenceError,
    StorageError,
)
from stockledger.core.interfaces.inventory_store import (
    ChangeEvent,
    ChangeKind,
    ChangeStream,
    Collection,
    IInventoryStore,
    ILiveInventoryStore,
)
from stockledger.core.interfaces.notifications import INotificationSink
from stockledger.core.services.low_stock import crossed_below_threshold

logger = get_logger(__name__)


def newest_first(movements: Iterable[Movement]) -> list[Movement]:
    """Sort movements by date descending; ties keep the latest appended first."""
    ordered = list(movements)
    ordered.reverse()
    ordered.sort(key=lambda m: m.date, reverse=True)
    return ordered


class LedgerEngine:
    """
    Item and movement ledger for one session.

    Call ``initialize()`` before anything else and ``close()`` at the end of
    the session. Until initialized, reads return empty results and
    mutations raise LedgerNotInitializedError.
    """

    def __init__(
        self,
        store: IInventoryStore,
        notification_sink: INotificationSink | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._sink = notification_sink
        self._clock = clock
        self._live = isinstance(store, ILiveInventoryStore)

        self._items: dict[str, Item] = {}
        self._movements: list[Movement] = []
        self._movement_ids: set[str] = set()
        self._initialized = False

        self._streams: list[ChangeStream] = []
        self._tasks: list[asyncio.Task] = []

        self.persistence_failures = 0
        self.last_persistence_error: PersistenceError | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def is_live(self) -> bool:
        """True when memory is a projection of a live store."""
        return self._live

    async def initialize(self) -> None:
        """Load both collections and, for a live store, subscribe to changes."""
        if self._initialized:
            return

        # Subscribe before loading so writes landing mid-load are replayed
        if self._live:
            await self._open_streams()
        try:
            items = await self._load(Collection.ITEMS, self._store.load_items)
            movements = await self._load(Collection.MOVEMENTS, self._store.load_movements)
        except BaseException:
            await self.close()
            raise

        self._items = {item.id: item for item in items}
        self._movements = []
        self._movement_ids = set()
        for movement in movements:
            self._append_movement(movement)

        self._initialized = True
        if self._live:
            self._start_projection()
        logger.info(
            "ledger_initialized",
            items=len(self._items),
            movements=len(self._movements),
            live=self._live,
        )

    async def close(self) -> None:
        """Stop projecting live changes."""
        for stream in self._streams:
            await stream.close()
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._streams.clear()
        self._tasks.clear()
        logger.info("ledger_closed")

    async def _load(
        self,
        collection: Collection,
        loader: Callable[[], Awaitable[list]],
    ) -> list:
        try:
            return await loader()
        except StorageError as e:
            # Unreadable store: start empty rather than fail the session
            logger.warning(
                "inventory_load_failed",
                collection=collection.value,
                error=str(e),
            )
            return []

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def items(self) -> list[Item]:
        """All items (empty while uninitialized)."""
        if not self._initialized:
            return []
        return list(self._items.values())

    @property
    def movements(self) -> list[Movement]:
        """All movements, newest first (empty while uninitialized)."""
        if not self._initialized:
            return []
        return newest_first(self._movements)

    def get_item_by_id(self, item_id: str) -> Item | None:
        """Return the item, or None if unknown or not yet initialized."""
        if not self._initialized:
            return None
        return self._items.get(item_id)

    def get_movements_by_item_id(self, item_id: str) -> list[Movement]:
        """Movements referencing ``item_id``, newest first.

        Works for deleted items too; movements outlive their item.
        """
        if not self._initialized:
            return []
        return newest_first(m for m in self._movements if m.item_id == item_id)

    # ------------------------------------------------------------------
    # Item mutations
    # ------------------------------------------------------------------

    async def add_item(self, data: ItemData) -> Item:
        """Create an item; a positive starting quantity is logged as an entrada."""
        self._require_initialized("add item")

        now = self._clock()
        item = Item(**data.model_dump(), date_added=now, last_updated=now)
        self._items[item.id] = item

        movement = None
        if item.quantity > 0:
            movement = self._record_movement(
                item, MovementType.ENTRADA, item.quantity, MovementReason.INITIAL_CREATION, now
            )
        self._check_low_stock(item, None)

        logger.info(
            "item_created",
            item_id=item.id,
            name=item.name,
            quantity=item.quantity,
        )
        await self._sync(item=item, movement=movement)
        return item

    async def update_item(self, item_id: str, data: ItemData) -> Item:
        """Replace an item's mutable fields, logging any quantity delta."""
        current = self._require_item(item_id, "update item")

        now = self._clock()
        updated = current.model_copy(update={**data.model_dump(), "last_updated": now})
        self._items[item_id] = updated

        delta = updated.quantity - current.quantity
        movement = None
        if delta > 0:
            movement = self._record_movement(
                updated, MovementType.ENTRADA, delta, MovementReason.EDIT_INCREASE, now
            )
        elif delta < 0:
            movement = self._record_movement(
                updated, MovementType.SALIDA, -delta, MovementReason.EDIT_DECREASE, now
            )
        self._check_low_stock(updated, current.quantity)

        logger.info("item_updated", item_id=item_id, delta=delta)
        await self._sync(item=updated, movement=movement)
        return updated

    async def delete_item(self, item_id: str) -> bool:
        """Remove an item, keeping its movements. Unknown ids are a no-op."""
        self._require_initialized("delete item")

        removed = self._items.pop(item_id, None)
        if removed is None:
            logger.debug("item_delete_ignored", item_id=item_id)
            return False

        logger.info("item_deleted", item_id=item_id, name=removed.name)
        await self._sync(deleted_id=item_id)
        return True

    # ------------------------------------------------------------------
    # Stock movements
    # ------------------------------------------------------------------

    async def record_stock_input(
        self,
        item_id: str,
        quantity: int,
        reason: str,
    ) -> StockChange:
        """Receive ``quantity`` units (entrada)."""
        item = self._require_item(item_id, "record stock input")
        self._require_positive(quantity, "stock input")
        return await self._change_quantity(
            item, MovementType.ENTRADA, quantity, reason, "stock_input_recorded"
        )

    async def record_stock_output(
        self,
        item_id: str,
        quantity: int,
        reason: str,
    ) -> StockChange:
        """Issue ``quantity`` units (salida); never partially fulfilled."""
        item = self._require_item(item_id, "record stock output")
        self._require_positive(quantity, "stock output")
        if quantity > item.quantity:
            logger.warning(
                "stock_output_rejected",
                item_id=item_id,
                requested=quantity,
                available=item.quantity,
            )
            raise InsufficientStockError(item_id, quantity, item.quantity)
        return await self._change_quantity(
            item, MovementType.SALIDA, quantity, reason, "stock_output_recorded"
        )

    async def increment_item_quantity(
        self,
        item_id: str,
        amount: int = 1,
        reason: str = MovementReason.MANUAL_INCREMENT,
    ) -> StockChange:
        """Add ``amount`` units outside the stock-input form."""
        item = self._require_item(item_id, "increment quantity")
        self._require_positive(amount, "increment")
        return await self._change_quantity(
            item, MovementType.ENTRADA, amount, reason, "quantity_incremented"
        )

    async def decrement_item_quantity(
        self,
        item_id: str,
        amount: int = 1,
        reason: str = MovementReason.MANUAL_DECREMENT,
    ) -> StockChange:
        """Remove up to ``amount`` units; quantity floors at zero.

        Only the amount actually removed is logged. When nothing can be
        removed the item is returned unchanged with no movement.
        """
        item = self._require_item(item_id, "decrement quantity")
        self._require_positive(amount, "decrement")

        removed = min(amount, item.quantity)
        if removed == 0:
            logger.info("decrement_skipped_empty_stock", item_id=item_id)
            return StockChange(item=item)
        return await self._change_quantity(
            item, MovementType.SALIDA, removed, reason, "quantity_decremented"
        )

    async def _change_quantity(
        self,
        item: Item,
        movement_type: MovementType,
        amount: int,
        reason: str,
        event: str,
    ) -> StockChange:
        now = self._clock()
        signed = amount if movement_type is MovementType.ENTRADA else -amount
        updated = item.model_copy(
            update={"quantity": item.quantity + signed, "last_updated": now}
        )
        self._items[item.id] = updated

        movement = self._record_movement(updated, movement_type, amount, reason, now)
        notified = self._check_low_stock(updated, item.quantity)

        logger.info(
            event,
            item_id=item.id,
            quantity=amount,
            new_quantity=updated.quantity,
        )
        await self._sync(item=updated, movement=movement)
        return StockChange(item=updated, movement=movement, low_stock_notified=notified)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_initialized(self, operation: str) -> None:
        if not self._initialized:
            raise LedgerNotInitializedError(operation)

    def _require_item(self, item_id: str, operation: str) -> Item:
        self._require_initialized(operation)
        item = self._items.get(item_id)
        if item is None:
            logger.warning("item_not_found", item_id=item_id, operation=operation)
            raise ItemNotFoundError(item_id)
        return item

    @staticmethod
    def _require_positive(quantity: int, operation: str) -> None:
        if quantity <= 0:
            raise InvalidQuantityError(quantity, operation)

    def _record_movement(
        self,
        item: Item,
        movement_type: MovementType,
        quantity: int,
        reason: str,
        date: datetime,
    ) -> Movement:
        movement = Movement(
            item_id=item.id,
            item_name=item.name,
            movement_type=movement_type,
            quantity_changed=quantity,
            reason=reason,
            date=date,
        )
        self._append_movement(movement)
        return movement

    def _append_movement(self, movement: Movement) -> bool:
        if movement.id in self._movement_ids:
            return False
        self._movements.append(movement)
        self._movement_ids.add(movement.id)
        return True

    def _check_low_stock(self, item: Item, old_quantity: int | None) -> bool:
        threshold = item.low_stock_threshold
        if threshold is None or not crossed_below_threshold(
            old_quantity, item.quantity, threshold
        ):
            return False

        logger.warning(
            "low_stock_detected",
            item_id=item.id,
            name=item.name,
            quantity=item.quantity,
            threshold=threshold,
        )
        if self._sink is not None:
            try:
                self._sink.notify_low_stock(item.name, item.quantity, threshold)
            except Exception as e:
                logger.error(
                    "low_stock_notification_failed",
                    item_id=item.id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
        return True

    async def _sync(
        self,
        *,
        item: Item | None = None,
        movement: Movement | None = None,
        deleted_id: str | None = None,
    ) -> None:
        """Push a mutation to the store; failures are recorded, not raised."""
        if self._live:
            live = cast(ILiveInventoryStore, self._store)
            if item is not None:
                await self._attempt("put_item", live.put_item(item))
            if deleted_id is not None:
                await self._attempt("delete_item", live.delete_item(deleted_id))
            if movement is not None:
                await self._attempt("add_movement", live.add_movement(movement))
            return

        await self._attempt("save_items", self._store.save_items(list(self._items.values())))
        if movement is not None:
            await self._attempt("save_movements", self._store.save_movements(list(self._movements)))

    async def _attempt(self, operation: str, write: Awaitable[None]) -> None:
        try:
            await write
        except StorageError as e:
            self.persistence_failures += 1
            self.last_persistence_error = PersistenceError(operation, e.message)
            logger.error(
                "inventory_persist_failed",
                operation=operation,
                error=str(e),
                failures=self.persistence_failures,
            )

    # ------------------------------------------------------------------
    # Live projection
    # ------------------------------------------------------------------

    async def _open_streams(self) -> None:
        live = cast(ILiveInventoryStore, self._store)
        for collection in (Collection.ITEMS, Collection.MOVEMENTS):
            self._streams.append(await live.subscribe(collection))

    def _start_projection(self) -> None:
        for stream, collection in zip(
            self._streams, (Collection.ITEMS, Collection.MOVEMENTS), strict=True
        ):
            self._tasks.append(
                asyncio.create_task(
                    self._consume(stream),
                    name=f"ledger-{collection.value}-projection",
                )
            )

    async def _consume(self, stream: ChangeStream) -> None:
        async for event in stream:
            self.apply_change(event)

    def apply_change(self, event: ChangeEvent) -> None:
        """Project one store change into memory."""
        if event.collection is Collection.ITEMS:
            if event.kind is ChangeKind.DELETE:
                self._items.pop(event.document_id, None)
                return
            incoming = event.document
            if not isinstance(incoming, Item):
                return
            current = self._items.get(event.document_id)
            if current is not None and incoming.last_updated < current.last_updated:
                logger.debug("stale_item_change_ignored", item_id=event.document_id)
                return
            self._items[event.document_id] = incoming
            return

        if event.kind is ChangeKind.UPSERT and isinstance(event.document, Movement):
            self._append_movement(event.document)
