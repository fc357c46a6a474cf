"""
In-process live document store.

Holds the item and movement collections and publishes every change to its
subscribers, the way a hosted document database pushes snapshots to its
listeners. Several ledger engines sharing one instance see each other's
writes.
"""

import asyncio
from collections.abc import AsyncIterator

from stockledger.config import get_logger
from stockledger.core.entities.inventory import Item, Movement
from stockledger.core.interfaces.inventory_store import (
    ChangeEvent,
    ChangeKind,
    ChangeStream,
    Collection,
    ILiveInventoryStore,
)

logger = get_logger(__name__)


class MemoryChangeStream(ChangeStream):
    """Queue-backed subscription to one collection."""

    def __init__(self, store: "MemoryDocumentStore", collection: Collection):
        self._store = store
        self.collection = collection
        self._queue: asyncio.Queue[ChangeEvent | None] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, event: ChangeEvent) -> None:
        if not self._closed:
            self._queue.put_nowait(event)

    async def __aiter__(self) -> AsyncIterator[ChangeEvent]:
        while True:
            event = await self._queue.get()
            if event is None:
                return
            yield event

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(None)
        self._store._unsubscribe(self)


class MemoryDocumentStore(ILiveInventoryStore):
    """Live inventory store kept in process memory."""

    def __init__(
        self,
        items: list[Item] | None = None,
        movements: list[Movement] | None = None,
    ):
        self._items: dict[str, Item] = {item.id: item for item in items or []}
        self._movements: dict[str, Movement] = {m.id: m for m in movements or []}
        self._subscribers: dict[Collection, list[MemoryChangeStream]] = {
            Collection.ITEMS: [],
            Collection.MOVEMENTS: [],
        }

    def subscriber_count(self, collection: Collection) -> int:
        return len(self._subscribers[collection])

    async def load_items(self) -> list[Item]:
        return [item.model_copy() for item in self._items.values()]

    async def save_items(self, items: list[Item]) -> None:
        incoming = {item.id: item for item in items}
        for item_id in [i for i in self._items if i not in incoming]:
            await self.delete_item(item_id)
        for item in items:
            await self.put_item(item)

    async def load_movements(self) -> list[Movement]:
        return list(self._movements.values())

    async def save_movements(self, movements: list[Movement]) -> None:
        for movement in movements:
            await self.add_movement(movement)

    async def put_item(self, item: Item) -> None:
        stored = item.model_copy()
        self._items[item.id] = stored
        self._publish(ChangeEvent(Collection.ITEMS, ChangeKind.UPSERT, item.id, stored))

    async def delete_item(self, item_id: str) -> None:
        if self._items.pop(item_id, None) is None:
            return
        self._publish(ChangeEvent(Collection.ITEMS, ChangeKind.DELETE, item_id))

    async def add_movement(self, movement: Movement) -> None:
        if movement.id in self._movements:
            return
        self._movements[movement.id] = movement
        self._publish(
            ChangeEvent(Collection.MOVEMENTS, ChangeKind.UPSERT, movement.id, movement)
        )

    async def subscribe(self, collection: Collection) -> ChangeStream:
        stream = MemoryChangeStream(self, collection)
        self._subscribers[collection].append(stream)
        logger.debug(
            "store_subscription_opened",
            collection=collection.value,
            subscribers=len(self._subscribers[collection]),
        )
        return stream

    def _unsubscribe(self, stream: MemoryChangeStream) -> None:
        subscribers = self._subscribers[stream.collection]
        if stream in subscribers:
            subscribers.remove(stream)
            logger.debug("store_subscription_closed", collection=stream.collection.value)

    def _publish(self, event: ChangeEvent) -> None:
        for stream in list(self._subscribers[event.collection]):
            stream.publish(event)
