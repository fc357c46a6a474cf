"""Abstract interfaces for inventory persistence."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass
from enum import Enum

from stockledger.core.entities.inventory import Item, Movement


class Collection(str, Enum):
    """The two collections a store keeps."""

    ITEMS = "items"
    MOVEMENTS = "movements"


class ChangeKind(str, Enum):
    """Kind of change published by a live store."""

    UPSERT = "upsert"
    DELETE = "delete"


@dataclass(frozen=True)
class ChangeEvent:
    """One document change in a live store."""

    collection: Collection
    kind: ChangeKind
    document_id: str
    document: Item | Movement | None = None  # None for deletes


class ChangeStream(ABC):
    """Async iterator of change events; closing it unsubscribes."""

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[ChangeEvent]:
        pass

    @abstractmethod
    async def close(self) -> None:
        """Stop receiving events."""
        pass


class IInventoryStore(ABC):
    """
    Durable mirror of the item and movement collections.

    Implementations raise StorageError subclasses on failure.
    """

    @abstractmethod
    async def load_items(self) -> list[Item]:
        """Load every stored item."""
        pass

    @abstractmethod
    async def save_items(self, items: list[Item]) -> None:
        """Replace the stored items with ``items``."""
        pass

    @abstractmethod
    async def load_movements(self) -> list[Movement]:
        """Load every stored movement."""
        pass

    @abstractmethod
    async def save_movements(self, movements: list[Movement]) -> None:
        """Store ``movements``; movements already stored are left untouched."""
        pass


class ILiveInventoryStore(IInventoryStore):
    """
    Authoritative store that publishes changes to subscribers.

    The engine writes single documents and projects the change events
    into its in-memory collections.
    """

    @abstractmethod
    async def put_item(self, item: Item) -> None:
        """Insert or replace one item."""
        pass

    @abstractmethod
    async def delete_item(self, item_id: str) -> None:
        """Delete one item; unknown ids are ignored."""
        pass

    @abstractmethod
    async def add_movement(self, movement: Movement) -> None:
        """Append one movement."""
        pass

    @abstractmethod
    async def subscribe(self, collection: Collection) -> ChangeStream:
        """Open a stream of changes to ``collection``."""
        pass
