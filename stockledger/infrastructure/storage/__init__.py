"""Storage infrastructure implementations."""

from stockledger.config import get_settings
from stockledger.core.exceptions import ConfigurationError
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.infrastructure.storage.memory import MemoryDocumentStore
from stockledger.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)


def get_inventory_store(backend: str | None = None) -> IInventoryStore:
    """
    Build the inventory store selected in settings.

    Args:
        backend: Override STORAGE_BACKEND ("sqlite" or "memory")
    """
    backend = backend or get_settings().storage.backend
    if backend == "sqlite":
        return SQLiteInventoryStore()
    if backend == "memory":
        return MemoryDocumentStore()
    raise ConfigurationError(f"Unknown storage backend: {backend}")


__all__ = [
    # Stores
    "SQLiteInventoryStore",
    "MemoryDocumentStore",
    "get_inventory_store",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
