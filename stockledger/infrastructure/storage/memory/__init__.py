"""In-memory live storage."""

from stockledger.infrastructure.storage.memory.document_store import (
    MemoryChangeStream,
    MemoryDocumentStore,
)

__all__ = ["MemoryDocumentStore", "MemoryChangeStream"]
