"""Core interfaces (ports) for dependency injection."""

from stockledger.core.interfaces.inventory_store import (
    ChangeEvent,
    ChangeKind,
    ChangeStream,
    Collection,
    IInventoryStore,
    ILiveInventoryStore,
)
from stockledger.core.interfaces.llm import (
    HealthStatus,
    ILLMProvider,
    LLMProvider,
    LLMResponse,
)
from stockledger.core.interfaces.notifications import INotificationSink

__all__ = [
    # LLM interfaces
    "ILLMProvider",
    "LLMProvider",
    "LLMResponse",
    "HealthStatus",
    # Storage interfaces
    "IInventoryStore",
    "ILiveInventoryStore",
    "ChangeEvent",
    "ChangeKind",
    "ChangeStream",
    "Collection",
    # Notification interfaces
    "INotificationSink",
]
