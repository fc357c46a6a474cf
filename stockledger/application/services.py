"""
Service factory functions for dependency injection.

Wires infrastructure implementations to core services. Use cases and API
dependencies import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from stockledger.config import get_logger, get_settings
from stockledger.core.services import LedgerEngine, SuggestionService
from stockledger.infrastructure.notifications import (
    AlertBuffer,
    CompositeNotificationSink,
    LoggingNotificationSink,
)

if TYPE_CHECKING:
    from stockledger.core.interfaces import IInventoryStore, ILLMProvider, INotificationSink

logger = get_logger(__name__)

# Singleton instances
_alert_buffer: AlertBuffer | None = None
_ledger_engine: LedgerEngine | None = None
_suggestion_service: SuggestionService | None = None


def get_alert_buffer() -> AlertBuffer:
    """Get or create the buffer of recent low-stock alerts."""
    global _alert_buffer
    if _alert_buffer is None:
        _alert_buffer = AlertBuffer(max_size=get_settings().ledger.alert_history_size)
    return _alert_buffer


def build_notification_sink() -> "INotificationSink":
    """Alert buffer, plus the log when LEDGER_LOG_ALERTS is on."""
    sinks: list[INotificationSink] = [get_alert_buffer()]
    if get_settings().ledger.log_alerts:
        sinks.insert(0, LoggingNotificationSink())
    return CompositeNotificationSink(sinks)


def get_ledger_engine(
    store: "IInventoryStore | None" = None,
    notification_sink: "INotificationSink | None" = None,
) -> LedgerEngine:
    """
    Get or create the LedgerEngine.

    The engine is returned uninitialized on first creation; the API
    lifespan calls ``start_ledger_engine()``.

    Args:
        store: Optional store override (not cached)
        notification_sink: Optional sink override (not cached)
    """
    global _ledger_engine

    if _ledger_engine is not None and store is None and notification_sink is None:
        return _ledger_engine

    # Lazy import infrastructure
    from stockledger.infrastructure.storage import get_inventory_store

    engine = LedgerEngine(
        store=store or get_inventory_store(),
        notification_sink=notification_sink or build_notification_sink(),
    )

    if store is None and notification_sink is None:
        _ledger_engine = engine

    return engine


async def start_ledger_engine() -> LedgerEngine:
    """Create the engine if needed and load its collections."""
    engine = get_ledger_engine()
    await engine.initialize()
    return engine


async def stop_ledger_engine() -> None:
    if _ledger_engine is not None:
        await _ledger_engine.close()


def get_suggestion_service(
    llm_provider: "ILLMProvider | None" = None,
) -> SuggestionService:
    """
    Get or create the SuggestionService.

    Without an LLM (disabled or misconfigured) the service still exists and
    reports every suggestion as unavailable.
    """
    global _suggestion_service

    if _suggestion_service is not None and llm_provider is None:
        return _suggestion_service

    llm = llm_provider
    if llm is None:
        from stockledger.core.exceptions import ConfigurationError
        from stockledger.infrastructure.llm import get_optional_llm_provider

        try:
            llm = get_optional_llm_provider()
        except ConfigurationError as e:
            logger.warning("llm_provider_unavailable", error=str(e))
            llm = None

    service = SuggestionService(llm_provider=llm)

    if llm_provider is None:
        _suggestion_service = service

    return service


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _alert_buffer, _ledger_engine, _suggestion_service

    _alert_buffer = None
    _ledger_engine = None
    _suggestion_service = None


__all__ = [
    "get_alert_buffer",
    "build_notification_sink",
    "get_ledger_engine",
    "start_ledger_engine",
    "stop_ledger_engine",
    "get_suggestion_service",
    "reset_services",
]
