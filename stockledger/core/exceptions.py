"""
Domain exceptions for the stock ledger.

Every error raised by the core carries a machine-readable ``code`` and a
``details`` dict so the API layer can render it without knowing its type.
"""

from typing import Any


class StockLedgerError(Exception):
    """Base exception for all stock ledger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Inventory Exceptions
class InventoryError(StockLedgerError):
    """Base exception for ledger operations."""

    pass


class ItemNotFoundError(InventoryError):
    """Referenced item does not exist."""

    def __init__(self, item_id: str):
        super().__init__(
            f"Inventory item not found: {item_id}",
            code="ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


class InvalidQuantityError(InventoryError):
    """A quantity that must be positive was zero or negative."""

    def __init__(self, quantity: int, operation: str):
        super().__init__(
            f"Quantity must be greater than zero for {operation}, got {quantity}",
            code="INVALID_QUANTITY",
            details={"quantity": quantity, "operation": operation},
        )


class InsufficientStockError(InventoryError):
    """Stock output exceeds the quantity on hand."""

    def __init__(self, item_id: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for item {item_id}: "
            f"requested {requested}, available {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "item_id": item_id,
                "requested": requested,
                "available": available,
            },
        )


class LedgerNotInitializedError(InventoryError):
    """A mutation was attempted before the initial load completed."""

    def __init__(self, operation: str):
        super().__init__(
            f"Ledger is not initialized; cannot {operation}",
            code="LEDGER_NOT_INITIALIZED",
            details={"operation": operation},
        )


# Storage Exceptions
class StorageError(StockLedgerError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class PersistenceError(StorageError):
    """Syncing the in-memory ledger to its store failed.

    Recorded by the engine and surfaced through health checks; the
    in-memory mutation that triggered the sync stays applied.
    """

    def __init__(self, operation: str, reason: str):
        super().__init__(
            f"Persistence failed during {operation}: {reason}",
            code="PERSISTENCE_FAILURE",
            details={"operation": operation, "reason": reason},
        )


# LLM Exceptions
class LLMError(StockLedgerError):
    """Base exception for LLM operations."""

    pass


class LLMUnavailableError(LLMError):
    """LLM provider is not available."""

    def __init__(self, provider: str, reason: str | None = None):
        super().__init__(
            f"LLM provider unavailable: {provider}" + (f" - {reason}" if reason else ""),
            code="LLM_UNAVAILABLE",
            details={"provider": provider, "reason": reason},
        )


class LLMTimeoutError(LLMError):
    """LLM request timed out."""

    def __init__(self, timeout: int, operation: str = "generation"):
        super().__init__(
            f"LLM {operation} timed out after {timeout} seconds",
            code="LLM_TIMEOUT",
            details={"timeout": timeout, "operation": operation},
        )


class LLMResponseError(LLMError):
    """LLM returned invalid or empty response."""

    def __init__(self, reason: str, response: str | None = None):
        super().__init__(
            f"Invalid LLM response: {reason}",
            code="LLM_RESPONSE_ERROR",
            details={"reason": reason, "response_preview": (response or "")[:200]},
        )


class ModelNotFoundError(LLMError):
    """Requested model not found."""

    def __init__(self, model: str, provider: str):
        super().__init__(
            f"Model '{model}' not found on {provider}",
            code="MODEL_NOT_FOUND",
            details={"model": model, "provider": provider},
        )


class CircuitBreakerOpenError(LLMError):
    """Circuit breaker is open due to repeated failures."""

    def __init__(self, provider: str, cooldown_remaining: int):
        super().__init__(
            f"Circuit breaker open for {provider}, retry in {cooldown_remaining}s",
            code="CIRCUIT_BREAKER_OPEN",
            details={"provider": provider, "cooldown_remaining": cooldown_remaining},
        )


class SuggestionUnavailableError(LLMError):
    """A description, category or price suggestion could not be produced."""

    def __init__(self, kind: str, reason: str):
        super().__init__(
            f"No {kind} suggestion available: {reason}",
            code="SUGGESTION_UNAVAILABLE",
            details={"kind": kind, "reason": reason},
        )


# Validation Exceptions
class ValidationError(StockLedgerError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class ConfigurationError(StockLedgerError):
    """Configuration error."""

    pass
