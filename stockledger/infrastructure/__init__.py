"""Infrastructure layer implementations."""

from stockledger.infrastructure import llm, notifications, storage

__all__ = ["storage", "llm", "notifications"]
