"""Abstract interface for low-stock notification sinks."""

from abc import ABC, abstractmethod


class INotificationSink(ABC):
    """Receives low-stock warnings from the ledger engine.

    Fire-and-forget: the engine decides when to call, the sink decides how
    the warning reaches a user.
    """

    @abstractmethod
    def notify_low_stock(
        self,
        item_name: str,
        current_quantity: int,
        threshold: int,
    ) -> None:
        """Report that an item dropped below its threshold."""
        pass
