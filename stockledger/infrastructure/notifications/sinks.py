"""
Low-stock notification sinks.

The engine reports threshold crossings through a single sink; the
composite fans out to the log and to the in-memory buffer the API reads.
"""

from collections import deque

from stockledger.config import get_logger
from stockledger.core.entities.notification import LowStockAlert
from stockledger.core.interfaces.notifications import INotificationSink

logger = get_logger(__name__)


class LoggingNotificationSink(INotificationSink):
    """Writes each alert as a structured warning."""

    def notify_low_stock(self, item_name: str, current_quantity: int, threshold: int) -> None:
        logger.warning(
            "low_stock_alert",
            item_name=item_name,
            current_quantity=current_quantity,
            threshold=threshold,
        )


class AlertBuffer(INotificationSink):
    """Keeps the most recent alerts, newest first."""

    def __init__(self, max_size: int = 100):
        self._alerts: deque[LowStockAlert] = deque(maxlen=max_size)

    def notify_low_stock(self, item_name: str, current_quantity: int, threshold: int) -> None:
        self._alerts.appendleft(
            LowStockAlert(
                item_name=item_name,
                current_quantity=current_quantity,
                threshold=threshold,
            )
        )

    def recent(self, limit: int | None = None) -> list[LowStockAlert]:
        alerts = list(self._alerts)
        return alerts if limit is None else alerts[:limit]

    def clear(self) -> int:
        """Drop every buffered alert, returning how many were dropped."""
        count = len(self._alerts)
        self._alerts.clear()
        return count

    def __len__(self) -> int:
        return len(self._alerts)


class CompositeNotificationSink(INotificationSink):
    """Forwards each alert to every wrapped sink.

    A failing sink is logged and does not stop the others.
    """

    def __init__(self, sinks: list[INotificationSink]):
        self.sinks = list(sinks)

    def notify_low_stock(self, item_name: str, current_quantity: int, threshold: int) -> None:
        for sink in self.sinks:
            try:
                sink.notify_low_stock(item_name, current_quantity, threshold)
            except Exception as e:
                logger.error(
                    "notification_sink_failed",
                    sink=type(sink).__name__,
                    error=str(e),
                )
