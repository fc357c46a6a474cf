"""Notification sink implementations."""

from stockledger.infrastructure.notifications.sinks import (
    AlertBuffer,
    CompositeNotificationSink,
    LoggingNotificationSink,
)

__all__ = ["AlertBuffer", "CompositeNotificationSink", "LoggingNotificationSink"]
