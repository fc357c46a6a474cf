"""Tests for low-stock notification sinks."""

from unittest.mock import MagicMock

from stockledger.core.interfaces import INotificationSink
from stockledger.infrastructure.notifications import (
    AlertBuffer,
    CompositeNotificationSink,
    LoggingNotificationSink,
)


class TestAlertBuffer:
    def test_newest_first(self):
        buffer = AlertBuffer()
        buffer.notify_low_stock("Fuse", 2, 5)
        buffer.notify_low_stock("Bolt", 0, 10)

        alerts = buffer.recent()

        assert [a.item_name for a in alerts] == ["Bolt", "Fuse"]
        assert alerts[1].current_quantity == 2
        assert alerts[1].threshold == 5

    def test_bounded(self):
        buffer = AlertBuffer(max_size=2)
        for name in ("a", "b", "c"):
            buffer.notify_low_stock(name, 0, 1)

        assert len(buffer) == 2
        assert [a.item_name for a in buffer.recent()] == ["c", "b"]

    def test_limit(self):
        buffer = AlertBuffer()
        for name in ("a", "b", "c"):
            buffer.notify_low_stock(name, 0, 1)

        assert [a.item_name for a in buffer.recent(limit=1)] == ["c"]

    def test_clear(self):
        buffer = AlertBuffer()
        buffer.notify_low_stock("a", 0, 1)

        assert buffer.clear() == 1
        assert buffer.recent() == []


class TestLoggingNotificationSink:
    def test_does_not_raise(self):
        LoggingNotificationSink().notify_low_stock("Fuse", 2, 5)


class TestCompositeNotificationSink:
    def test_fans_out(self):
        first = MagicMock(spec=INotificationSink)
        buffer = AlertBuffer()
        composite = CompositeNotificationSink([first, buffer])

        composite.notify_low_stock("Fuse", 2, 5)

        first.notify_low_stock.assert_called_once_with("Fuse", 2, 5)
        assert len(buffer) == 1

    def test_failing_sink_does_not_stop_others(self):
        broken = MagicMock(spec=INotificationSink)
        broken.notify_low_stock.side_effect = RuntimeError("down")
        buffer = AlertBuffer()

        CompositeNotificationSink([broken, buffer]).notify_low_stock("Fuse", 2, 5)

        assert len(buffer) == 1
