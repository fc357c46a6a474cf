"""Tests for LedgerEngine."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from stockledger.core.entities.inventory import (
    Item,
    Movement,
    MovementReason,
    MovementType,
)
from stockledger.core.exceptions import (
    DatabaseError,
    InsufficientStockError,
    InvalidQuantityError,
    ItemNotFoundError,
    LedgerNotInitializedError,
)
from stockledger.core.interfaces import IInventoryStore, INotificationSink
from stockledger.core.services.ledger_engine import LedgerEngine, newest_first


def _balance(movements: list[Movement], item_id: str) -> int:
    total = 0
    for m in movements:
        if m.item_id != item_id:
            continue
        if m.movement_type is MovementType.ENTRADA:
            total += m.quantity_changed
        else:
            total -= m.quantity_changed
    return total


class TestInitialization:
    async def test_reads_empty_before_initialize(self, mirror_store):
        engine = LedgerEngine(mirror_store)

        assert engine.is_initialized is False
        assert engine.items == []
        assert engine.movements == []
        assert engine.get_item_by_id("anything") is None
        assert engine.get_movements_by_item_id("anything") == []

    async def test_mutations_rejected_before_initialize(self, mirror_store, item_data):
        engine = LedgerEngine(mirror_store)

        with pytest.raises(LedgerNotInitializedError):
            await engine.add_item(item_data())
        with pytest.raises(LedgerNotInitializedError):
            await engine.record_stock_input("x", 1, "")
        with pytest.raises(LedgerNotInitializedError):
            await engine.delete_item("x")
        mirror_store.save_items.assert_not_called()

    async def test_initialize_loads_store(self, mirror_store):
        item = Item(name="Bolt", quantity=4)
        movement = Movement(
            item_id=item.id,
            item_name="Bolt",
            movement_type=MovementType.ENTRADA,
            quantity_changed=4,
            reason=MovementReason.INITIAL_CREATION,
        )
        mirror_store.load_items.return_value = [item]
        mirror_store.load_movements.return_value = [movement]

        engine = LedgerEngine(mirror_store)
        await engine.initialize()

        assert engine.is_initialized
        assert engine.get_item_by_id(item.id) == item
        assert engine.movements == [movement]

    async def test_initialize_drops_duplicate_movement_ids(self, mirror_store):
        movement = Movement(
            item_id="a",
            item_name="A",
            movement_type=MovementType.ENTRADA,
            quantity_changed=1,
        )
        mirror_store.load_movements.return_value = [movement, movement]

        engine = LedgerEngine(mirror_store)
        await engine.initialize()

        assert len(engine.movements) == 1

    async def test_load_failure_starts_empty(self, mirror_store):
        """An unreadable store is treated as no data yet."""
        mirror_store.load_items.side_effect = DatabaseError("load items", "disk I/O error")
        mirror_store.load_movements.side_effect = DatabaseError("load movements", "locked")

        engine = LedgerEngine(mirror_store)
        await engine.initialize()

        assert engine.is_initialized
        assert engine.items == []
        assert engine.movements == []

    async def test_initialize_twice_loads_once(self, mirror_store):
        engine = LedgerEngine(mirror_store)
        await engine.initialize()
        await engine.initialize()

        mirror_store.load_items.assert_awaited_once()

    async def test_write_through_store_is_not_live(self, engine):
        assert engine.is_live is False


class TestAddItem:
    async def test_zero_quantity_logs_no_movement(self, engine, item_data):
        item = await engine.add_item(item_data(quantity=0))

        assert item.quantity == 0
        assert item.date_added == item.last_updated
        assert engine.movements == []

    async def test_positive_quantity_logs_initial_entrada(self, engine, item_data):
        item = await engine.add_item(item_data(name="Gear", quantity=7))

        [movement] = engine.get_movements_by_item_id(item.id)
        assert movement.movement_type is MovementType.ENTRADA
        assert movement.quantity_changed == 7
        assert movement.reason == MovementReason.INITIAL_CREATION
        assert movement.item_name == "Gear"

    async def test_add_then_stock_in(self, engine, item_data):
        item = await engine.add_item(item_data(quantity=0))

        change = await engine.record_stock_input(item.id, 10, "delivery")

        assert change.item.quantity == 10
        [movement] = engine.movements
        assert movement.movement_type is MovementType.ENTRADA
        assert movement.quantity_changed == 10
        assert movement.reason == "delivery"

    async def test_syncs_items_and_movements(self, engine, mirror_store, item_data):
        item = await engine.add_item(item_data(quantity=3))

        saved_items = mirror_store.save_items.call_args[0][0]
        saved_movements = mirror_store.save_movements.call_args[0][0]
        assert [i.id for i in saved_items] == [item.id]
        assert len(saved_movements) == 1

    async def test_zero_quantity_skips_movement_save(self, engine, mirror_store, item_data):
        await engine.add_item(item_data(quantity=0))

        mirror_store.save_items.assert_awaited_once()
        mirror_store.save_movements.assert_not_called()

    async def test_created_below_threshold_notifies(self, engine, sink, item_data):
        await engine.add_item(item_data(name="Fuse", quantity=2, low_stock_threshold=5))

        sink.notify_low_stock.assert_called_once_with("Fuse", 2, 5)


class TestUpdateItem:
    async def test_unknown_item(self, engine, item_data):
        with pytest.raises(ItemNotFoundError):
            await engine.update_item("missing", item_data())

    async def test_replaces_fields_and_bumps_last_updated(self, mirror_store, item_data):
        times = iter(
            [
                datetime(2024, 1, 1, tzinfo=UTC),
                datetime(2024, 1, 2, tzinfo=UTC),
            ]
        )
        engine = LedgerEngine(mirror_store, clock=lambda: next(times))
        await engine.initialize()
        item = await engine.add_item(item_data(name="Old", category="A"))

        updated = await engine.update_item(item.id, item_data(name="New", category=None))

        assert updated.id == item.id
        assert updated.name == "New"
        assert updated.category is None
        assert updated.date_added == datetime(2024, 1, 1, tzinfo=UTC)
        assert updated.last_updated == datetime(2024, 1, 2, tzinfo=UTC)

    async def test_unchanged_quantity_logs_no_movement(self, engine, item_data):
        item = await engine.add_item(item_data(quantity=5))

        await engine.update_item(item.id, item_data(quantity=5, description="edited"))

        assert len(engine.get_movements_by_item_id(item.id)) == 1

    async def test_increase_logs_entrada(self, engine, item_data):
        item = await engine.add_item(item_data(quantity=5))

        await engine.update_item(item.id, item_data(quantity=8))

        latest = engine.get_movements_by_item_id(item.id)[0]
        assert latest.movement_type is MovementType.ENTRADA
        assert latest.quantity_changed == 3
        assert latest.reason == MovementReason.EDIT_INCREASE

    async def test_decrease_logs_salida(self, engine, item_data):
        item = await engine.add_item(item_data(quantity=5))

        await engine.update_item(item.id, item_data(quantity=1))

        latest = engine.get_movements_by_item_id(item.id)[0]
        assert latest.movement_type is MovementType.SALIDA
        assert latest.quantity_changed == 4
        assert latest.reason == MovementReason.EDIT_DECREASE


class TestDeleteItem:
    async def test_unknown_id_is_noop(self, engine, mirror_store):
        assert await engine.delete_item("missing") is False
        mirror_store.save_items.assert_not_called()

    async def test_deletion_preserves_history(self, engine, item_data):
        item = await engine.add_item(item_data(name="Valve", quantity=0))
        await engine.record_stock_input(item.id, 6, "restock")
        await engine.record_stock_output(item.id, 2, "job 12")

        assert await engine.delete_item(item.id) is True

        assert engine.get_item_by_id(item.id) is None
        history = engine.get_movements_by_item_id(item.id)
        assert len(history) == 2
        assert all(m.item_name == "Valve" for m in history)


class TestStockInput:
    async def test_receives_quantity(self, engine, mirror_store, item_data):
        item = await engine.add_item(item_data(quantity=2))
        mirror_store.reset_mock()

        change = await engine.record_stock_input(item.id, 5, "PO-17")

        assert change.item.quantity == 7
        assert change.movement.movement_type is MovementType.ENTRADA
        assert change.movement.quantity_changed == 5
        assert change.movement.reason == "PO-17"
        mirror_store.save_movements.assert_awaited_once()

    @pytest.mark.parametrize("quantity", [0, -1])
    async def test_non_positive_quantity(self, engine, mirror_store, item_data, quantity):
        item = await engine.add_item(item_data(quantity=2))
        mirror_store.reset_mock()

        with pytest.raises(InvalidQuantityError) as exc_info:
            await engine.record_stock_input(item.id, quantity, "")

        assert exc_info.value.details["quantity"] == quantity
        assert engine.get_item_by_id(item.id).quantity == 2
        assert len(engine.movements) == 1
        mirror_store.save_items.assert_not_called()

    async def test_unknown_item(self, engine, mirror_store):
        with pytest.raises(ItemNotFoundError):
            await engine.record_stock_input("missing", 3, "restock")

        assert engine.movements == []
        mirror_store.save_movements.assert_not_called()


class TestStockOutput:
    async def test_rejects_more_than_on_hand(self, engine, mirror_store, item_data):
        item = await engine.add_item(item_data(quantity=4))
        mirror_store.reset_mock()

        with pytest.raises(InsufficientStockError) as exc_info:
            await engine.record_stock_output(item.id, 5, "too many")

        assert exc_info.value.details["available"] == 4
        assert engine.get_item_by_id(item.id).quantity == 4
        assert len(engine.movements) == 1
        mirror_store.save_items.assert_not_called()

    async def test_issues_exact_quantity(self, engine, item_data):
        item = await engine.add_item(item_data(quantity=4))

        change = await engine.record_stock_output(item.id, 4, "sold out")

        assert change.item.quantity == 0
        assert change.movement.movement_type is MovementType.SALIDA
        assert change.movement.quantity_changed == 4

    @pytest.mark.parametrize("quantity", [0, -3])
    async def test_non_positive_quantity(self, engine, item_data, quantity):
        item = await engine.add_item(item_data(quantity=4))

        with pytest.raises(InvalidQuantityError):
            await engine.record_stock_output(item.id, quantity, "")
        with pytest.raises(InvalidQuantityError):
            await engine.record_stock_input(item.id, quantity, "")

        assert engine.get_item_by_id(item.id).quantity == 4

    async def test_unknown_item(self, engine):
        with pytest.raises(ItemNotFoundError):
            await engine.record_stock_output("missing", 1, "")
        assert engine.movements == []


class TestManualAdjustments:
    async def test_increment_defaults(self, engine, item_data):
        item = await engine.add_item(item_data(quantity=0))

        change = await engine.increment_item_quantity(item.id)

        assert change.item.quantity == 1
        assert change.movement.reason == MovementReason.MANUAL_INCREMENT

    async def test_decrement_clamps_at_zero(self, engine, item_data):
        item = await engine.add_item(item_data(quantity=3))

        change = await engine.decrement_item_quantity(item.id, 10)

        assert change.item.quantity == 0
        assert change.movement.movement_type is MovementType.SALIDA
        assert change.movement.quantity_changed == 3
        assert change.movement.reason == MovementReason.MANUAL_DECREMENT

    async def test_decrement_empty_item_changes_nothing(self, engine, mirror_store, item_data):
        item = await engine.add_item(item_data(quantity=0))
        mirror_store.reset_mock()

        change = await engine.decrement_item_quantity(item.id)

        assert change.movement is None
        assert change.item.last_updated == item.last_updated
        assert engine.movements == []
        mirror_store.save_items.assert_not_called()

    async def test_increment_unknown_item(self, engine):
        with pytest.raises(ItemNotFoundError):
            await engine.increment_item_quantity("missing")
        assert engine.movements == []

    async def test_decrement_unknown_item(self, engine):
        with pytest.raises(ItemNotFoundError):
            await engine.decrement_item_quantity("missing", 2)

    async def test_decrement_rejects_non_positive(self, engine, item_data):
        item = await engine.add_item(item_data(quantity=3))

        with pytest.raises(InvalidQuantityError):
            await engine.decrement_item_quantity(item.id, 0)


class TestLowStockNotifications:
    async def test_edge_triggered(self, engine, sink, item_data):
        item = await engine.add_item(item_data(name="Fuse", quantity=10, low_stock_threshold=5))
        sink.notify_low_stock.assert_not_called()

        await engine.update_item(item.id, item_data(name="Fuse", quantity=3, low_stock_threshold=5))
        assert sink.notify_low_stock.call_count == 1

        await engine.update_item(item.id, item_data(name="Fuse", quantity=2, low_stock_threshold=5))
        assert sink.notify_low_stock.call_count == 1

        await engine.update_item(item.id, item_data(name="Fuse", quantity=6, low_stock_threshold=5))
        await engine.update_item(item.id, item_data(name="Fuse", quantity=4, low_stock_threshold=5))
        assert sink.notify_low_stock.call_count == 2
        sink.notify_low_stock.assert_called_with("Fuse", 4, 5)

    async def test_stock_output_reports_notification(self, engine, sink, item_data):
        item = await engine.add_item(item_data(quantity=6, low_stock_threshold=5))

        first = await engine.record_stock_output(item.id, 2, "")
        second = await engine.record_stock_output(item.id, 1, "")

        assert first.low_stock_notified is True
        assert second.low_stock_notified is False
        sink.notify_low_stock.assert_called_once()

    async def test_no_threshold_never_notifies(self, engine, sink, item_data):
        item = await engine.add_item(item_data(quantity=1))
        await engine.decrement_item_quantity(item.id)

        sink.notify_low_stock.assert_not_called()

    async def test_sink_failure_keeps_mutation(self, mirror_store, item_data):
        sink = MagicMock(spec=INotificationSink)
        sink.notify_low_stock.side_effect = RuntimeError("smtp down")
        engine = LedgerEngine(mirror_store, notification_sink=sink)
        await engine.initialize()

        item = await engine.add_item(item_data(quantity=1, low_stock_threshold=5))

        assert engine.get_item_by_id(item.id).quantity == 1
        assert len(engine.movements) == 1


class TestPersistenceFailures:
    async def test_save_failure_is_recorded_not_raised(self, engine, mirror_store, item_data):
        mirror_store.save_items.side_effect = DatabaseError("save items", "database is locked")

        item = await engine.add_item(item_data(quantity=2))

        assert engine.get_item_by_id(item.id) is not None
        assert engine.persistence_failures == 1
        assert engine.last_persistence_error.code == "PERSISTENCE_FAILURE"
        assert engine.last_persistence_error.details["operation"] == "save_items"

    async def test_movement_save_attempted_after_item_save_failure(
        self, engine, mirror_store, item_data
    ):
        mirror_store.save_items.side_effect = DatabaseError("save items", "locked")

        await engine.add_item(item_data(quantity=2))

        mirror_store.save_movements.assert_awaited_once()

    async def test_unexpected_error_propagates(self, mirror_store, item_data):
        store = AsyncMock(spec=IInventoryStore)
        store.load_items.return_value = []
        store.load_movements.return_value = []
        store.save_items.side_effect = RuntimeError("bug")
        engine = LedgerEngine(store)
        await engine.initialize()

        with pytest.raises(RuntimeError):
            await engine.add_item(item_data())


class TestLedgerProperties:
    async def test_quantity_matches_movement_balance(self, engine, item_data):
        item = await engine.add_item(item_data(quantity=0))
        await engine.record_stock_input(item.id, 12, "po-1")
        await engine.record_stock_output(item.id, 5, "so-1")
        await engine.increment_item_quantity(item.id, 3)
        await engine.decrement_item_quantity(item.id, 20)
        await engine.update_item(item.id, item_data(quantity=9))
        await engine.update_item(item.id, item_data(quantity=4))
        with pytest.raises(InsufficientStockError):
            await engine.record_stock_output(item.id, 5, "")

        current = engine.get_item_by_id(item.id).quantity
        assert current == 4
        assert current == _balance(engine.movements, item.id)

    async def test_movements_newest_first(self, engine, item_data):
        item = await engine.add_item(item_data(quantity=1))
        await engine.record_stock_input(item.id, 2, "second")
        await engine.record_stock_input(item.id, 3, "third")

        reasons = [m.reason for m in engine.movements]
        assert reasons == ["third", "second", MovementReason.INITIAL_CREATION]


class TestNewestFirst:
    def test_sorts_by_date_descending(self):
        base = datetime(2024, 5, 1, tzinfo=UTC)
        old = Movement(
            item_id="a", item_name="A", movement_type=MovementType.ENTRADA,
            quantity_changed=1, date=base,
        )
        new = Movement(
            item_id="a", item_name="A", movement_type=MovementType.SALIDA,
            quantity_changed=1, date=base + timedelta(days=1),
        )

        assert newest_first([old, new]) == [new, old]

    def test_ties_keep_latest_appended_first(self):
        stamp = datetime(2024, 5, 1, tzinfo=UTC)
        first = Movement(
            item_id="a", item_name="A", movement_type=MovementType.ENTRADA,
            quantity_changed=1, date=stamp,
        )
        second = Movement(
            item_id="a", item_name="A", movement_type=MovementType.ENTRADA,
            quantity_changed=2, date=stamp,
        )

        assert newest_first([first, second]) == [second, first]
