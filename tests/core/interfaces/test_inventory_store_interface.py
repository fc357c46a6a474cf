"""Unit tests for inventory store interfaces."""

import dataclasses

import pytest

from stockledger.core.interfaces.inventory_store import (
    ChangeEvent,
    ChangeKind,
    Collection,
    IInventoryStore,
    ILiveInventoryStore,
)


class TestChangeEvent:
    def test_delete_has_no_document(self):
        event = ChangeEvent(Collection.ITEMS, ChangeKind.DELETE, "abc")
        assert event.document is None

    def test_is_frozen(self):
        event = ChangeEvent(Collection.MOVEMENTS, ChangeKind.UPSERT, "abc")
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.document_id = "other"


class TestStoreInterfaces:
    def test_live_store_is_an_inventory_store(self):
        assert issubclass(ILiveInventoryStore, IInventoryStore)

    def test_write_through_store_needs_four_methods(self):
        class Partial(IInventoryStore):
            async def load_items(self):
                return []

        with pytest.raises(TypeError):
            Partial()

    def test_collection_values(self):
        assert [c.value for c in Collection] == ["items", "movements"]
