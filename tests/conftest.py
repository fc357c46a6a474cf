"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from stockledger.core.entities import ItemData
from stockledger.core.interfaces import IInventoryStore, INotificationSink
from stockledger.core.services import LedgerEngine


@pytest.fixture
def mirror_store() -> AsyncMock:
    """Write-through store that starts empty and accepts every save."""
    store = AsyncMock(spec=IInventoryStore)
    store.load_items.return_value = []
    store.load_movements.return_value = []
    return store


@pytest.fixture
def sink() -> MagicMock:
    """Notification sink that records calls."""
    return MagicMock(spec=INotificationSink)


@pytest_asyncio.fixture
async def engine(mirror_store, sink) -> AsyncGenerator[LedgerEngine, None]:
    """Initialized engine over the mirror store."""
    ledger = LedgerEngine(mirror_store, notification_sink=sink)
    await ledger.initialize()
    yield ledger
    await ledger.close()


@pytest.fixture
def item_data():
    """Factory for valid ItemData."""

    def _make(**overrides) -> ItemData:
        fields = {
            "name": "Widget",
            "description": "A small widget",
            "quantity": 0,
            "price": 2.5,
            "category": "Hardware",
            "low_stock_threshold": None,
        }
        fields.update(overrides)
        return ItemData(**fields)

    return _make


@pytest_asyncio.fixture
async def async_client(engine) -> AsyncGenerator[AsyncClient, None]:
    """API client whose routes run against the test engine."""
    from stockledger.api.dependencies import get_alerts, get_engine, get_suggestions
    from stockledger.api.main import app
    from stockledger.core.services import SuggestionService
    from stockledger.infrastructure.notifications import AlertBuffer

    alerts = AlertBuffer(max_size=10)
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_alerts] = lambda: alerts
    app.dependency_overrides[get_suggestions] = lambda: SuggestionService(llm_provider=None)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
