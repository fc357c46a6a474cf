"""Fixtures that run the real application against a temporary data directory."""

from pathlib import Path

import pytest

from stockledger.api.dependencies import get_app_settings
from stockledger.application.services import reset_services
from stockledger.config import reset_settings


def _reset() -> None:
    reset_settings()
    reset_services()
    get_app_settings.cache_clear()


@pytest.fixture
def app_env(tmp_path: Path, monkeypatch) -> Path:
    """SQLite backend under tmp_path, LLM disabled."""
    monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("LLM_ENABLED", "false")
    _reset()
    yield tmp_path
    _reset()


@pytest.fixture
def restart():
    """Forget every singleton so the next lifespan builds a fresh engine."""
    return reset_services
