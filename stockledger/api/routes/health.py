"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from stockledger.api.dependencies import get_app_settings, get_engine
from stockledger.application.dto.responses import (
    HealthResponse,
    LedgerHealthResponse,
    ProviderHealthResponse,
)
from stockledger.config import Settings
from stockledger.core.services import LedgerEngine
from stockledger.infrastructure.llm import check_llm_health

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


def _ledger_status(engine: LedgerEngine, backend: str) -> LedgerHealthResponse:
    error = engine.last_persistence_error
    return LedgerHealthResponse(
        initialized=engine.is_initialized,
        live=engine.is_live,
        backend=backend,
        items=len(engine.items),
        movements=len(engine.movements),
        persistence_failures=engine.persistence_failures,
        last_persistence_error=error.message if error else None,
    )


@router.get("", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/ledger", response_model=HealthResponse)
async def ledger_health(
    engine: LedgerEngine = Depends(get_engine),
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """
    Ledger health check.

    Degraded while loading or after a failed save.
    """
    ledger = _ledger_status(engine, settings.storage.backend)
    healthy = ledger.initialized and ledger.persistence_failures == 0
    return HealthResponse(
        status="healthy" if healthy else "degraded",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
        ledger=ledger,
    )


@router.get("/llm", response_model=HealthResponse)
async def llm_health(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    LLM provider health check.

    Suggestions are optional, so an unavailable LLM only degrades status.
    """
    start = time.time()
    result = await check_llm_health()
    llm_status = ProviderHealthResponse(
        name=result.provider,
        available=result.available,
        latency_ms=result.response_time_ms or (time.time() - start) * 1000,
        error=result.error,
    )

    return HealthResponse(
        status="healthy" if llm_status.available else "degraded",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
        llm=llm_status,
    )
