"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockledger.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from stockledger.api.middleware.error_handler import setup_exception_handlers
from stockledger.api.routes import (
    dashboard_router,
    health_router,
    items_router,
    movements_router,
    notifications_router,
    suggestions_router,
)
from stockledger.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database (SQLite backend), loads the ledger, and closes
    everything on shutdown.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        storage_backend=settings.storage.backend,
    )

    if settings.storage.backend == "sqlite":
        from stockledger.infrastructure.storage.sqlite import get_pool
        from stockledger.infrastructure.storage.sqlite.migrations.migrator import run_migrations

        try:
            await run_migrations()
            await get_pool()
            logger.info("database_initialized", db_path=str(settings.storage.db_path))
        except Exception as e:
            logger.error("database_init_failed", error=str(e))
            raise

    from stockledger.application.services import start_ledger_engine, stop_ledger_engine

    await start_ledger_engine()

    # Warm up LLM provider (optional)
    if settings.llm.enabled and settings.llm.warmup_on_start:
        from stockledger.infrastructure.llm import check_llm_health

        health_status = await check_llm_health()
        logger.info("llm_provider_ready", healthy=health_status.available)

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    await stop_ledger_engine()

    if settings.storage.backend == "sqlite":
        from stockledger.infrastructure.storage.sqlite import close_pool

        await close_pool()

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="Stock Ledger API",
        description="Inventory items, stock movements and low-stock alerts",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(items_router)
    app.include_router(movements_router)
    app.include_router(dashboard_router)
    app.include_router(suggestions_router)
    app.include_router(notifications_router)

    return app


app = create_app()


@app.get("/")
async def root() -> dict[str, str]:
    """API info."""
    settings = get_settings()
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


def run() -> None:
    """CLI entry point: ``stockledger-api``."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "stockledger.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )


if __name__ == "__main__":
    run()
