"""
FastAPI Application Entry Point.

Run with: uvicorn todo_app.backend.main:app
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todo_app.backend.api import health
from todo_app.backend.api.v1 import router as api_v1_router
from todo_app.backend.core.config import get_app_config
from todo_app.backend.core.database import create_tables, dispose_engine
from todo_app.backend.core.exception_handlers import register_exception_handlers
from todo_app.backend.core.logging import get_logger, setup_logging
from todo_app.backend.core.middleware import RequestContextMiddleware
from todo_app.backend.events.broker import close_event_broker, connect_event_broker
from todo_app.backend.repositories.factory import SQL_BACKENDS

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    app_config = get_app_config()
    setup_logging(level=app_config.logging.level)

    backend = app_config.database.backend
    uses_sql = backend in SQL_BACKENDS
    if uses_sql and app_config.features.create_tables_on_startup:
        await create_tables()

    publishes_events = app_config.features.events_publish_enabled
    if publishes_events:
        await connect_event_broker()

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
            "storage_backend": backend,
            "events_enabled": publishes_events,
        },
    )
    yield
    if publishes_events:
        await close_event_broker()
    if uses_sql:
        await dispose_engine()
    logger.info("Application shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app_config = get_app_config()
    app_settings = app_config.application
    docs_enabled = app_settings.debug and app_settings.docs_enabled

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        RequestContextMiddleware,
        log_requests=app_config.features.api_request_logging,
    )

    cors_origins = app_settings.cors.origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=app_settings.api_prefix)

    return app


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    Use this instead of importing `app` directly to avoid
    import-time configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn todo_app.backend.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
