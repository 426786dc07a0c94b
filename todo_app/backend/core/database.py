"""
Database Configuration.

SQLAlchemy async engine and session management for the SQL storage
backends (sqlite via aiosqlite, postgresql via asyncpg). Uses lazy
initialization so the in-memory backend never creates an engine.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from todo_app.backend.core.logging import get_logger

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def _create_engine() -> AsyncEngine:
    """Create async SQLAlchemy engine from the configured backend."""
    from todo_app.backend.core.config import find_project_root, get_app_config, get_database_url

    db_config = get_app_config().database
    url = get_database_url()
    if url is None:
        raise RuntimeError("The memory backend does not use a database engine")

    engine_kwargs: dict[str, Any] = {"echo": db_config.echo}
    if db_config.backend == "postgresql":
        engine_kwargs.update(
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
            pool_timeout=db_config.pool_timeout,
            pool_recycle=db_config.pool_recycle,
        )
    else:
        (find_project_root() / db_config.sqlite_path).parent.mkdir(parents=True, exist_ok=True)

    engine = create_async_engine(url, **engine_kwargs)
    logger.debug("Database engine created", extra={"backend": db_config.backend})
    return engine


def get_engine() -> AsyncEngine:
    """
    Get the database engine, creating it on first use.

    Raises:
        RuntimeError: If the configured backend is not SQL-based
    """
    global _engine
    if _engine is None:
        _engine = _create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory, creating it on first use."""
    global _async_session_factory
    if _async_session_factory is None:
        _async_session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _async_session_factory


async def create_tables() -> None:
    """Create all mapped tables that do not exist yet."""
    from todo_app.backend.models.base import Base
    import todo_app.backend.models.todo  # noqa: F401  registers the table

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def dispose_engine() -> None:
    """Dispose the engine and forget the cached session factory."""
    global _engine, _async_session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _async_session_factory = None
