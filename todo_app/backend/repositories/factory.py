"""
Repository Factory.

Binds the TodoRepository contract to one adapter based on the configured
storage backend (database.yaml: backend).
"""

from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.backend.repositories.base import TodoRepository
from todo_app.backend.repositories.memory import InMemoryTodoRepository
from todo_app.backend.repositories.sql import SqlAlchemyTodoRepository

SQL_BACKENDS = frozenset({"sqlite", "postgresql"})

_memory_repository: InMemoryTodoRepository | None = None


def get_memory_repository() -> InMemoryTodoRepository:
    """Process-wide in-memory repository, created on first use."""
    global _memory_repository
    if _memory_repository is None:
        _memory_repository = InMemoryTodoRepository()
    return _memory_repository


def reset_memory_repository() -> None:
    """Forget the process-wide in-memory repository."""
    global _memory_repository
    _memory_repository = None


def create_todo_repository(backend: str, session: AsyncSession | None = None) -> TodoRepository:
    """
    Build the repository for a storage backend.

    Args:
        backend: One of memory, sqlite, postgresql
        session: Open AsyncSession, required for SQL backends

    Raises:
        ValueError: Unknown backend, or SQL backend without a session
    """
    if backend == "memory":
        return get_memory_repository()
    if backend in SQL_BACKENDS:
        if session is None:
            raise ValueError(f"The {backend} backend requires a database session")
        return SqlAlchemyTodoRepository(session)
    raise ValueError(f"Unknown storage backend: {backend}")
