"""
Unit Test Fixtures.

Fixtures for unit tests. Storage is either the in-memory repository or
a mock of the repository contract; nothing touches a real database.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from todo_app.backend.repositories.base import TodoRepository
from todo_app.backend.repositories.memory import InMemoryTodoRepository


# =============================================================================
# Repository Fixtures
# =============================================================================


@pytest.fixture
def memory_repository() -> InMemoryTodoRepository:
    """Fresh in-memory repository per test."""
    return InMemoryTodoRepository()


@pytest.fixture
def mock_repository() -> AsyncMock:
    """
    Mock of the repository contract.

    Usage:
        mock_repository.get_by_id.return_value = None
        with pytest.raises(TodoNotFoundError):
            await ToggleTodoUseCase(mock_repository).run(ToggleTodoCommand(id=1))
    """
    return AsyncMock(spec=TodoRepository)


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """Mocked AsyncSession for adapter wiring tests."""
    session = AsyncMock()
    session.add = MagicMock()
    return session


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.get_logger", return_value=mock_logger):
                mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
