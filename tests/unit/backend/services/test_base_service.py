"""
Unit Tests for BaseService.
"""

from unittest.mock import patch

import pytest

from todo_app.backend.domain.exceptions import TodoNotFoundError
from todo_app.backend.domain.value_objects import TodoId
from todo_app.backend.services.base import BaseService


class TestBaseService:
    @pytest.mark.asyncio
    async def test_require_todo_returns_stored(self, memory_repository, make_todo):
        todo_id = await memory_repository.create(make_todo())

        todo = await BaseService(memory_repository)._require_todo(str(todo_id))

        assert todo.id == todo_id

    @pytest.mark.asyncio
    async def test_require_todo_raises_not_found(self, mock_repository):
        mock_repository.get_by_id.return_value = None

        with pytest.raises(TodoNotFoundError) as exc_info:
            await BaseService(mock_repository)._require_todo(12)

        assert exc_info.value.todo_id == TodoId(12)
        assert "12" in exc_info.value.message

    def test_log_operation_includes_service_name(self, mock_repository, mock_logger):
        with patch("todo_app.backend.services.base.get_logger", return_value=mock_logger):
            service = BaseService(mock_repository)
            service._log_operation("Doing work", todo_id="1")

        mock_logger.info.assert_called_once_with(
            "Doing work",
            extra={"service": "BaseService", "todo_id": "1"},
        )

    def test_log_debug(self, mock_repository, mock_logger):
        with patch("todo_app.backend.services.base.get_logger", return_value=mock_logger):
            BaseService(mock_repository)._log_debug("Detail", count=2)

        mock_logger.debug.assert_called_once_with(
            "Detail",
            extra={"service": "BaseService", "count": 2},
        )
