"""
Base Service.

Base class for the todo use cases: holds the repository they
orchestrate and provides logging context.

Usage:
    from todo_app.backend.services.base import BaseService

    class ArchiveTodoUseCase(BaseService):
        async def run(self, command):
            todo = await self._require_todo(command.id)
            ...
"""

from typing import Any

from todo_app.backend.core.logging import get_logger
from todo_app.backend.domain.exceptions import TodoNotFoundError
from todo_app.backend.domain.todo import Todo
from todo_app.backend.domain.value_objects import TodoId
from todo_app.backend.repositories.base import TodoIdLike, TodoRepository


class BaseService:
    """
    Base class for all services.

    Provides:
    - Repository access through the storage-agnostic contract
    - Logging context

    Errors are never caught here: domain errors and storage faults reach
    the caller unchanged.
    """

    def __init__(self, repository: TodoRepository) -> None:
        self.repo = repository
        self._logger = get_logger(self.__class__.__module__)

    async def _require_todo(self, todo_id: TodoIdLike) -> Todo:
        """
        Load a todo or fail.

        Raises:
            InvalidTodoIdError: If the id is malformed
            TodoNotFoundError: If no todo has this id
        """
        key = TodoId.coerce(todo_id)
        todo = await self.repo.get_by_id(key)
        if todo is None:
            raise TodoNotFoundError(key)
        return todo

    def _log_operation(self, operation: str, **context: Any) -> None:
        """Log a service operation at info level with the service name attached."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(self, message: str, **context: Any) -> None:
        """Log debug information."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
