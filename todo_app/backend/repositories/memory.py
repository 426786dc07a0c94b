"""
In-Memory Todo Repository.

Reference adapter holding todos in a dict keyed by id. One instance is
shared per process by the factory and acts as the durable store for the
lifetime of the process. Also used as the test double for use cases.
"""

from dataclasses import replace
from typing import Any

from todo_app.backend.core.logging import get_logger
from todo_app.backend.domain.exceptions import TodoNotFoundError
from todo_app.backend.domain.todo import Todo
from todo_app.backend.domain.value_objects import TodoId
from todo_app.backend.repositories.base import (
    TodoIdLike,
    TodoRepository,
    newest_first,
    normalize_changes,
)

logger = get_logger(__name__)


class InMemoryTodoRepository(TodoRepository):
    """Dict-backed repository with hex UUID ids."""

    def __init__(self) -> None:
        self._todos: dict[TodoId, Todo] = {}

    def _require(self, todo_id: TodoIdLike) -> tuple[TodoId, Todo]:
        key = TodoId.coerce(todo_id)
        todo = self._todos.get(key)
        if todo is None:
            raise TodoNotFoundError(key)
        return key, todo

    async def get_all(self) -> list[Todo]:
        return newest_first(list(self._todos.values()))

    async def get_by_id(self, todo_id: TodoIdLike) -> Todo | None:
        return self._todos.get(TodoId.coerce(todo_id))

    async def create(self, todo: Todo) -> TodoId:
        new_id = TodoId.generate()
        self._todos[new_id] = todo.with_id(new_id)
        logger.debug("Todo stored", extra={"todo_id": str(new_id)})
        return new_id

    async def update(self, todo_id: TodoIdLike, **changes: Any) -> None:
        key, existing = self._require(todo_id)
        normalized = normalize_changes(changes)
        if not normalized:
            return
        self._todos[key] = replace(existing, **normalized)

    async def delete(self, todo_id: TodoIdLike) -> None:
        key, _ = self._require(todo_id)
        del self._todos[key]

    async def count(self) -> int:
        return len(self._todos)

    def clear(self) -> None:
        """Drop every stored todo."""
        self._todos.clear()
