"""
Todo Repository Contract.

The storage-agnostic interface every persistence adapter implements.
Use cases depend on this class only; adapters are chosen at startup by
repositories.factory.

Absence on read is not an error (get_by_id returns None). Absence on
update or delete raises TodoNotFoundError. Storage faults propagate
unchanged.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from todo_app.backend.core.exceptions import ValidationError
from todo_app.backend.core.utils import to_naive_utc
from todo_app.backend.domain.specifications import (
    ActiveTodoSpecification,
    CompletedTodoSpecification,
    Specification,
)
from todo_app.backend.domain.todo import Todo
from todo_app.backend.domain.value_objects import TodoId, TodoPriority, TodoTitle

TodoIdLike = TodoId | int | str

UPDATABLE_FIELDS = frozenset({"title", "completed", "priority", "due_date"})


def normalize_changes(changes: dict[str, Any]) -> dict[str, Any]:
    """
    Validate a partial change set and convert values to domain types.

    Raises:
        TypeError: If a key is not an updatable field
        InvalidTodoTitleError: If the title is invalid
        InvalidTodoPriorityError: If the priority is invalid
        ValidationError: If completed or due_date has the wrong type
    """
    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise TypeError(f"Unknown todo field(s): {', '.join(sorted(unknown))}")

    normalized: dict[str, Any] = {}
    for name, value in changes.items():
        if name == "title":
            value = value if isinstance(value, TodoTitle) else TodoTitle(value)
        elif name == "priority":
            value = value if isinstance(value, TodoPriority) else TodoPriority(value)
        elif name == "completed":
            if not isinstance(value, bool):
                raise ValidationError("Completed flag must be a boolean", details={"field": "completed"})
        elif name == "due_date" and value is not None:
            if not isinstance(value, datetime):
                raise ValidationError("Due date must be a datetime", details={"field": "due_date"})
            value = to_naive_utc(value)
        normalized[name] = value
    return normalized


def newest_first(todos: list[Todo]) -> list[Todo]:
    return sorted(todos, key=lambda todo: todo.created_at, reverse=True)


class TodoRepository(ABC):
    """
    Todo persistence contract. All methods are coroutines.

    Every list-returning method orders by created_at descending.
    get_active, get_completed, find_by_specification and the counters
    have generic implementations on top of get_all; adapters override
    them when the store can answer natively.
    """

    @abstractmethod
    async def get_all(self) -> list[Todo]:
        """Return every todo, newest first."""

    @abstractmethod
    async def get_by_id(self, todo_id: TodoIdLike) -> Todo | None:
        """Return the todo, or None when it does not exist."""

    @abstractmethod
    async def create(self, todo: Todo) -> TodoId:
        """Persist a todo under a freshly assigned id and return that id. Any id on the input is ignored."""

    @abstractmethod
    async def update(self, todo_id: TodoIdLike, **changes: Any) -> None:
        """
        Apply only the given fields (title, completed, priority, due_date).

        Raises:
            TodoNotFoundError: If the todo does not exist
            TypeError: If an unknown field is given
        """

    @abstractmethod
    async def delete(self, todo_id: TodoIdLike) -> None:
        """
        Remove a todo.

        Raises:
            TodoNotFoundError: If the todo does not exist
        """

    async def get_active(self) -> list[Todo]:
        return await self.find_by_specification(ActiveTodoSpecification())

    async def get_completed(self) -> list[Todo]:
        return await self.find_by_specification(CompletedTodoSpecification())

    async def find_by_specification(self, spec: Specification[Todo]) -> list[Todo]:
        """Todos satisfying spec, newest first."""
        return [todo for todo in await self.get_all() if spec.is_satisfied_by(todo)]

    async def count(self) -> int:
        return len(await self.get_all())

    async def count_active(self) -> int:
        return len(await self.get_active())

    async def count_completed(self) -> int:
        return len(await self.get_completed())
