"""
Todo Domain Events.

Records of things that happened to a todo during a unit of work. Use
cases return them alongside the resulting aggregate; the caller hands
them to a publisher once persistence has succeeded.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, ClassVar
from uuid import uuid4

from todo_app.backend.core.utils import utc_now
from todo_app.backend.domain.todo import Todo
from todo_app.backend.domain.value_objects import TodoId


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base event. Subclasses set event_type and add their payload fields."""

    event_type: ClassVar[str] = "todos.todo.event"

    todo_id: TodoId
    event_id: str = field(default_factory=lambda: uuid4().hex)
    occurred_at: datetime = field(default_factory=utc_now)

    def payload(self) -> dict[str, Any]:
        """JSON-compatible payload without the envelope fields."""
        data: dict[str, Any] = {}
        for f in fields(self):
            if f.name in ("event_id", "occurred_at"):
                continue
            value = getattr(self, f.name)
            if isinstance(value, TodoId):
                value = str(value)
            elif isinstance(value, datetime):
                value = value.isoformat()
            elif isinstance(value, tuple):
                value = list(value)
            data[f.name] = value
        return data


@dataclass(frozen=True, kw_only=True)
class TodoCreated(DomainEvent):
    event_type: ClassVar[str] = "todos.todo.created"

    title: str


@dataclass(frozen=True, kw_only=True)
class TodoCompleted(DomainEvent):
    event_type: ClassVar[str] = "todos.todo.completed"

    completed_at: datetime


@dataclass(frozen=True, kw_only=True)
class TodoUncompleted(DomainEvent):
    event_type: ClassVar[str] = "todos.todo.uncompleted"

    uncompleted_at: datetime


@dataclass(frozen=True, kw_only=True)
class TodoUpdated(DomainEvent):
    event_type: ClassVar[str] = "todos.todo.updated"

    changed_fields: tuple[str, ...]


@dataclass(frozen=True, kw_only=True)
class TodoDeleted(DomainEvent):
    event_type: ClassVar[str] = "todos.todo.deleted"


def events_for_change(before: Todo, after: Todo, at: datetime | None = None) -> list[DomainEvent]:
    """
    Describe the transition from before to after as events.

    A completion flip yields TodoCompleted or TodoUncompleted; any other
    tracked field change yields a single TodoUpdated. No change, no events.
    """
    occurred_at = at or utc_now()
    todo_id = after.id or before.id
    changed = after.changed_fields(before)
    events: list[DomainEvent] = []

    if "completed" in changed:
        if after.completed:
            events.append(TodoCompleted(todo_id=todo_id, completed_at=occurred_at, occurred_at=occurred_at))
        else:
            events.append(TodoUncompleted(todo_id=todo_id, uncompleted_at=occurred_at, occurred_at=occurred_at))

    other_fields = tuple(name for name in changed if name != "completed")
    if other_fields:
        events.append(TodoUpdated(todo_id=todo_id, changed_fields=other_fields, occurred_at=occurred_at))
    return events
