"""
Todo Aggregate.

The Todo entity combines the value objects with a completion flag, a
creation timestamp and an optional due date. Instances are frozen:
every operation returns a new, validated Todo and leaves the original
untouched. Identity equality is by id only.

Timestamps are naive UTC; aware datetimes are converted on construction.
"""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import Any

from todo_app.backend.core.exceptions import ValidationError
from todo_app.backend.core.utils import to_naive_utc, utc_now
from todo_app.backend.domain.exceptions import (
    InvalidTodoDueDateError,
    InvalidTodoPriorityError,
    InvalidTodoTitleError,
    TodoAlreadyCompletedError,
)
from todo_app.backend.domain.value_objects import PRIORITY_WEIGHTS, TodoId, TodoPriority, TodoTitle

TRACKED_FIELDS = ("title", "completed", "priority", "due_date")


def _coerce_id(value: Any) -> TodoId | None:
    return None if value is None else TodoId.coerce(value)


@dataclass(frozen=True, eq=False)
class Todo:
    """
    Aggregate root for a single todo item.

    Plain strings are accepted for title, priority and id and are wrapped
    in their value objects. Construction performs value-object checks
    only; call validate() to check cross-field rules (operations do this
    for you).
    """

    title: TodoTitle
    completed: bool = False
    priority: TodoPriority = field(default_factory=TodoPriority)
    created_at: datetime = field(default_factory=utc_now)
    id: TodoId | None = None
    due_date: datetime | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.title, TodoTitle):
            object.__setattr__(self, "title", TodoTitle(self.title))
        if not isinstance(self.priority, TodoPriority):
            object.__setattr__(self, "priority", TodoPriority(self.priority))
        object.__setattr__(self, "id", _coerce_id(self.id))
        object.__setattr__(self, "created_at", to_naive_utc(self.created_at))
        if self.due_date is not None:
            object.__setattr__(self, "due_date", to_naive_utc(self.due_date))

    @classmethod
    def create(
        cls,
        title: str | TodoTitle,
        priority: str | TodoPriority = "medium",
        due_date: datetime | None = None,
        now: datetime | None = None,
    ) -> "Todo":
        """Build a new, not yet persisted todo and validate it."""
        todo = cls(
            title=title,
            completed=False,
            priority=priority,
            created_at=now or utc_now(),
            due_date=due_date,
        )
        todo.validate()
        return todo

    def _evolve(self, **changes: Any) -> "Todo":
        updated = replace(self, **changes)
        updated.validate()
        return updated

    def toggle(self) -> "Todo":
        return self._evolve(completed=not self.completed)

    def update_title(self, new_title: str | TodoTitle) -> "Todo":
        return self._evolve(title=new_title)

    def update_priority(self, new_priority: str | TodoPriority) -> "Todo":
        return self._evolve(priority=new_priority)

    def update_due_date(self, due_date: datetime | None) -> "Todo":
        return self._evolve(due_date=due_date)

    def complete(self) -> "Todo":
        """
        Mark the todo as completed.

        Raises:
            TodoAlreadyCompletedError: If it is completed already
        """
        if self.completed:
            raise TodoAlreadyCompletedError()
        return self._evolve(completed=True)

    def can_be_completed(self) -> bool:
        return not self.completed

    def with_id(self, todo_id: TodoId | int | str) -> "Todo":
        """Return a copy carrying a repository-assigned id."""
        return replace(self, id=todo_id)

    def validate(self) -> None:
        """
        Re-check every invariant.

        Guards instances that were built through paths that skip value
        object construction, such as hydration from storage.

        Raises:
            InvalidTodoTitleError: Title is not a valid TodoTitle
            InvalidTodoPriorityError: Priority level is unknown
            InvalidTodoDueDateError: Due date precedes creation
            ValidationError: Completion flag or timestamps have the wrong type
        """
        if not isinstance(self.title, TodoTitle):
            raise InvalidTodoTitleError("Title must be a TodoTitle")
        TodoTitle(self.title.value)

        if not isinstance(self.priority, TodoPriority) or self.priority.level not in PRIORITY_WEIGHTS:
            raise InvalidTodoPriorityError(getattr(self.priority, "level", self.priority))

        if not isinstance(self.completed, bool):
            raise ValidationError(
                "Completed flag must be a boolean",
                details={"field": "completed"},
            )
        if not isinstance(self.created_at, datetime):
            raise ValidationError(
                "Creation timestamp must be a datetime",
                details={"field": "created_at"},
            )
        if self.due_date is not None:
            if not isinstance(self.due_date, datetime):
                raise InvalidTodoDueDateError("Due date must be a datetime")
            if self.due_date < self.created_at:
                raise InvalidTodoDueDateError("Due date cannot be before the creation date")

    def changed_fields(self, other: "Todo") -> tuple[str, ...]:
        """Names of tracked fields whose values differ between self and other."""
        return tuple(name for name in TRACKED_FIELDS if getattr(self, name) != getattr(other, name))

    def to_dict(self) -> dict[str, Any]:
        """Primitive representation, used in use-case debug logs."""
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, TodoTitle):
                value = value.value
            elif isinstance(value, TodoPriority):
                value = value.level
            elif isinstance(value, TodoId):
                value = value.value
            data[f.name] = value
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Todo):
            return NotImplemented
        if self is other:
            return True
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return object.__hash__(self)
        return hash(self.id)
