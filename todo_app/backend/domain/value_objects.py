"""
Todo Value Objects.

Immutable, self-validating wrappers around the primitives a Todo is made
of. Construction fails with a typed domain error; there are no setters.
Equality is structural (dataclass eq).
"""

import re
import uuid
from dataclasses import dataclass
from typing import ClassVar, Literal

from todo_app.backend.domain.exceptions import (
    InvalidTodoIdError,
    InvalidTodoPriorityError,
    InvalidTodoTitleError,
)

PriorityLevel = Literal["low", "medium", "high"]

PRIORITY_WEIGHTS: dict[str, int] = {"low": 1, "medium": 2, "high": 3}
DEFAULT_PRIORITY_WEIGHT = PRIORITY_WEIGHTS["medium"]

_HEX_ID = re.compile(r"^(?:[0-9a-f]{32}|[0-9a-f]{24})$")


@dataclass(frozen=True)
class TodoTitle:
    """A trimmed title between 2 and 255 characters."""

    value: str

    MIN_LENGTH: ClassVar[int] = 2
    MAX_LENGTH: ClassVar[int] = 255

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidTodoTitleError("Title must be a string")
        trimmed = self.value.strip()
        if not trimmed:
            raise InvalidTodoTitleError("Title cannot be empty")
        if len(trimmed) > self.MAX_LENGTH:
            raise InvalidTodoTitleError(f"Title cannot exceed {self.MAX_LENGTH} characters")
        if len(trimmed) < self.MIN_LENGTH:
            raise InvalidTodoTitleError(
                f"Title must be at least {self.MIN_LENGTH} characters long"
            )
        object.__setattr__(self, "value", trimmed)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TodoPriority:
    """Priority level with a numeric weight used for ordering."""

    level: PriorityLevel = "medium"

    def __post_init__(self) -> None:
        if self.level not in PRIORITY_WEIGHTS:
            raise InvalidTodoPriorityError(self.level)

    @property
    def numeric_value(self) -> int:
        return PRIORITY_WEIGHTS.get(self.level, DEFAULT_PRIORITY_WEIGHT)

    def is_higher_than(self, other: "TodoPriority") -> bool:
        return self.numeric_value > other.numeric_value

    def __str__(self) -> str:
        return self.level


@dataclass(frozen=True)
class TodoId:
    """
    Repository-assigned identifier.

    Two shapes are accepted: a positive integer (SQL autoincrement style)
    or a lowercase hex string of 32 characters (UUID) or 24 characters
    (ObjectId). Dashed UUID strings are normalised to their hex form.
    """

    value: int | str

    def __post_init__(self) -> None:
        value = self.value
        if isinstance(value, bool):
            raise InvalidTodoIdError(value)
        if isinstance(value, int):
            if value <= 0:
                raise InvalidTodoIdError(value)
            return
        if not isinstance(value, str):
            raise InvalidTodoIdError(value)

        normalized = value.strip().lower()
        if len(normalized) == 36:
            try:
                normalized = uuid.UUID(normalized).hex
            except ValueError:
                raise InvalidTodoIdError(value) from None
        if not _HEX_ID.match(normalized):
            raise InvalidTodoIdError(value)
        object.__setattr__(self, "value", normalized)

    @classmethod
    def from_string(cls, raw: str) -> "TodoId":
        """Parse a path or query string; digit-only strings become numeric ids."""
        if not isinstance(raw, str):
            raise InvalidTodoIdError(raw)
        stripped = raw.strip()
        if stripped.isdigit():
            return cls(int(stripped))
        return cls(stripped)

    @classmethod
    def coerce(cls, value: "TodoId | int | str") -> "TodoId":
        """Accept an existing TodoId, an int, or a string id."""
        if isinstance(value, TodoId):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        return cls(value)

    @classmethod
    def generate(cls) -> "TodoId":
        return cls(uuid.uuid4().hex)

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.value, int)

    @property
    def id_type(self) -> str:
        if self.is_numeric:
            return "numeric"
        return "uuid" if len(self.value) == 32 else "object_id"

    def __str__(self) -> str:
        return str(self.value)
