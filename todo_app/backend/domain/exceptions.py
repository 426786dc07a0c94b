"""
Domain Exceptions.

Typed failures raised by the Todo core. Each maps onto one of the
application error families, so the HTTP layer needs no extra wiring.
"""

from typing import Any

from todo_app.backend.core.exceptions import NotFoundError, ValidationError


class InvalidTodoTitleError(ValidationError):
    """Raised when a title is empty, too short or too long."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(
            f"Invalid todo title: {reason}",
            details={"field": "title", "reason": reason},
            code="TODO_INVALID_TITLE",
        )


class InvalidTodoPriorityError(ValidationError):
    """Raised when a priority level is not one of low, medium or high."""

    def __init__(self, priority: Any) -> None:
        self.priority = priority
        super().__init__(
            f"Invalid todo priority: {priority!r}. Must be one of: low, medium, high",
            details={"field": "priority", "value": str(priority)},
            code="TODO_INVALID_PRIORITY",
        )


class InvalidTodoIdError(ValidationError):
    """Raised when an identifier is neither a positive integer nor a hex id."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"Invalid todo ID format: {value!r}",
            details={"field": "id", "value": str(value)},
            code="TODO_INVALID_ID",
        )


class InvalidTodoDueDateError(ValidationError):
    """Raised when a due date precedes the creation timestamp."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(
            f"Invalid due date: {reason}",
            details={"field": "due_date", "reason": reason},
            code="TODO_INVALID_DUE_DATE",
        )


class TodoAlreadyCompletedError(ValidationError):
    """Raised when completing a todo that is already completed."""

    def __init__(self) -> None:
        super().__init__("Todo is already completed", code="TODO_ALREADY_COMPLETED")


class TodoNotFoundError(NotFoundError):
    """Raised when no todo exists for an identifier."""

    def __init__(self, todo_id: Any) -> None:
        self.todo_id = todo_id
        super().__init__(f"Todo with ID {todo_id} not found", code="TODO_NOT_FOUND")
