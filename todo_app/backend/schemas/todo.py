"""
Todo Schemas.

Pydantic models for the command and query DTOs consumed by the use
cases, and for API responses. Command models check shape and types;
title and priority rules belong to the value objects, so a bad title or
priority surfaces as the matching domain error.
"""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, StringConstraints

from todo_app.backend.domain.todo import Todo

PriorityLevel = Literal["low", "medium", "high"]
TodoFilter = Literal["all", "active", "completed"]
TodoSortField = Literal["priority", "created_at", "urgency"]
SortOrder = Literal["asc", "desc"]

TitleStr = Annotated[str, StringConstraints(strip_whitespace=True)]
TodoIdValue = Annotated[int | str, Field(description="Todo ID", examples=["3f2a9c1e8b7d4e6fa0b1c2d3e4f5a6b7"])]


class CreateTodoCommand(BaseModel):
    """Create a new todo."""

    model_config = ConfigDict(extra="forbid")

    title: TitleStr = Field(
        ...,
        description="Todo title",
        examples=["Buy milk"],
    )
    priority: str = Field(
        default="medium",
        description="Priority level: low, medium or high",
    )
    due_date: datetime | None = Field(
        default=None,
        description="Optional due date",
    )


class UpdateTodoRequest(BaseModel):
    """
    Partial update body. Only fields present in the request are applied.

    A null title, completed or priority is treated as absent; a null
    due_date clears the due date.
    """

    model_config = ConfigDict(extra="forbid")

    title: TitleStr | None = None
    completed: bool | None = None
    priority: str | None = None
    due_date: datetime | None = None

    def changes(self) -> dict[str, Any]:
        """Fields explicitly provided, with meaningless nulls dropped."""
        provided = {name: getattr(self, name) for name in self.model_fields_set if name != "id"}
        return {
            name: value
            for name, value in provided.items()
            if value is not None or name == "due_date"
        }


class UpdateTodoCommand(UpdateTodoRequest):
    """Partial update of an existing todo."""

    id: TodoIdValue


class DeleteTodoCommand(BaseModel):
    id: TodoIdValue


class ToggleTodoCommand(BaseModel):
    id: TodoIdValue


class GetTodoByIdQuery(BaseModel):
    id: TodoIdValue


class GetFilteredTodosQuery(BaseModel):
    """Filter and sort the todo list."""

    model_config = ConfigDict(extra="forbid")

    filter: TodoFilter = "all"
    sort_by: TodoSortField | None = None
    sort_order: SortOrder | None = None


class TodoStatsQueryResult(BaseModel):
    total: NonNegativeInt
    active: NonNegativeInt
    completed: NonNegativeInt
    overdue: NonNegativeInt
    high_priority: NonNegativeInt


class TodoResponse(BaseModel):
    """Todo as returned by the API."""

    id: str
    title: str
    completed: bool
    priority: PriorityLevel
    created_at: datetime
    due_date: datetime | None = None

    @classmethod
    def from_domain(cls, todo: Todo) -> "TodoResponse":
        return cls(
            id=str(todo.id),
            title=todo.title.value,
            completed=todo.completed,
            priority=todo.priority.level,
            created_at=todo.created_at,
            due_date=todo.due_date,
        )
