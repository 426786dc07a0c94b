"""
Todo Command Use Cases.

Create, update, toggle and delete. Each use case exposes:

    run(command)     -> CommandOutcome(todo, events)
    execute(command) -> Todo

run() performs the unit of work and returns the domain events as an
explicit list. execute() calls run() and then hands the events to the
publisher, so events only leave the process once persistence succeeded.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from todo_app.backend.domain.events import DomainEvent, TodoCreated, TodoDeleted, events_for_change
from todo_app.backend.domain.todo import Todo
from todo_app.backend.domain.value_objects import TodoId, TodoPriority, TodoTitle
from todo_app.backend.events.publishers import TodoEventPublisher
from todo_app.backend.repositories.base import TodoRepository
from todo_app.backend.schemas.todo import (
    CreateTodoCommand,
    DeleteTodoCommand,
    ToggleTodoCommand,
    UpdateTodoCommand,
)
from todo_app.backend.services.base import BaseService

CommandT = TypeVar("CommandT", bound=BaseModel)


@dataclass(frozen=True)
class CommandOutcome:
    """Resulting aggregate plus the events recorded while producing it."""

    todo: Todo
    events: list[DomainEvent] = field(default_factory=list)


class CommandUseCase(ABC, BaseService, Generic[CommandT]):
    """Base for command use cases."""

    def __init__(
        self,
        repository: TodoRepository,
        publisher: TodoEventPublisher | None = None,
    ) -> None:
        super().__init__(repository)
        self.publisher = publisher

    @abstractmethod
    async def run(self, command: CommandT) -> CommandOutcome:
        """Perform the unit of work."""

    async def execute(self, command: CommandT, correlation_id: str | None = None) -> Todo:
        outcome = await self.run(command)
        if self.publisher is not None:
            await self.publisher.publish(outcome.events, correlation_id=correlation_id)
        return outcome.todo


class CreateTodoUseCase(CommandUseCase[CreateTodoCommand]):
    """
    Create a todo.

    Raises:
        InvalidTodoTitleError: Title fails TodoTitle rules
        InvalidTodoPriorityError: Unknown priority level
        InvalidTodoDueDateError: Due date before the creation time
    """

    async def run(self, command: CreateTodoCommand) -> CommandOutcome:
        self._log_operation("Creating todo", title=command.title, priority=command.priority)

        todo = Todo.create(
            title=TodoTitle(command.title),
            priority=TodoPriority(command.priority),
            due_date=command.due_date,
        )
        todo_id = await self.repo.create(todo)
        created = todo.with_id(todo_id)

        self._log_debug("Todo created", todo=created.to_dict())
        return CommandOutcome(
            todo=created,
            events=[TodoCreated(todo_id=todo_id, title=created.title.value, occurred_at=created.created_at)],
        )


class UpdateTodoUseCase(CommandUseCase[UpdateTodoCommand]):
    """
    Apply a partial update.

    Only fields present in the command are persisted. Setting completed
    to True goes through Todo.complete(); setting it to False on a
    completed todo goes through Todo.toggle().

    Raises:
        TodoNotFoundError: No todo with this id
        InvalidTodoTitleError: New title fails TodoTitle rules
        InvalidTodoPriorityError: Unknown priority level
    """

    async def run(self, command: UpdateTodoCommand) -> CommandOutcome:
        todo_id = TodoId.coerce(command.id)
        changes = command.changes()
        self._log_operation("Updating todo", todo_id=str(todo_id), fields=sorted(changes))

        existing = await self._require_todo(todo_id)
        updated = self._apply(existing, changes)

        persisted: dict[str, Any] = {name: getattr(updated, name) for name in changes}
        await self.repo.update(todo_id, **persisted)
        self._log_debug("Todo updated", todo=updated.to_dict())

        return CommandOutcome(todo=updated, events=events_for_change(existing, updated))

    @staticmethod
    def _apply(todo: Todo, changes: dict[str, Any]) -> Todo:
        updated = todo
        if "title" in changes:
            updated = updated.update_title(changes["title"])
        if "priority" in changes:
            updated = updated.update_priority(changes["priority"])
        if "completed" in changes:
            if changes["completed"] and updated.can_be_completed():
                updated = updated.complete()
            elif not changes["completed"] and updated.completed:
                updated = updated.toggle()
        if "due_date" in changes:
            updated = updated.update_due_date(changes["due_date"])
        updated.validate()
        return updated


class ToggleTodoUseCase(CommandUseCase[ToggleTodoCommand]):
    """
    Flip the completion flag.

    Raises:
        TodoNotFoundError: No todo with this id
    """

    async def run(self, command: ToggleTodoCommand) -> CommandOutcome:
        todo_id = TodoId.coerce(command.id)
        self._log_operation("Toggling todo", todo_id=str(todo_id))

        existing = await self._require_todo(todo_id)
        toggled = existing.toggle()
        toggled.validate()
        await self.repo.update(todo_id, completed=toggled.completed)

        return CommandOutcome(todo=toggled, events=events_for_change(existing, toggled))


class DeleteTodoUseCase(CommandUseCase[DeleteTodoCommand]):
    """
    Delete a todo. The outcome carries the removed aggregate.

    Raises:
        TodoNotFoundError: No todo with this id
    """

    async def run(self, command: DeleteTodoCommand) -> CommandOutcome:
        todo_id = TodoId.coerce(command.id)
        self._log_operation("Deleting todo", todo_id=str(todo_id))

        existing = await self._require_todo(todo_id)
        await self.repo.delete(todo_id)
        self._log_debug("Todo deleted", todo=existing.to_dict())

        return CommandOutcome(todo=existing, events=[TodoDeleted(todo_id=todo_id)])
