"""
Todo Query Handlers.

Read-side use cases. Filtering and statistics load the todo set once
and evaluate specifications in memory.
"""

from datetime import datetime

from todo_app.backend.domain.services import TodoDomainService
from todo_app.backend.domain.specifications import (
    ActiveTodoSpecification,
    CompletedTodoSpecification,
    HighPriorityTodoSpecification,
    OverdueTodoSpecification,
    Specification,
)
from todo_app.backend.domain.todo import Todo
from todo_app.backend.repositories.base import TodoRepository
from todo_app.backend.schemas.todo import GetFilteredTodosQuery, GetTodoByIdQuery, TodoStatsQueryResult
from todo_app.backend.services.base import BaseService


class GetAllTodosQueryHandler(BaseService):
    async def handle(self) -> list[Todo]:
        return await self.repo.get_all()


class GetActiveTodosQueryHandler(BaseService):
    async def handle(self) -> list[Todo]:
        return await self.repo.get_active()


class GetCompletedTodosQueryHandler(BaseService):
    async def handle(self) -> list[Todo]:
        return await self.repo.get_completed()


class GetTodoByIdQueryHandler(BaseService):
    async def handle(self, query: GetTodoByIdQuery) -> Todo:
        """
        Raises:
            TodoNotFoundError: No todo with this id
        """
        return await self._require_todo(query.id)


class GetFilteredTodosQueryHandler(BaseService):
    """
    Filter by completion state, then sort.

    priority and urgency sort most urgent first (incomplete before
    completed) unless sort_order is asc, which reverses that order.
    created_at sorts oldest first unless sort_order is desc.
    """

    def __init__(
        self,
        repository: TodoRepository,
        domain_service: TodoDomainService | None = None,
    ) -> None:
        super().__init__(repository)
        self.domain_service = domain_service or TodoDomainService()

    @staticmethod
    def _filter_spec(filter_value: str) -> Specification[Todo] | None:
        if filter_value == "active":
            return ActiveTodoSpecification()
        if filter_value == "completed":
            return CompletedTodoSpecification()
        return None

    async def handle(self, query: GetFilteredTodosQuery, now: datetime | None = None) -> list[Todo]:
        self._log_debug(
            "Filtering todos",
            filter=query.filter,
            sort_by=query.sort_by,
            sort_order=query.sort_order,
        )
        todos = await self.repo.get_all()

        spec = self._filter_spec(query.filter)
        if spec is not None:
            todos = [todo for todo in todos if spec.is_satisfied_by(todo)]

        if query.sort_by in ("priority", "urgency"):
            todos = self.domain_service.sort_by_priority(todos, now)
            if query.sort_order == "asc":
                todos.reverse()
        elif query.sort_by == "created_at":
            todos = sorted(
                todos,
                key=lambda todo: todo.created_at,
                reverse=query.sort_order == "desc",
            )
        return todos


class GetTodoStatsQueryHandler(BaseService):
    """Counts derived from a single load of the todo set."""

    async def handle(self, now: datetime | None = None) -> TodoStatsQueryResult:
        todos = await self.repo.get_all()

        active = ActiveTodoSpecification()
        completed = CompletedTodoSpecification()
        overdue = OverdueTodoSpecification(now)
        high_priority = HighPriorityTodoSpecification()

        return TodoStatsQueryResult(
            total=len(todos),
            active=sum(1 for todo in todos if active.is_satisfied_by(todo)),
            completed=sum(1 for todo in todos if completed.is_satisfied_by(todo)),
            overdue=sum(1 for todo in todos if overdue.is_satisfied_by(todo)),
            high_priority=sum(1 for todo in todos if high_priority.is_satisfied_by(todo)),
        )
