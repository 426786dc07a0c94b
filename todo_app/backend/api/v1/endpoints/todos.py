"""
Todos API Endpoints.

REST API endpoints mapping JSON bodies to the todo use cases.
"""

from fastapi import APIRouter, Query

from todo_app.backend.core.dependencies import EventPublisher, RequestId, TodoRepo
from todo_app.backend.schemas.base import ApiResponse
from todo_app.backend.schemas.todo import (
    CreateTodoCommand,
    DeleteTodoCommand,
    GetFilteredTodosQuery,
    GetTodoByIdQuery,
    TodoResponse,
    TodoStatsQueryResult,
    ToggleTodoCommand,
    UpdateTodoCommand,
    UpdateTodoRequest,
)
from todo_app.backend.services.todo_commands import (
    CreateTodoUseCase,
    DeleteTodoUseCase,
    ToggleTodoUseCase,
    UpdateTodoUseCase,
)
from todo_app.backend.services.todo_queries import (
    GetActiveTodosQueryHandler,
    GetCompletedTodosQueryHandler,
    GetFilteredTodosQueryHandler,
    GetTodoByIdQueryHandler,
    GetTodoStatsQueryHandler,
)
from todo_app.backend.services.validation import TodoValidationService

router = APIRouter()


def _many(todos) -> ApiResponse[list[TodoResponse]]:
    return ApiResponse(data=[TodoResponse.from_domain(todo) for todo in todos])


@router.get(
    "",
    response_model=ApiResponse[list[TodoResponse]],
    summary="List todos",
    description="List todos, optionally filtered by state and sorted by priority, urgency or creation time.",
)
async def list_todos(
    repo: TodoRepo,
    filter: str = Query(default="all", description="all, active or completed"),
    sort_by: str | None = Query(default=None, description="priority, urgency or created_at"),
    sort_order: str | None = Query(default=None, description="asc or desc"),
) -> ApiResponse[list[TodoResponse]]:
    """List todos with filtering and sorting."""
    raw = {"filter": filter, "sort_by": sort_by, "sort_order": sort_order}
    query = TodoValidationService().validate_or_raise(GetFilteredTodosQuery, raw)
    todos = await GetFilteredTodosQueryHandler(repo).handle(query)
    return _many(todos)


@router.get(
    "/active",
    response_model=ApiResponse[list[TodoResponse]],
    summary="List active todos",
)
async def list_active_todos(repo: TodoRepo) -> ApiResponse[list[TodoResponse]]:
    return _many(await GetActiveTodosQueryHandler(repo).handle())


@router.get(
    "/completed",
    response_model=ApiResponse[list[TodoResponse]],
    summary="List completed todos",
)
async def list_completed_todos(repo: TodoRepo) -> ApiResponse[list[TodoResponse]]:
    return _many(await GetCompletedTodosQueryHandler(repo).handle())


@router.get(
    "/stats",
    response_model=ApiResponse[TodoStatsQueryResult],
    summary="Todo statistics",
    description="Total, active, completed, overdue and high-priority counts.",
)
async def get_todo_stats(repo: TodoRepo) -> ApiResponse[TodoStatsQueryResult]:
    return ApiResponse(data=await GetTodoStatsQueryHandler(repo).handle())


@router.get(
    "/{todo_id}",
    response_model=ApiResponse[TodoResponse],
    summary="Get a todo",
)
async def get_todo(todo_id: str, repo: TodoRepo) -> ApiResponse[TodoResponse]:
    todo = await GetTodoByIdQueryHandler(repo).handle(GetTodoByIdQuery(id=todo_id))
    return ApiResponse(data=TodoResponse.from_domain(todo))


@router.post(
    "",
    response_model=ApiResponse[TodoResponse],
    status_code=201,
    summary="Create a todo",
    description="Create a new todo with a title, optional priority and optional due date.",
)
async def create_todo(
    data: CreateTodoCommand,
    repo: TodoRepo,
    publisher: EventPublisher,
    request_id: RequestId,
) -> ApiResponse[TodoResponse]:
    """Create a new todo."""
    todo = await CreateTodoUseCase(repo, publisher).execute(data, correlation_id=request_id)
    return ApiResponse(data=TodoResponse.from_domain(todo))


@router.patch(
    "/{todo_id}",
    response_model=ApiResponse[TodoResponse],
    summary="Update a todo",
    description="Partially update a todo. Only provided fields are changed.",
)
async def update_todo(
    todo_id: str,
    data: UpdateTodoRequest,
    repo: TodoRepo,
    publisher: EventPublisher,
    request_id: RequestId,
) -> ApiResponse[TodoResponse]:
    """Update an existing todo."""
    command = UpdateTodoCommand(id=todo_id, **data.model_dump(exclude_unset=True))
    todo = await UpdateTodoUseCase(repo, publisher).execute(command, correlation_id=request_id)
    return ApiResponse(data=TodoResponse.from_domain(todo))


@router.post(
    "/{todo_id}/toggle",
    response_model=ApiResponse[TodoResponse],
    summary="Toggle completion",
)
async def toggle_todo(
    todo_id: str,
    repo: TodoRepo,
    publisher: EventPublisher,
    request_id: RequestId,
) -> ApiResponse[TodoResponse]:
    todo = await ToggleTodoUseCase(repo, publisher).execute(
        ToggleTodoCommand(id=todo_id), correlation_id=request_id,
    )
    return ApiResponse(data=TodoResponse.from_domain(todo))


@router.delete(
    "/{todo_id}",
    status_code=204,
    summary="Delete a todo",
)
async def delete_todo(
    todo_id: str,
    repo: TodoRepo,
    publisher: EventPublisher,
    request_id: RequestId,
) -> None:
    await DeleteTodoUseCase(repo, publisher).execute(
        DeleteTodoCommand(id=todo_id), correlation_id=request_id,
    )
