"""
SQLAlchemy Todo Repository.

Async SQLAlchemy adapter over the todos table. Works with any async
driver the engine is configured for (aiosqlite, asyncpg). The session is
owned by the caller; this class flushes but never commits.
"""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.backend.core.logging import get_logger
from todo_app.backend.domain.exceptions import TodoNotFoundError
from todo_app.backend.domain.todo import Todo
from todo_app.backend.domain.value_objects import TodoId
from todo_app.backend.models.todo import TodoRecord
from todo_app.backend.repositories.base import TodoIdLike, TodoRepository, normalize_changes

logger = get_logger(__name__)


def _to_domain(record: TodoRecord) -> Todo:
    return Todo(
        id=TodoId(record.id),
        title=record.title,
        completed=record.completed,
        priority=record.priority,
        created_at=record.created_at,
        due_date=record.due_date,
    )


def _record_values(changes: dict[str, Any]) -> dict[str, Any]:
    values = dict(changes)
    if "title" in values:
        values["title"] = values["title"].value
    if "priority" in values:
        values["priority"] = values["priority"].level
    return values


class SqlAlchemyTodoRepository(TodoRepository):
    """Repository backed by an AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _get_record(self, todo_id: TodoIdLike) -> TodoRecord | None:
        # Numeric ids never match the hex primary key
        return await self.session.get(TodoRecord, str(TodoId.coerce(todo_id)))

    async def _require_record(self, todo_id: TodoIdLike) -> TodoRecord:
        record = await self._get_record(todo_id)
        if record is None:
            raise TodoNotFoundError(TodoId.coerce(todo_id))
        return record

    async def _select(self, *criteria: Any) -> list[Todo]:
        result = await self.session.execute(
            select(TodoRecord)
            .where(*criteria)
            .order_by(TodoRecord.created_at.desc())
        )
        return [_to_domain(record) for record in result.scalars().all()]

    async def get_all(self) -> list[Todo]:
        return await self._select()

    async def get_by_id(self, todo_id: TodoIdLike) -> Todo | None:
        record = await self._get_record(todo_id)
        return _to_domain(record) if record is not None else None

    async def create(self, todo: Todo) -> TodoId:
        record = TodoRecord(
            title=todo.title.value,
            completed=todo.completed,
            priority=todo.priority.level,
            due_date=todo.due_date,
            created_at=todo.created_at,
        )
        self.session.add(record)
        await self.session.flush()
        logger.debug("Todo record inserted", extra={"todo_id": record.id})
        return TodoId(record.id)

    async def update(self, todo_id: TodoIdLike, **changes: Any) -> None:
        record = await self._require_record(todo_id)
        normalized = normalize_changes(changes)
        if not normalized:
            return
        for name, value in _record_values(normalized).items():
            setattr(record, name, value)
        await self.session.flush()

    async def delete(self, todo_id: TodoIdLike) -> None:
        record = await self._require_record(todo_id)
        await self.session.delete(record)
        await self.session.flush()

    async def get_active(self) -> list[Todo]:
        return await self._select(TodoRecord.completed == False)  # noqa: E712

    async def get_completed(self) -> list[Todo]:
        return await self._select(TodoRecord.completed == True)  # noqa: E712

    async def _count(self, *criteria: Any) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(TodoRecord).where(*criteria)
        )
        return result.scalar_one()

    async def count(self) -> int:
        return await self._count()

    async def count_active(self) -> int:
        return await self._count(TodoRecord.completed == False)  # noqa: E712

    async def count_completed(self) -> int:
        return await self._count(TodoRecord.completed == True)  # noqa: E712
