"""
FastAPI Dependencies.

Composition root for request handling: binds the configured repository
adapter and the event publisher to the use cases.
"""

import uuid
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request

from todo_app.backend.core.config import get_app_config
from todo_app.backend.core.database import get_session_factory
from todo_app.backend.core.logging import get_logger
from todo_app.backend.events.publishers import TodoEventPublisher, get_event_publisher
from todo_app.backend.repositories.base import TodoRepository
from todo_app.backend.repositories.factory import create_todo_repository

logger = get_logger(__name__)


async def get_todo_repository() -> AsyncGenerator[TodoRepository, None]:
    """
    Provide the repository for the configured storage backend.

    SQL backends get a session per request that commits on success and
    rolls back when the request fails.
    """
    backend = get_app_config().database.backend
    if backend == "memory":
        yield create_todo_repository(backend)
        return

    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield create_todo_repository(backend, session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise


TodoRepo = Annotated[TodoRepository, Depends(get_todo_repository)]

EventPublisher = Annotated[TodoEventPublisher, Depends(get_event_publisher)]


async def get_request_id(request: Request) -> str:
    """Request ID set by the middleware, else the header, else a new one. Used for event correlation."""
    request_id = getattr(request.state, "request_id", None) or request.headers.get("x-request-id")
    return request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]
