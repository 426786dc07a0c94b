"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from todo_app.backend.api.v1.endpoints import todos

router = APIRouter()

router.include_router(todos.router, prefix="/todos", tags=["todos"])
