"""
Integration Test Fixtures.

Fixtures for integration tests - uses the real SQL adapter against the
test database and the full FastAPI application.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.backend.core.dependencies import get_todo_repository
from todo_app.backend.events.publishers import TodoEventPublisher, get_event_publisher
from todo_app.backend.main import create_app
from todo_app.backend.repositories.memory import InMemoryTodoRepository
from todo_app.backend.repositories.sql import SqlAlchemyTodoRepository


# =============================================================================
# API Client Fixtures
# =============================================================================


async def _client_for(repository, publisher: TodoEventPublisher) -> AsyncGenerator[AsyncClient, None]:
    app = create_app()

    async def override_get_todo_repository():
        yield repository

    app.dependency_overrides[get_todo_repository] = override_get_todo_repository
    app.dependency_overrides[get_event_publisher] = lambda: publisher

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
async def client(
    db_session: AsyncSession,
    publisher: TodoEventPublisher,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client backed by the SQL adapter.

    The client uses the test database session, ensuring all API
    operations use the same session that gets rolled back after the test.

    Usage:
        async def test_create(client: AsyncClient):
            response = await client.post("/api/v1/todos", json={"title": "Buy milk"})
            assert response.status_code == 201
    """
    async for test_client in _client_for(SqlAlchemyTodoRepository(db_session), publisher):
        yield test_client


@pytest.fixture
async def memory_client(publisher: TodoEventPublisher) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client backed by a fresh in-memory repository."""
    async for test_client in _client_for(InMemoryTodoRepository(), publisher):
        yield test_client


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """
        Assert API response is successful.

        Args:
            response: httpx Response object
            expected_status: Expected HTTP status code

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error.

        Args:
            response: httpx Response object
            expected_status: Expected HTTP status code
            expected_code: Expected error code (optional)

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is a request validation error (422).

        Args:
            response: httpx Response object
            field: Expected field with validation error (optional)
        """
        data = ApiAssertions.assert_error(response, 422, "VAL_REQUEST_INVALID")

        if field:
            errors = data["error"].get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
