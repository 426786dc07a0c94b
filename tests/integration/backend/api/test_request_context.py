"""
Integration Tests for Request Context Middleware.

Tests that request context is properly propagated through the API.
"""

import pytest
from httpx import AsyncClient


class TestRequestIdHeader:
    """Tests for X-Request-ID header handling."""

    @pytest.mark.asyncio
    async def test_generates_request_id(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        # UUID format: 8-4-4-4-12 = 36 characters
        assert len(response.headers["X-Request-ID"]) == 36

    @pytest.mark.asyncio
    async def test_propagates_provided_request_id(self, client: AsyncClient):
        response = await client.get("/api/v1/todos", headers={"X-Request-ID": "my-request-12345"})

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == "my-request-12345"

    @pytest.mark.asyncio
    async def test_generated_id_is_event_correlation_id(self, client: AsyncClient, published):
        response = await client.post("/api/v1/todos", json={"title": "Correlate me"})

        assert published[0].correlation_id == response.headers["X-Request-ID"]


class TestResponseTimeHeader:
    """Tests for X-Response-Time header."""

    @pytest.mark.asyncio
    async def test_response_time_is_numeric(self, client: AsyncClient):
        response = await client.get("/health")

        time_header = response.headers["X-Response-Time"]
        assert time_header.endswith("ms")
        assert time_header[:-2].isdigit()

    @pytest.mark.asyncio
    async def test_response_time_on_error(self, client: AsyncClient):
        response = await client.get(f"/api/v1/todos/{'e' * 32}")

        assert response.status_code == 404
        assert "X-Response-Time" in response.headers


class TestRequestContextInErrors:
    """Tests for request context in error responses."""

    @pytest.mark.asyncio
    async def test_error_response_includes_request_id(self, client: AsyncClient):
        response = await client.get(
            f"/api/v1/todos/{'e' * 32}",
            headers={"X-Request-ID": "error-test-request-id"},
        )

        assert response.status_code == 404
        assert response.json()["metadata"]["request_id"] == "error-test-request-id"

    @pytest.mark.asyncio
    async def test_validation_error_includes_request_id(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/todos",
            json={},
            headers={"X-Request-ID": "validation-error-request-id"},
        )

        assert response.status_code == 422
        assert response.json()["metadata"]["request_id"] == "validation-error-request-id"
