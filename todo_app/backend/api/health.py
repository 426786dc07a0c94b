"""
Health Check Endpoints.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (storage backend reachable)
"""

import asyncio
from typing import Any

from fastapi import APIRouter, HTTPException

from todo_app.backend.core.config import get_app_config
from todo_app.backend.core.logging import get_logger
from todo_app.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)

READY_TIMEOUT_SECONDS = 5


async def check_storage() -> dict[str, Any]:
    """
    Check the configured storage backend.

    Returns:
        Dict with backend, status, latency, and optional error message
    """
    backend = get_app_config().database.backend
    if backend == "memory":
        return {"backend": backend, "status": "healthy"}

    try:
        from sqlalchemy import text

        from todo_app.backend.core.database import get_engine

        start = utc_now()
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        latency_ms = int((utc_now() - start).total_seconds() * 1000)

        return {"backend": backend, "status": "healthy", "latency_ms": latency_ms}

    except Exception as e:
        logger.warning("Storage health check failed", extra={"error": str(e)})
        return {"backend": backend, "status": "unhealthy", "error": str(e)}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running. No dependency checks.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    """
    Readiness check.

    Returns 503 if the storage backend is unreachable or the check times out.
    """
    try:
        async with asyncio.timeout(READY_TIMEOUT_SECONDS):
            storage = await check_storage()
    except TimeoutError:
        storage = {"status": "unhealthy", "error": "check timed out"}

    checks = {"storage": storage}

    if storage.get("status") == "unhealthy":
        logger.warning("Readiness check failed", extra={"checks": checks})
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": utc_now().isoformat(),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
