"""Health-check router.

Provides ``/health``: 200 ``UP`` with a timestamp while the service is healthy,
503 ``DOWN`` once shutdown has begun.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from hello_service.core.lifecycle import HealthState
from hello_service.routers import ANY_METHOD

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def rfc3339(moment: datetime) -> str:
    """Format ``moment`` as an RFC 3339 UTC timestamp with a ``Z`` suffix."""
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def create_health_router(health: HealthState, clock: Clock = utc_now) -> APIRouter:
    """Build the health router around an owned health flag.

    Args:
        health: Flag flipped by the shutdown sequence.
        clock: Source of the ``timestamp`` field.

    Returns:
        A FastAPI ``APIRouter`` with ``/health``.
    """
    router = APIRouter(tags=["health"])

    @router.api_route("/health", methods=ANY_METHOD, summary="Liveness probe")
    async def health_check() -> JSONResponse:
        if health.is_healthy:
            return JSONResponse({"status": "UP", "timestamp": rfc3339(clock())})
        return JSONResponse(
            {"status": "DOWN"},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return router
