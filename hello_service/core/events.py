"""Hello Service — application lifespan (startup / shutdown hooks)."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from hello_service.core.lifecycle import ServiceLifecycle

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup and make sure the shutdown sequence has run on exit."""
    lifecycle: ServiceLifecycle = app.state.lifecycle
    log.info("hello_service starting up")

    yield

    # No-op when a termination signal already triggered it.
    lifecycle.begin_shutdown(reason="lifespan")
    log.info("hello_service shut down")
