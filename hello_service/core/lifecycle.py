"""Hello Service — process state owned across the app and the server.

``ServiceLifecycle`` holds the health flag and the background tasks scheduled
on the event loop. The server's signal handling and the FastAPI lifespan both
drive the same shutdown sequence through it.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Coroutine
from typing import Any

import structlog

log = structlog.get_logger()


class HealthState:
    """Liveness flag read by the ``/health`` route.

    Backed by a ``threading.Event`` so the shutdown hook and request handlers
    can touch it without extra locking.
    """

    def __init__(self, healthy: bool = True) -> None:
        self._up = threading.Event()
        if healthy:
            self._up.set()

    @property
    def is_healthy(self) -> bool:
        return self._up.is_set()

    def mark_down(self) -> None:
        self._up.clear()


class ServiceLifecycle:
    """Owns the health flag and background tasks for one service process."""

    def __init__(self, health: HealthState | None = None) -> None:
        self.health = health or HealthState()
        self._tasks: set[asyncio.Task[Any]] = set()
        self._stopping = threading.Event()

    @property
    def shutting_down(self) -> bool:
        return self._stopping.is_set()

    @property
    def tasks(self) -> frozenset[asyncio.Task[Any]]:
        return frozenset(self._tasks)

    def schedule(
        self, coro: Coroutine[Any, Any, Any], *, name: str | None = None
    ) -> asyncio.Task[Any]:
        """Run ``coro`` as a background task that shutdown will cancel.

        Must be called from within the running event loop.
        """
        if self.shutting_down:
            coro.close()
            raise RuntimeError("Service is shutting down; not scheduling new tasks")

        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def begin_shutdown(self, reason: str = "signal") -> bool:
        """Mark the service unhealthy and cancel background tasks.

        Runs once; later calls return False and do nothing. Stopping the
        listener is left to the caller.
        """
        if self._stopping.is_set():
            return False
        self._stopping.set()

        log.info("shutting_down_gracefully", reason=reason)
        self.health.mark_down()

        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            log.info("background_tasks_cancelled", count=len(pending))
        return True
