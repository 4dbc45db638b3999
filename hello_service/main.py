"""Hello Service — FastAPI application factory.

Serves a plain-text greeting on ``/`` and a liveness probe on ``/health``.
"""

from __future__ import annotations

from fastapi import FastAPI

from hello_service.core.config import ServiceSettings, get_settings
from hello_service.core.events import lifespan
from hello_service.core.lifecycle import ServiceLifecycle
from hello_service.core.logging import setup_logging
from hello_service.routers.health import Clock, create_health_router, utc_now
from hello_service.routers.root import router as root_router


def create_app(
    settings: ServiceSettings | None = None,
    lifecycle: ServiceLifecycle | None = None,
    *,
    clock: Clock = utc_now,
    configure_logging: bool = True,
) -> FastAPI:
    """Construct and return the FastAPI application.

    ``lifecycle`` is shared with whoever handles termination signals, so the
    health route sees the flag flip. A fresh one is created when omitted.
    """
    settings = settings or get_settings()
    lifecycle = lifecycle or ServiceLifecycle()

    if configure_logging:
        setup_logging(
            log_level=settings.log_level,
            json_logs=settings.json_logs,
            service_name=settings.service_name,
        )

    application = FastAPI(
        title="Hello Service",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.state.lifecycle = lifecycle

    application.include_router(root_router)
    application.include_router(create_health_router(lifecycle.health, clock=clock))

    return application
