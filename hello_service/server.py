"""Hello Service — process entry point.

Runs the FastAPI app under uvicorn. On SIGTERM/SIGINT the shutdown sequence
marks the service unhealthy and cancels background tasks before uvicorn stops
accepting connections and closes the listener.
"""

from __future__ import annotations

import signal
import socket
from types import FrameType

import structlog
import uvicorn

from hello_service.core.config import ServiceSettings, get_settings
from hello_service.core.lifecycle import ServiceLifecycle
from hello_service.core.logging import setup_logging
from hello_service.main import create_app

log = structlog.get_logger()


class GracefulServer(uvicorn.Server):
    """uvicorn server that runs the service shutdown sequence on a signal."""

    def __init__(self, config: uvicorn.Config, lifecycle: ServiceLifecycle) -> None:
        super().__init__(config)
        self.lifecycle = lifecycle

    @property
    def bound_port(self) -> int | None:
        """Port the listener actually bound, or None before startup."""
        for server in self.servers:
            for sock in server.sockets:
                return sock.getsockname()[1]
        return None

    async def startup(self, sockets: list[socket.socket] | None = None) -> None:
        await super().startup(sockets=sockets)
        if self.should_exit or not self.servers:
            return

        port = self.bound_port
        log.info(
            "server_started",
            port=port,
            url=f"http://localhost:{port}",
            health_url=f"http://localhost:{port}/health",
        )

    def handle_exit(self, sig: int, frame: FrameType | None) -> None:
        self.lifecycle.begin_shutdown(reason=signal.Signals(sig).name)
        super().handle_exit(sig, frame)


def build_server(
    settings: ServiceSettings, lifecycle: ServiceLifecycle | None = None
) -> GracefulServer:
    """Wire settings, app and lifecycle into a ready-to-run server."""
    lifecycle = lifecycle or ServiceLifecycle()
    app = create_app(settings, lifecycle, configure_logging=False)

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        # Keep the structlog handlers installed by setup_logging.
        log_config=None,
    )
    return GracefulServer(config, lifecycle)


def run(settings: ServiceSettings | None = None) -> None:
    """Start the service and block until it shuts down.

    A bind failure exits the process with status 1.
    """
    if settings is None:
        # Provisional handlers so a PORT fallback warning is formatted too.
        setup_logging(cache_loggers=False)
        settings = get_settings()
    setup_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
        service_name=settings.service_name,
    )

    server = build_server(settings)
    try:
        server.run()
    except SystemExit:
        # uvicorn exits with its own status when startup fails.
        if not server.started:
            raise SystemExit(1) from None
        raise
    if not server.started:
        raise SystemExit(1)
