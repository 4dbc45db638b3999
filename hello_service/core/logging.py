"""Structured logging configuration using structlog.

Produces JSON logs in production, coloured console logs in development.
uvicorn's own loggers are routed through the same formatter.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

import structlog

# Loggers that are too chatty at INFO for a probe-heavy service.
QUIET_LOGGERS = ("uvicorn.access",)


def setup_logging(
    *,
    log_level: str = "INFO",
    json_logs: bool = False,
    service_name: str = "hello_service",
    stream: IO[str] | None = None,
    cache_loggers: bool = True,
) -> None:
    """Configure structlog and stdlib logging for the process.

    Args:
        log_level: Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_logs: If True, emit JSON; otherwise coloured console output.
        service_name: Added to every log line as ``service``.
        stream: Where log lines go. Defaults to stdout.
        cache_loggers: Pass False for a provisional setup that will be
            replaced, so no logger gets pinned to it.
    """
    stamp: list[structlog.types.Processor] = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _service_field(service_name),
    ]

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            *stamp,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=cache_loggers,
    )

    renderer: structlog.types.Processor
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
            # Records from uvicorn and other stdlib loggers.
            foreign_pre_chain=stamp,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _service_field(service_name: str) -> structlog.types.Processor:
    def add_service(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return add_service
