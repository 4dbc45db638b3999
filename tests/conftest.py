"""Shared fixtures for the Hello Service tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime, timezone

import pytest
import structlog
from fastapi.testclient import TestClient

from hello_service.core.config import ServiceSettings
from hello_service.core.lifecycle import ServiceLifecycle
from hello_service.main import create_app

FIXED_NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)

_SERVICE_ENV = ("PORT", "HOST", "LOG_LEVEL", "ENVIRONMENT", "SERVICE_NAME", "DEBUG")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell environment out of settings."""
    for name in _SERVICE_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> ServiceSettings:
    return ServiceSettings(_env_file=None)


@pytest.fixture
def lifecycle() -> ServiceLifecycle:
    return ServiceLifecycle()


@pytest.fixture
def client(settings: ServiceSettings, lifecycle: ServiceLifecycle) -> Iterator[TestClient]:
    app = create_app(
        settings,
        lifecycle,
        clock=lambda: FIXED_NOW,
        configure_logging=False,
    )
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Undo ``setup_logging`` so later tests see structlog's defaults."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    access_level = logging.getLogger("uvicorn.access").level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(access_level)
