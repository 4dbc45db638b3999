"""Tests for the greeting and health endpoints."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from hello_service.core.lifecycle import ServiceLifecycle
from hello_service.routers.health import rfc3339
from hello_service.routers.root import GREETING


def test_root_returns_greeting(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.text == "Hello from Test Project!\n"
    assert response.headers["content-type"].startswith("text/plain")


@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
def test_root_answers_any_method(client: TestClient, method: str) -> None:
    response = client.request(method, "/")

    assert response.status_code == 200
    assert response.text == GREETING


def test_root_head(client: TestClient) -> None:
    assert client.head("/").status_code == 200


def test_root_ignores_health_state(
    client: TestClient, lifecycle: ServiceLifecycle
) -> None:
    lifecycle.health.mark_down()

    response = client.get("/")

    assert response.status_code == 200
    assert response.text == GREETING


def test_health_up(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.text == '{"status":"UP","timestamp":"2024-01-01T00:00:00Z"}'


def test_health_post_is_served(client: TestClient) -> None:
    response = client.post("/health", content=b"ignored")

    assert response.status_code == 200
    assert response.json()["status"] == "UP"


def test_health_down_after_shutdown_begins(
    client: TestClient, lifecycle: ServiceLifecycle
) -> None:
    lifecycle.begin_shutdown(reason="SIGTERM")

    response = client.get("/health")

    assert response.status_code == 503
    assert response.headers["content-type"] == "application/json"
    assert response.text == '{"status":"DOWN"}'


def test_unknown_path_is_404(client: TestClient) -> None:
    assert client.get("/nope").status_code == 404


def test_docs_hidden_unless_debug(client: TestClient) -> None:
    assert client.get("/docs").status_code == 404
    assert client.get("/openapi.json").status_code == 404


def test_rfc3339_keeps_fraction_and_uses_z() -> None:
    moment = datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=timezone.utc)

    assert rfc3339(moment) == "2024-05-06T07:08:09.123456Z"


def test_rfc3339_converts_to_utc() -> None:
    plus_two = timezone(timedelta(hours=2))
    moment = datetime(2024, 1, 1, 2, 0, tzinfo=plus_two)

    assert rfc3339(moment) == "2024-01-01T00:00:00Z"
