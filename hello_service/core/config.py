"""Hello Service — environment-based configuration.

Values are loaded from environment variables and an optional ``.env`` file.
``PORT`` is forgiving: anything that is not a usable TCP port falls back to
``DEFAULT_PORT`` instead of failing startup.
"""

from __future__ import annotations

import re
from typing import Any

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = structlog.get_logger()

DEFAULT_PORT = 9000
MAX_PORT = 65535

_DECIMAL = re.compile(r"[+-]?\d+")


def parse_port(raw: Any) -> int:
    """Turn a raw ``PORT`` value into a listen port.

    Missing or empty values give ``DEFAULT_PORT`` silently. Values that are
    present but not a plain decimal integer in ``0..65535`` give
    ``DEFAULT_PORT`` and log a warning. ``0`` asks the OS for a free port.
    """
    if raw is None or isinstance(raw, bool):
        return DEFAULT_PORT

    text = str(raw)
    if not text:
        return DEFAULT_PORT

    # Plain decimal only: no padding, underscores or other int() extras.
    port = int(text) if _DECIMAL.fullmatch(text) else -1

    if not 0 <= port <= MAX_PORT:
        log.warning("invalid_port_env", value=text, default=DEFAULT_PORT)
        return DEFAULT_PORT
    return port


class ServiceSettings(BaseSettings):
    """Settings for the Hello Service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── General ───────────────────────────────
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    service_name: str = "hello_service"

    # ── Listener ──────────────────────────────
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    @field_validator("port", mode="before")
    @classmethod
    def _fallback_port(cls, value: Any) -> int:
        return parse_port(value)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def json_logs(self) -> bool:
        return self.is_production


def get_settings() -> ServiceSettings:
    """Read settings from the current environment."""
    return ServiceSettings()
