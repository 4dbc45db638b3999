"""Hello Service: a greeting endpoint and a liveness probe."""

from hello_service.core.lifecycle import HealthState, ServiceLifecycle
from hello_service.main import create_app

__all__ = ["HealthState", "ServiceLifecycle", "create_app"]
