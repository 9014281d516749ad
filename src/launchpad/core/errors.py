"""Domain errors raised by the deploy orchestration path.

Services raise these; the HTTP layer maps them onto status codes in
``launchpad.api.routes.common``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class DeployError(Exception):
    """Base class for deploy manager failures."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NoFreePortAvailable(DeployError):
    """Every candidate port in the allocator range accepted a connection."""

    def __init__(self, start: int, end: int) -> None:
        super().__init__(
            f"Could not find free port in range {start}-{end - 1}",
            {"start": start, "end": end},
        )
        self.start = start
        self.end = end


class ManifestError(DeployError):
    """Deploy directory is missing or its manifest cannot be used."""


class DeployIdCollision(DeployError):
    """A generated deploy id already names an existing deploy directory."""

    def __init__(self, deploy_id: str) -> None:
        super().__init__(f"Deploy id already exists: {deploy_id}", {"deploy_id": deploy_id})
        self.deploy_id = deploy_id


class ConfigParseError(DeployError):
    """Registry file exists but does not hold a valid registry document."""


class RegistryIOError(DeployError):
    """Registry file could not be read or written."""


class SpawnError(DeployError):
    """Deploy process could not be started."""


class HealthFailureReason(str, Enum):
    """Terminal failure reasons for a startup health check."""

    BAD_STATUS = "bad_status"
    STARTUP_TIMEOUT = "startup_timeout"
    UNEXPECTED_REDIRECT = "unexpected_redirect"


class HealthCheckError(DeployError):
    """Launched process never confirmed health."""

    def __init__(
        self,
        reason: HealthFailureReason,
        *,
        status_code: int | None = None,
        attempts: int = 0,
    ) -> None:
        if reason is HealthFailureReason.BAD_STATUS:
            message = f"Health check failed with status {status_code}"
        elif reason is HealthFailureReason.UNEXPECTED_REDIRECT:
            message = f"Health check should not redirect (status {status_code})"
        else:
            message = "Failed to connect to app after timeout"
        super().__init__(
            message,
            {"reason": reason.value, "status_code": status_code, "attempts": attempts},
        )
        self.reason = reason
        self.status_code = status_code
        self.attempts = attempts


class OperationNotImplemented(DeployError, NotImplementedError):
    """Management operation is declared but has no implementation."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Operation not implemented: {operation}", {"operation": operation})
        self.operation = operation
