"""Common route helpers."""

from __future__ import annotations

from http import HTTPStatus

from fastapi import HTTPException

from launchpad.core.errors import (
    ConfigParseError,
    DeployError,
    DeployIdCollision,
    HealthCheckError,
    ManifestError,
    NoFreePortAvailable,
    OperationNotImplemented,
    RegistryIOError,
    SpawnError,
)

_STATUS_BY_ERROR: tuple[tuple[type[DeployError], HTTPStatus], ...] = (
    (NoFreePortAvailable, HTTPStatus.SERVICE_UNAVAILABLE),
    (ManifestError, HTTPStatus.UNPROCESSABLE_ENTITY),
    (DeployIdCollision, HTTPStatus.CONFLICT),
    (SpawnError, HTTPStatus.BAD_GATEWAY),
    (HealthCheckError, HTTPStatus.BAD_GATEWAY),
    (OperationNotImplemented, HTTPStatus.NOT_IMPLEMENTED),
    (RegistryIOError, HTTPStatus.INTERNAL_SERVER_ERROR),
    (ConfigParseError, HTTPStatus.INTERNAL_SERVER_ERROR),
)


def http_error(exc: DeployError) -> HTTPException:
    """Translate a domain error into the matching HTTP error."""
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    for error_type, mapped in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = mapped
            break
    return HTTPException(
        status_code=status_code,
        detail={"error": type(exc).__name__, "message": exc.message, **exc.details},
    )
