"""Environment-driven configuration for the deploy manager.

Environment variables (prefix ``LAUNCHPAD_``):
    ROOT: directory holding ``deploys/`` and ``config.json`` (default: .launchpad)
    PORT_RANGE_START / PORT_RANGE_END: candidate ports, end exclusive (8001 / 8100)
    STARTUP_TIMEOUT_SECONDS: deadline for a deploy to report healthy (1.0)
    HEALTH_REQUEST_TIMEOUT_SECONDS: per-request health timeout (2.0)
    HEALTH_POLL_INTERVAL_SECONDS: sleep between health attempts (0.1)
    DEPLOY_ID_POLICY: reuse | error | suffix (reuse)
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class DeployIdPolicy(str, Enum):
    """What to do when a timestamp id names an existing deploy directory."""

    REUSE = "reuse"
    ERROR = "error"
    SUFFIX = "suffix"


class ManagerSettings(BaseSettings):
    """Deploy manager configuration."""

    model_config = SettingsConfigDict(env_prefix="LAUNCHPAD_", case_sensitive=False)

    root: Path = Path(".launchpad")

    port_range_start: int = 8001
    port_range_end: int = 8100
    port_check_host: str = "127.0.0.1"
    port_check_timeout_seconds: float = 1.0

    health_host: str = "localhost"
    startup_timeout_seconds: float = 1.0
    health_request_timeout_seconds: float = 2.0
    health_poll_interval_seconds: float = 0.1

    deploy_id_policy: DeployIdPolicy = DeployIdPolicy.REUSE

    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 8000


_settings: ManagerSettings | None = None


def get_settings() -> ManagerSettings:
    global _settings
    if _settings is None:
        _settings = ManagerSettings()
    return _settings
