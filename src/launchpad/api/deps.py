"""Shared API dependency providers."""

from __future__ import annotations

from launchpad.api.routes.common import http_error
from launchpad.core.deploy_manager import DeployManager
from launchpad.core.errors import DeployError
from launchpad.settings import get_settings

_DEPLOY_MANAGER: DeployManager | None = None


def get_deploy_manager() -> DeployManager:
    global _DEPLOY_MANAGER
    if _DEPLOY_MANAGER is None:
        try:
            _DEPLOY_MANAGER = DeployManager.from_settings(get_settings())
        except DeployError as exc:
            raise http_error(exc) from exc
    return _DEPLOY_MANAGER
