from __future__ import annotations

from pathlib import Path

import pytest

from launchpad.settings import DeployIdPolicy, ManagerSettings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ROOT", "PORT_RANGE_START", "STARTUP_TIMEOUT_SECONDS", "DEPLOY_ID_POLICY"):
        monkeypatch.delenv(f"LAUNCHPAD_{name}", raising=False)

    settings = ManagerSettings()

    assert settings.root == Path(".launchpad")
    assert (settings.port_range_start, settings.port_range_end) == (8001, 8100)
    assert settings.startup_timeout_seconds == 1.0
    assert settings.health_request_timeout_seconds == 2.0
    assert settings.health_poll_interval_seconds == 0.1
    assert settings.deploy_id_policy is DeployIdPolicy.REUSE


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("LAUNCHPAD_ROOT", str(tmp_path))
    monkeypatch.setenv("LAUNCHPAD_PORT_RANGE_START", "9001")
    monkeypatch.setenv("launchpad_startup_timeout_seconds", "5")
    monkeypatch.setenv("LAUNCHPAD_DEPLOY_ID_POLICY", "suffix")

    settings = ManagerSettings()

    assert settings.root == tmp_path
    assert settings.port_range_start == 9001
    assert settings.startup_timeout_seconds == 5.0
    assert settings.deploy_id_policy is DeployIdPolicy.SUFFIX
