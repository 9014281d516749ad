from __future__ import annotations

from pathlib import Path

import pytest

from launchpad.core.errors import ManifestError
from launchpad.core.manifest import Application, load_application


def _write_manifest(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "deploy.json"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_application(tmp_path: Path) -> None:
    path = _write_manifest(tmp_path, '{"command": "myapp --port=PORT", "health_path": "/healthz"}')

    application = load_application(path)

    assert application.run_command(8050) == "myapp --port=8050"
    assert application.health_endpoint() == "/healthz"


def test_health_path_defaults_to_root(tmp_path: Path) -> None:
    path = _write_manifest(tmp_path, '{"command": "serve", "extra": true}')
    assert load_application(path).health_endpoint() == "/"


def test_run_command_replaces_every_standalone_token() -> None:
    application = Application(command_template="app --port PORT --admin=PORT PORTAL=1")
    assert application.run_command(8001) == "app --port 8001 --admin=8001 PORTAL=1"


def test_missing_manifest(tmp_path: Path) -> None:
    with pytest.raises(ManifestError, match="Could not read manifest"):
        load_application(tmp_path / "deploy.json")


def test_invalid_json_manifest(tmp_path: Path) -> None:
    path = _write_manifest(tmp_path, "command = serve")
    with pytest.raises(ManifestError, match="Invalid manifest"):
        load_application(path)


def test_manifest_requires_command(tmp_path: Path) -> None:
    path = _write_manifest(tmp_path, '{"command": "   "}')
    with pytest.raises(ManifestError):
        load_application(path)


def test_manifest_health_path_must_be_absolute(tmp_path: Path) -> None:
    path = _write_manifest(tmp_path, '{"command": "serve", "health_path": "healthz"}')
    with pytest.raises(ManifestError):
        load_application(path)


def test_manifest_with_invalid_utf8(tmp_path: Path) -> None:
    path = tmp_path / "deploy.json"
    path.write_bytes(b'{"command": "\xff"}')

    with pytest.raises(ManifestError, match="Invalid manifest"):
        load_application(path)
