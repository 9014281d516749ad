"""Deploy manifest (``deploy.json``) loading."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator

from launchpad.core.errors import ManifestError

MANIFEST_FILENAME = "deploy.json"

_PORT_TOKEN = re.compile(r"\bPORT\b")


class ManifestDocument(BaseModel):
    """On-disk shape of ``deploy.json``."""

    command: str
    health_path: str = "/"

    @field_validator("command")
    @classmethod
    def _command_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "command must not be empty"
            raise ValueError(msg)
        return value

    @field_validator("health_path")
    @classmethod
    def _health_path_absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            msg = "health_path must start with '/'"
            raise ValueError(msg)
        return value


@dataclass(slots=True, frozen=True)
class Application:
    """Run command template and health endpoint for one deploy."""

    command_template: str
    health_path: str = "/"

    def run_command(self, port: int) -> str:
        return _PORT_TOKEN.sub(str(port), self.command_template)

    def health_endpoint(self) -> str:
        return self.health_path


def load_application(manifest_path: Path) -> Application:
    try:
        data = manifest_path.read_bytes()
    except OSError as exc:
        msg = f"Could not read manifest {manifest_path}: {exc}"
        raise ManifestError(msg) from exc

    try:
        document = ManifestDocument.model_validate_json(data)
    except ValidationError as exc:
        msg = f"Invalid manifest {manifest_path}: {exc}"
        raise ManifestError(msg) from exc
    return Application(command_template=document.command, health_path=document.health_path)
