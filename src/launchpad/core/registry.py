"""Persisted port and label registry."""

from __future__ import annotations

import contextlib
import os
import re
import threading
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from launchpad.core.errors import ConfigParseError, RegistryIOError


_PORT_KEY = re.compile(r"[1-9][0-9]*")


class Registry(BaseModel):
    """Port and label assignments, stored as ``{"Ports": ..., "Labels": ...}``.

    Port keys in the file must be plain decimal numbers. Spellings such as
    ``"08050"`` or ``"+8050"`` are rejected so that a save writes back the
    keys it loaded.
    """

    model_config = ConfigDict(populate_by_name=True)

    ports: dict[int, str] = Field(default_factory=dict, alias="Ports")
    labels: dict[str, str] = Field(default_factory=dict, alias="Labels")

    @field_validator("ports", "labels", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("ports", mode="before")
    @classmethod
    def _canonical_port_keys(cls, value: Any) -> Any:
        if isinstance(value, dict):
            for key in value:
                if isinstance(key, str) and not _PORT_KEY.fullmatch(key):
                    msg = f"port key must be a plain decimal number: {key!r}"
                    raise ValueError(msg)
        return value


def load_registry(path: Path) -> Registry:
    """Read a registry file; a missing file yields an empty registry."""
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        return Registry()
    except OSError as exc:
        msg = f"Could not read registry {path}: {exc}"
        raise RegistryIOError(msg) from exc

    try:
        return Registry.model_validate_json(data)
    except ValidationError as exc:
        msg = f"Invalid registry file {path}: {exc}"
        raise ConfigParseError(msg) from exc


def save_registry(path: Path, registry: Registry) -> None:
    """Write the full registry through a temporary file and an atomic rename."""
    tmp = path.with_name(f".{path.name}.{os.getpid()}.{threading.get_ident()}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(registry.model_dump_json(by_alias=True), encoding="utf-8")
        os.replace(tmp, path)
    except OSError as exc:
        with contextlib.suppress(OSError):
            tmp.unlink()
        msg = f"Could not write registry {path}: {exc}"
        raise RegistryIOError(msg) from exc


class RegistryStore:
    """In-memory registry bound to its file, flushed explicitly by ``persist``."""

    def __init__(self, path: Path, registry: Registry | None = None) -> None:
        self._path = path
        self._registry = registry if registry is not None else Registry()
        self._lock = threading.Lock()

    @classmethod
    def load(cls, path: Path) -> RegistryStore:
        return cls(path, load_registry(path))

    @property
    def path(self) -> Path:
        return self._path

    def assign_port(self, port: int, deploy_id: str) -> None:
        with self._lock:
            self._registry.ports[port] = deploy_id

    def deploy_for_port(self, port: int) -> str | None:
        with self._lock:
            return self._registry.ports.get(port)

    def ports(self) -> dict[int, str]:
        with self._lock:
            return dict(self._registry.ports)

    def labels(self) -> dict[str, str]:
        with self._lock:
            return dict(self._registry.labels)

    def persist(self) -> None:
        with self._lock:
            snapshot = self._registry.model_copy(deep=True)
        save_registry(self._path, snapshot)
