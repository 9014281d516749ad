"""Deploy orchestration: allocate a port, launch, and confirm health."""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol

from launchpad.core.errors import DeployIdCollision, ManifestError, OperationNotImplemented
from launchpad.core.health_checker import HealthChecker
from launchpad.core.manifest import MANIFEST_FILENAME, Application, load_application
from launchpad.core.port_allocator import PortAllocator
from launchpad.core.process_launcher import ProcessLauncher
from launchpad.core.registry import RegistryStore
from launchpad.models.deploy import NOT_RUNNING, Deploy, Label, NewDeployDir
from launchpad.settings import DeployIdPolicy, ManagerSettings

logger = logging.getLogger(__name__)

DEPLOYS_DIRNAME = "deploys"
REGISTRY_FILENAME = "config.json"
DEPLOY_ID_FORMAT = "%Y-%m-%d-%H-%M-%S"

_DEPLOY_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def format_deploy_id(moment: datetime) -> str:
    """Second-granularity id; ids generated within one second are equal."""
    return moment.strftime(DEPLOY_ID_FORMAT)


class DeployServer(Protocol):
    """Management operations offered to front ends."""

    def list_labels(self) -> list[Label]: ...

    def list_deploys(self) -> list[Deploy]: ...

    def run(self, deploy_id: str) -> DeployRun: ...

    def stop(self, deploy_id: str) -> None: ...

    def label(self, deploy_id: str, label: Label) -> None: ...


@dataclass(slots=True)
class DeployRun:
    """A deploy that was launched and answered its health check."""

    deploy_id: str
    port: int
    pid: int
    attempts: int


class DeployManager:
    """Run deploys found under ``<root>/deploys`` on single-host ports.

    ``run`` records the port assignment before launching and never rolls it
    back: a deploy that fails to spawn or never turns healthy leaves its
    entry in ``config.json`` and, once started, its process running.
    """

    def __init__(
        self,
        root: Path,
        *,
        port_allocator: PortAllocator | None = None,
        launcher: ProcessLauncher | None = None,
        health_checker: HealthChecker | None = None,
        registry: RegistryStore | None = None,
        now: Callable[[], datetime] = datetime.now,
        id_policy: DeployIdPolicy = DeployIdPolicy.REUSE,
    ) -> None:
        self._root = root.resolve()
        self._deploys_root = self._root / DEPLOYS_DIRNAME
        self._deploys_root.mkdir(parents=True, exist_ok=True)
        self._registry = registry or RegistryStore.load(self._root / REGISTRY_FILENAME)
        self._port_allocator = port_allocator or PortAllocator()
        self._launcher = launcher or ProcessLauncher()
        self._health_checker = health_checker or HealthChecker()
        self._now = now
        self._id_policy = id_policy
        self._allocation_lock = threading.Lock()
        self._pending_ports: set[int] = set()

    @classmethod
    def from_settings(cls, settings: ManagerSettings) -> DeployManager:
        return cls(
            settings.root,
            port_allocator=PortAllocator(
                settings.port_range_start,
                settings.port_range_end,
                host=settings.port_check_host,
                connect_timeout=settings.port_check_timeout_seconds,
            ),
            health_checker=HealthChecker(
                startup_timeout=settings.startup_timeout_seconds,
                request_timeout=settings.health_request_timeout_seconds,
                poll_interval=settings.health_poll_interval_seconds,
                host=settings.health_host,
            ),
            id_policy=settings.deploy_id_policy,
        )

    @property
    def root(self) -> Path:
        return self._root

    @property
    def deploys_root(self) -> Path:
        return self._deploys_root

    @property
    def registry(self) -> RegistryStore:
        return self._registry

    def new_deploy_directory(self) -> NewDeployDir:
        """Reserve an id from the current second; the directory is not created."""
        deploy_id = format_deploy_id(self._now())
        path = self._deploys_root / deploy_id

        if path.exists():
            if self._id_policy is DeployIdPolicy.ERROR:
                raise DeployIdCollision(deploy_id)
            if self._id_policy is DeployIdPolicy.SUFFIX:
                base = deploy_id
                counter = 1
                while path.exists():
                    deploy_id = f"{base}-{counter}"
                    path = self._deploys_root / deploy_id
                    counter += 1

        return NewDeployDir(deploy_id=deploy_id, path=path)

    def list_deploys(self) -> list[Deploy]:
        # Ports are not looked up in the registry.
        return [
            Deploy(id=entry.name, port=NOT_RUNNING)
            for entry in sorted(self._deploys_root.iterdir())
            if entry.is_dir()
        ]

    def run(self, deploy_id: str) -> DeployRun:
        deploy_path = self._deploy_path(deploy_id)

        with self._allocation_lock:
            port = self._port_allocator.find_free_port(exclude=self._pending_ports)
            logger.info("Found port %d for deploy %s", port, deploy_id)
            application = self._resolve_application(deploy_path)
            self._registry.assign_port(port, deploy_id)
            self._registry.persist()
            self._pending_ports.add(port)

        try:
            command = application.run_command(port)
            launched = self._launcher.launch(deploy_path, command, env={"PORT": str(port)})
            health = self._health_checker.await_healthy(port, application.health_endpoint())
        finally:
            with self._allocation_lock:
                self._pending_ports.discard(port)

        return DeployRun(
            deploy_id=deploy_id,
            port=port,
            pid=launched.pid,
            attempts=health.attempts,
        )

    def stop(self, deploy_id: str) -> None:
        raise OperationNotImplemented("stop")

    def label(self, deploy_id: str, label: Label) -> None:
        raise OperationNotImplemented("label")

    def list_labels(self) -> list[Label]:
        raise OperationNotImplemented("list_labels")

    def _deploy_path(self, deploy_id: str) -> Path:
        if not _DEPLOY_ID_PATTERN.fullmatch(deploy_id):
            msg = f"Invalid deploy id: {deploy_id!r}"
            raise ManifestError(msg)
        return self._deploys_root / deploy_id

    @staticmethod
    def _resolve_application(deploy_path: Path) -> Application:
        if not deploy_path.is_dir():
            msg = f"Deploy directory not found: {deploy_path}"
            raise ManifestError(msg)
        return load_application(deploy_path / MANIFEST_FILENAME)
