"""Detached process launching for deploys."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from launchpad.core.errors import SpawnError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LaunchedProcess:
    """Handle details for a started deploy process."""

    pid: int
    command: str
    working_dir: Path
    process: subprocess.Popen[bytes] | None = None


class ProcessLauncher:
    """Start shell commands in their own session so they outlive the manager."""

    def launch(
        self,
        working_dir: Path,
        command: str,
        *,
        env: Mapping[str, str] | None = None,
    ) -> LaunchedProcess:
        if not working_dir.is_dir():
            msg = f"Working directory does not exist: {working_dir}"
            raise SpawnError(msg)

        child_env = None
        if env:
            child_env = {**os.environ, **env}

        # stdout/stderr are inherited from the manager, not captured.
        try:
            process = subprocess.Popen(
                command,
                shell=True,
                cwd=working_dir,
                env=child_env,
                stdin=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            msg = f"Could not start {command!r}: {exc}"
            raise SpawnError(msg) from exc

        logger.info("Started pid %d in %s: %s", process.pid, working_dir, command)
        return LaunchedProcess(
            pid=process.pid,
            command=command,
            working_dir=working_dir,
            process=process,
        )
