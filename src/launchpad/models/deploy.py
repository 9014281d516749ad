"""Deploy domain models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

Label = str

NOT_RUNNING = -1


class Deploy(BaseModel):
    """A deployable bundle found under the deploy root."""

    id: str
    note: str = ""
    port: int = NOT_RUNNING


class NewDeployDir(BaseModel):
    """Id and target directory reserved for a new deploy."""

    deploy_id: str
    path: Path
