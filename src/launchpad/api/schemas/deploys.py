"""Deploy API schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from launchpad.models.deploy import Deploy


class DeploysResponse(BaseModel):
    """Collection response for deploys."""

    items: list[Deploy]


class NewDeployResponse(BaseModel):
    """Id and directory reserved for a new deploy."""

    deploy_id: str
    path: str


class DeployRunResponse(BaseModel):
    """Result of a successful run."""

    deploy_id: str
    port: int
    pid: int
    attempts: int


class LabelRequest(BaseModel):
    """Label assignment payload."""

    label: str = Field(min_length=1)
