"""Deploy routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from starlette.concurrency import run_in_threadpool

from launchpad.api.deps import get_deploy_manager
from launchpad.api.routes.common import http_error
from launchpad.api.schemas.deploys import (
    DeployRunResponse,
    DeploysResponse,
    LabelRequest,
    NewDeployResponse,
)
from launchpad.core.deploy_manager import DeployManager
from launchpad.core.errors import DeployError

router = APIRouter(prefix="/api/v1", tags=["deploys"])


@router.get("/deploys", response_model=DeploysResponse)
async def list_deploys(manager: DeployManager = Depends(get_deploy_manager)) -> DeploysResponse:
    try:
        items = manager.list_deploys()
    except DeployError as exc:
        raise http_error(exc) from exc
    return DeploysResponse(items=items)


@router.post("/deploys", status_code=status.HTTP_201_CREATED, response_model=NewDeployResponse)
async def new_deploy(manager: DeployManager = Depends(get_deploy_manager)) -> NewDeployResponse:
    try:
        reserved = manager.new_deploy_directory()
    except DeployError as exc:
        raise http_error(exc) from exc
    return NewDeployResponse(deploy_id=reserved.deploy_id, path=str(reserved.path))


@router.post("/deploys/{deploy_id}/run", response_model=DeployRunResponse)
async def run_deploy(
    deploy_id: str,
    manager: DeployManager = Depends(get_deploy_manager),
) -> DeployRunResponse:
    try:
        result = await run_in_threadpool(manager.run, deploy_id)
    except DeployError as exc:
        raise http_error(exc) from exc
    return DeployRunResponse(
        deploy_id=result.deploy_id,
        port=result.port,
        pid=result.pid,
        attempts=result.attempts,
    )


@router.post("/deploys/{deploy_id}/stop", status_code=status.HTTP_204_NO_CONTENT)
async def stop_deploy(
    deploy_id: str,
    manager: DeployManager = Depends(get_deploy_manager),
) -> None:
    try:
        manager.stop(deploy_id)
    except DeployError as exc:
        raise http_error(exc) from exc


@router.post("/deploys/{deploy_id}/label", status_code=status.HTTP_204_NO_CONTENT)
async def label_deploy(
    deploy_id: str,
    request: LabelRequest,
    manager: DeployManager = Depends(get_deploy_manager),
) -> None:
    try:
        manager.label(deploy_id, request.label)
    except DeployError as exc:
        raise http_error(exc) from exc


@router.get("/labels")
async def list_labels(manager: DeployManager = Depends(get_deploy_manager)) -> dict[str, list[str]]:
    try:
        labels = manager.list_labels()
    except DeployError as exc:
        raise http_error(exc) from exc
    return {"items": labels}
