"""FastAPI app entrypoint."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from launchpad.api.routes.deploys import router as deploys_router
from launchpad.settings import get_settings


def create_app() -> FastAPI:
    app = FastAPI(title="Launchpad API", version="0.1.0")
    app.include_router(deploys_router)

    @app.get("/api/v1/health", tags=["system"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("launchpad.api.app:app", host=settings.api_host, port=settings.api_port, reload=False)
