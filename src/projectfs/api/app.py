"""FastAPI app entrypoint."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from projectfs.api.routes.files import router as files_router
from projectfs.api.routes.mcp_transport import router as mcp_router
from projectfs.config import Settings, configure_logging, load_settings
from projectfs.core.project_files import ProjectFiles

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings if settings is not None else load_settings()
    app = FastAPI(title="projectfs API", version="0.1.0")
    app.state.settings = settings
    app.state.project_files = ProjectFiles(settings.root, max_file_size=settings.max_file_size)
    app.include_router(files_router)
    app.include_router(mcp_router)

    @app.get("/api/v1/health", tags=["system"])
    async def health() -> dict[str, str]:
        return {"status": "ok", "root": str(settings.root)}

    @app.get("/api/v1/mcp/.well-known", tags=["system"])
    async def mcp_discovery() -> dict[str, str]:
        return {
            "name": "projectfs-mcp",
            "transport": "streamable-http",
            "endpoint": "/mcp",
        }

    return app


def run() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info("Serving project files from %s", settings.root)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, reload=False)
