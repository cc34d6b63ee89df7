"""Application assembly: middleware, error envelope and the ``/api`` routers."""

from __future__ import annotations

import logging
from typing import Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core import config
from .errors import install_error_handlers
from .routes import (
    assets_router,
    auth_router,
    clients_router,
    dashboard_router,
    generate_router,
    me_router,
    objects_router,
    projects_router,
    system_router,
    users_router,
    variants_router,
)

logger = logging.getLogger("studio.api")

API_PREFIX = "/api"

ROUTERS = (
    auth_router,
    me_router,
    clients_router,
    projects_router,
    assets_router,
    variants_router,
    generate_router,
    objects_router,
    dashboard_router,
    users_router,
    system_router,
)


def _configure_logging() -> None:
    # Leave alone whatever the host (uvicorn, pytest) has already set up
    if logging.getLogger().handlers:
        return
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")


def create_app() -> FastAPI:
    _configure_logging()

    app = FastAPI(
        title="Ad Variants Studio API",
        version="0.1.0",
        description="Clients, projects, SVG ad templates and their generated variants.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)
    for router in ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/health", tags=["system"])
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    config.ensure_storage_dirs()
    logger.info(
        "Studio API ready (storage=%s, text=%s)", config.STORAGE_PROVIDER, config.TEXT_PROVIDER
    )
    return app


app = create_app()
