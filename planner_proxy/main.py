from __future__ import annotations

import httpx
from fastapi import FastAPI

from planner_proxy.config import Settings, configure_logging
from planner_proxy.dependencies import register_exception_handlers
from planner_proxy.internal import admin
from planner_proxy.routers import gemini


def create_app(
    settings: Settings | None = None,
    *,
    upstream_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    settings = settings if settings is not None else Settings()
    configure_logging(settings)

    app = FastAPI(
        title="planner-proxy",
        version="0.1.0",
        docs_url="/docs",
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.upstream_transport = upstream_transport

    register_exception_handlers(app)

    app.include_router(gemini.router)
    app.include_router(admin.router)

    return app


app = create_app()
