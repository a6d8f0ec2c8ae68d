from __future__ import annotations

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from planner_proxy.config import Settings
from planner_proxy.gemini.errors import ProxyError, error_type_for_status


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_upstream_transport(request: Request) -> httpx.AsyncBaseTransport | None:
    return request.app.state.upstream_transport


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ProxyError)
    async def handle_proxy_error(
        _request: Request,
        exc: ProxyError,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.to_error()},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        _request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        compat_error = ProxyError(
            status_code=exc.status_code,
            message=str(exc.detail),
            error_type=error_type_for_status(exc.status_code),
            code="method_not_allowed" if exc.status_code == 405 else None,
        )
        return JSONResponse(
            status_code=compat_error.status_code,
            content={"error": compat_error.to_error()},
            headers=exc.headers,
        )
