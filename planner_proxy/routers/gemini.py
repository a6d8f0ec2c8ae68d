from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from planner_proxy.config import Settings
from planner_proxy.dependencies import get_settings, get_upstream_transport
from planner_proxy.gemini.adapter import create_proxy_response

router = APIRouter(tags=["gemini"])


# The second path keeps the client's original serverless function URL working.
@router.post("/api/gemini")
@router.post("/.netlify/functions/gemini", include_in_schema=False)
async def gemini_proxy(
    request: Request,
    settings: Settings = Depends(get_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_upstream_transport),
):
    body = await request.body()
    response_payload = await create_proxy_response(body, settings, transport)
    return JSONResponse(content=response_payload)
