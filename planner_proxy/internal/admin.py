from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from planner_proxy.config import Settings
from planner_proxy.dependencies import get_settings

router = APIRouter(prefix="/internal", tags=["internal"])


@router.get("/healthz")
async def healthz(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    return {
        "status": "ok",
        "model": settings.model,
        "api_key_configured": settings.has_api_key,
    }
