from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from planner_proxy.core.types import ProxyMode


class ProxyRequest(BaseModel):
    prompt: str = Field(min_length=1)
    type: ProxyMode

    model_config = ConfigDict(extra="allow")


class ReportResponse(BaseModel):
    report: str
