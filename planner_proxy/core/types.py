from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

ProxyMode = Literal["breakdown", "report"]

DEFAULT_MODEL_ID = "gemini-pro"
DEFAULT_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


@dataclass(slots=True)
class UpstreamRequest:
    prompt: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "contents": [
                {
                    "parts": [{"text": self.prompt}],
                }
            ],
        }
