from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import GatewayError
from .types import UpstreamRequest

logger = logging.getLogger(__name__)

UPSTREAM_ERROR_PREFIX = "Error from Google AI API"
INVALID_UPSTREAM_MESSAGE = "Invalid response from Google AI API."


class GeminiClient:
    """Single-attempt client for the ``generateContent`` endpoint."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/models/{self._model}:generateContent"

    async def generate_text(self, prompt: str) -> str:
        payload = await self._post(UpstreamRequest(prompt=prompt))
        return extract_candidate_text(payload)

    async def _post(self, request: UpstreamRequest) -> Any:
        logger.info("Calling upstream model '%s'", self._model)

        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.post(
                self.endpoint,
                params={"key": self._api_key},
                json=request.to_payload(),
            )

        if not response.is_success:
            error_text = response.text
            logger.error(
                "Google AI API error (status=%s): %s",
                response.status_code,
                error_text,
            )
            raise GatewayError(
                status_code=response.status_code,
                message=f"{UPSTREAM_ERROR_PREFIX}: {error_text}",
                code="upstream_error",
            )

        try:
            return response.json()
        except ValueError as exc:
            logger.error("Google AI API returned a non-JSON body: %s", response.text)
            raise _invalid_upstream_response() from exc


def extract_candidate_text(payload: Any) -> str:
    candidates = payload.get("candidates") if isinstance(payload, dict) else None
    if not isinstance(candidates, list) or not candidates:
        logger.error("Google AI API response contained no candidates")
        raise _invalid_upstream_response()

    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        logger.error("Google AI API candidate has no content parts")
        raise _invalid_upstream_response()

    texts = [
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    ]
    if not texts:
        logger.error("Google AI API candidate has no text parts")
        raise _invalid_upstream_response()

    return "".join(texts)


def _invalid_upstream_response() -> GatewayError:
    return GatewayError(
        status_code=500,
        message=INVALID_UPSTREAM_MESSAGE,
        code="invalid_upstream_response",
    )
