from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from planner_proxy.config import Settings
from planner_proxy.core.decoding import decode_structured_text
from planner_proxy.core.errors import GatewayError
from planner_proxy.core.upstream import GeminiClient

from .errors import ProxyError, map_gemini_error
from .schemas import ProxyRequest, ReportResponse

logger = logging.getLogger(__name__)

MISSING_API_KEY_MESSAGE = "API key not configured."
UNEXPECTED_FORMAT_MESSAGE = "AI returned a response in an unexpected format."


async def create_proxy_response(
    body: bytes,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    client = _create_client(settings, transport)
    request = parse_proxy_request(body)

    try:
        text = await client.generate_text(request.prompt)
        return interpret_candidate_text(text, request)
    except Exception as exc:
        if not isinstance(exc, (GatewayError, ProxyError)):
            logger.exception("Unexpected error while proxying to Google AI API")
        raise map_gemini_error(exc) from exc


def parse_proxy_request(body: bytes) -> ProxyRequest:
    try:
        return ProxyRequest.model_validate_json(body)
    except ValidationError as exc:
        errors = exc.errors()
        message = errors[0]["msg"] if errors else "Invalid request"
        logger.info("Rejected proxy request: %s", message)
        raise ProxyError(
            status_code=400,
            message=message,
            error_type="invalid_request_error",
            code="invalid_request",
        ) from exc


def interpret_candidate_text(text: str, request: ProxyRequest) -> Any:
    if request.type == "report":
        return ReportResponse(report=text).model_dump()

    result = decode_structured_text(text)
    if not result.ok:
        logger.warning(
            "Failed to decode breakdown response (%s); raw text: %r",
            result.error,
            text,
        )
        raise GatewayError(
            status_code=500,
            message=UNEXPECTED_FORMAT_MESSAGE,
            code="unexpected_format",
        )

    return result.value


def _create_client(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None,
) -> GeminiClient:
    if not settings.has_api_key:
        logger.error("GEMINI_API_KEY is not configured; refusing to call upstream")
        raise ProxyError(
            status_code=500,
            message=MISSING_API_KEY_MESSAGE,
            error_type="server_error",
            code="api_key_missing",
        )

    return GeminiClient(
        settings.api_key,
        model=settings.model,
        base_url=settings.api_base_url,
        timeout=settings.timeout_seconds,
        transport=transport,
    )
