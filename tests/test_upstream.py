from __future__ import annotations

import httpx
import pytest

from planner_proxy.core.errors import GatewayError
from planner_proxy.core.upstream import GeminiClient, extract_candidate_text


def test_extract_candidate_text_joins_text_parts():
    payload = {
        "candidates": [
            {"content": {"parts": [{"text": "Hello, "}, {"inlineData": {}}, {"text": "world"}]}},
            {"content": {"parts": [{"text": "ignored"}]}},
        ]
    }

    assert extract_candidate_text(payload) == "Hello, world"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"candidates": []},
        {"candidates": None},
        {"candidates": [{"finishReason": "SAFETY"}]},
        {"candidates": [{"content": {"parts": []}}]},
        [],
    ],
)
def test_extract_candidate_text_rejects_invalid_payloads(payload):
    with pytest.raises(GatewayError) as exc_info:
        extract_candidate_text(payload)

    assert exc_info.value.status_code == 500
    assert exc_info.value.code == "invalid_upstream_response"


@pytest.mark.asyncio
async def test_generate_text_makes_a_single_attempt():
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503, text="overloaded")

    client = GeminiClient(
        "secret",
        model="gemini-pro",
        base_url="https://upstream.test/v1beta/",
        transport=httpx.MockTransport(handler),
    )

    with pytest.raises(GatewayError) as exc_info:
        await client.generate_text("Hello")

    assert len(calls) == 1
    assert str(calls[0].url).startswith(
        "https://upstream.test/v1beta/models/gemini-pro:generateContent?"
    )
    assert exc_info.value.status_code == 503
    assert exc_info.value.message == "Error from Google AI API: overloaded"


@pytest.mark.asyncio
async def test_generate_text_rejects_non_json_success_body():
    client = GeminiClient(
        "secret",
        model="gemini-pro",
        base_url="https://upstream.test/v1beta",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>")),
    )

    with pytest.raises(GatewayError) as exc_info:
        await client.generate_text("Hello")

    assert exc_info.value.code == "invalid_upstream_response"
