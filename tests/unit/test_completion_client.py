"""
Unit tests for app/modules/flashcards/client.py
Tests: request payload and headers, single round trip, error kinds for
transport / HTTP status / malformed envelope failures.
Uses httpx.MockTransport, so no network is required.
"""

import json

import httpx
import pytest

from app.core.config import OpenRouterSettings
from app.core.errors import UpstreamError
from app.modules.flashcards.client import (
    MAX_OUTPUT_TOKENS,
    TEMPERATURE,
    OpenRouterClient,
)
from app.modules.flashcards.prompts import SYSTEM_PROMPT


def _settings(**overrides) -> OpenRouterSettings:
    values = {
        "OPENROUTER_BASE_URL": "https://llm.example.test/api/v1/",
        "OPENROUTER_API_KEY": "sk-test",
        "OPENROUTER_MODEL": "test/model",
        "APP_URL": "http://app.example.test",
        "OPENROUTER_APP_TITLE": "Test App",
    }
    values.update(overrides)
    return OpenRouterSettings(**values)


def _envelope(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class _Recorder:
    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


# ────────────────────────────────────────────────────────────────────────────
# Request shape
# ────────────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_returns_message_content_in_one_request():
    rec = _Recorder(httpx.Response(200, json=_envelope('{"flashcards": []}')))
    client = OpenRouterClient(_settings(), transport=httpx.MockTransport(rec))

    text = await client.complete("PROMPT")

    assert text == '{"flashcards": []}'
    assert len(rec.requests) == 1


@pytest.mark.asyncio
async def test_payload_carries_fixed_sampling_and_json_format():
    rec = _Recorder(httpx.Response(200, json=_envelope("{}")))
    client = OpenRouterClient(_settings(), transport=httpx.MockTransport(rec))

    await client.complete("PROMPT")

    request = rec.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://llm.example.test/api/v1/chat/completions"
    body = json.loads(request.content)
    assert body["model"] == "test/model"
    assert body["temperature"] == TEMPERATURE
    assert body["max_tokens"] == MAX_OUTPUT_TOKENS
    assert body["response_format"] == {"type": "json_object"}
    assert body["messages"] == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "PROMPT"},
    ]


@pytest.mark.asyncio
async def test_headers_carry_key_referer_and_title():
    rec = _Recorder(httpx.Response(200, json=_envelope("{}")))
    client = OpenRouterClient(_settings(), transport=httpx.MockTransport(rec))

    await client.complete("PROMPT")

    headers = rec.requests[0].headers
    assert headers["authorization"] == "Bearer sk-test"
    assert headers["http-referer"] == "http://app.example.test"
    assert headers["x-title"] == "Test App"


@pytest.mark.asyncio
async def test_missing_key_is_still_sent():
    rec = _Recorder(httpx.Response(401, text="No auth credentials found"))
    client = OpenRouterClient(
        _settings(OPENROUTER_API_KEY=None), transport=httpx.MockTransport(rec)
    )

    with pytest.raises(UpstreamError) as info:
        await client.complete("PROMPT")

    assert len(rec.requests) == 1
    assert info.value.upstream_status == 401


@pytest.mark.asyncio
async def test_settings_read_from_environment_at_call_time(monkeypatch):
    rec = _Recorder(httpx.Response(200, json=_envelope("{}")))
    client = OpenRouterClient(transport=httpx.MockTransport(rec))

    monkeypatch.setenv("OPENROUTER_BASE_URL", "https://late.example.test/v1")
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-late")
    await client.complete("PROMPT")

    assert str(rec.requests[0].url) == "https://late.example.test/v1/chat/completions"
    assert rec.requests[0].headers["authorization"] == "Bearer sk-late"


# ────────────────────────────────────────────────────────────────────────────
# Failure kinds
# ────────────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_non_success_status_raises_with_status_and_body():
    rec = _Recorder(httpx.Response(503, text="overloaded"))
    client = OpenRouterClient(_settings(), transport=httpx.MockTransport(rec))

    with pytest.raises(UpstreamError) as info:
        await client.complete("PROMPT")

    err = info.value
    assert err.kind == "status"
    assert err.upstream_status == 503
    assert err.body == "overloaded"
    assert err.status_code == 502


@pytest.mark.asyncio
async def test_transport_failure_raises_transport_kind():
    def boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = OpenRouterClient(_settings(), transport=httpx.MockTransport(boom))

    with pytest.raises(UpstreamError) as info:
        await client.complete("PROMPT")

    assert info.value.kind == "transport"
    assert info.value.upstream_status is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"choices": []},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": ""}}]},
        {"error": {"message": "rate limited"}},
    ],
)
async def test_envelope_without_content_raises_envelope_kind(payload):
    rec = _Recorder(httpx.Response(200, json=payload))
    client = OpenRouterClient(_settings(), transport=httpx.MockTransport(rec))

    with pytest.raises(UpstreamError) as info:
        await client.complete("PROMPT")

    assert info.value.kind == "envelope"


@pytest.mark.asyncio
async def test_non_json_envelope_raises_envelope_kind():
    rec = _Recorder(httpx.Response(200, text="<html>gateway</html>"))
    client = OpenRouterClient(_settings(), transport=httpx.MockTransport(rec))

    with pytest.raises(UpstreamError) as info:
        await client.complete("PROMPT")

    assert info.value.kind == "envelope"


@pytest.mark.asyncio
async def test_redirect_status_raises_status_kind():
    rec = _Recorder(
        httpx.Response(302, headers={"location": "https://elsewhere.test"}, text="")
    )
    client = OpenRouterClient(_settings(), transport=httpx.MockTransport(rec))

    with pytest.raises(UpstreamError) as info:
        await client.complete("PROMPT")

    assert info.value.kind == "status"
    assert info.value.upstream_status == 302
