"""Tests for OpenRouterClient using httpx.MockTransport."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, call

import httpx
import pytest

from content_wizard.providers.openrouter import (
    NOT_CONFIGURED_MESSAGE,
    OpenRouterClient,
    OpenRouterEmptyResponseError,
    OpenRouterError,
    OpenRouterNotConfiguredError,
)

MESSAGES = [
    {"role": "system", "content": "Você é um assistente."},
    {"role": "user", "content": "Oi"},
]


def completion(content: str | None = "ok", tokens: int = 12) -> dict:
    return {
        "model": "openai/gpt-4.1",
        "choices": [{"message": {"content": content}}],
        "usage": {"total_tokens": tokens},
    }


def make_client(settings, responses: list[httpx.Response], requests: list[httpx.Request] | None = None):
    """Client whose transport replays responses in order."""
    queue = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return queue.pop(0)

    sleep = AsyncMock()
    client = OpenRouterClient(
        settings=settings,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        sleep=sleep,
    )
    return client, sleep


class TestOpenRouterClient:

    @pytest.mark.asyncio
    async def test_payload_and_headers(self, settings):
        requests: list[httpx.Request] = []
        client, _ = make_client(settings, [httpx.Response(200, json=completion("olá"))], requests)

        text = await client.chat(MESSAGES, model="openai/gpt-4.1", temperature=0.3,
                                 max_tokens=500, json_mode=True)

        assert text == "olá"
        request = requests[0]
        assert str(request.url) == "https://openrouter.ai/api/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer test-key"
        assert request.headers["X-Title"] == "contentMachine"
        body = json.loads(request.content)
        assert body["model"] == "openai/gpt-4.1"
        assert body["temperature"] == 0.3
        assert body["max_tokens"] == 500
        assert body["response_format"] == {"type": "json_object"}
        assert client.total_calls == 1
        assert client.total_tokens == 12
        await client.close()

    @pytest.mark.asyncio
    async def test_optional_fields_are_omitted(self, settings):
        requests: list[httpx.Request] = []
        client, _ = make_client(settings, [httpx.Response(200, json=completion())], requests)

        await client.chat(MESSAGES, model="m")

        body = json.loads(requests[0].content)
        assert "max_tokens" not in body
        assert "response_format" not in body

    @pytest.mark.asyncio
    async def test_retries_with_exponential_backoff(self, settings):
        client, sleep = make_client(settings, [
            httpx.Response(503),
            httpx.Response(429),
            httpx.Response(200, json=completion("finalmente")),
        ])

        text = await client.chat(MESSAGES, model="m", max_retries=2)

        assert text == "finalmente"
        assert sleep.await_args_list == [call(1), call(2)]

    @pytest.mark.asyncio
    async def test_last_error_propagates(self, settings):
        client, sleep = make_client(settings, [httpx.Response(500)] * 3)

        with pytest.raises(OpenRouterError) as exc_info:
            await client.chat(MESSAGES, model="m", max_retries=2)

        assert exc_info.value.status_code == 500
        assert sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_non_json_body_is_wrapped_and_retried(self, settings):
        client, sleep = make_client(settings, [
            httpx.Response(200, text="<html>gateway</html>"),
            httpx.Response(200, json=completion("depois")),
        ])

        text = await client.chat(MESSAGES, model="m", max_retries=1)

        assert text == "depois"
        assert sleep.await_count == 1

    @pytest.mark.asyncio
    async def test_non_json_body_error(self, settings):
        client, _ = make_client(settings, [httpx.Response(200, text="not json")])

        with pytest.raises(OpenRouterError, match="Invalid JSON in response") as exc_info:
            await client.chat(MESSAGES, model="m")

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_no_retries_by_default(self, settings):
        client, sleep = make_client(settings, [httpx.Response(502)])

        with pytest.raises(OpenRouterError):
            await client.chat(MESSAGES, model="m")

        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_client_errors_are_not_retried(self, settings):
        client, sleep = make_client(settings, [httpx.Response(401, text="bad key")])

        with pytest.raises(OpenRouterError) as exc_info:
            await client.chat(MESSAGES, model="m", max_retries=3)

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == "bad key"
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_content(self, settings):
        client, _ = make_client(settings, [httpx.Response(200, json=completion(None))])

        with pytest.raises(OpenRouterEmptyResponseError):
            await client.chat(MESSAGES, model="m")

    @pytest.mark.asyncio
    async def test_not_configured(self, settings):
        settings.openrouter_api_key = None
        client, _ = make_client(settings, [])

        assert client.is_configured is False
        with pytest.raises(OpenRouterNotConfiguredError, match="OPENROUTER_API_KEY"):
            await client.chat(MESSAGES, model="m", max_retries=2)
        assert str(OpenRouterNotConfiguredError()) == NOT_CONFIGURED_MESSAGE

    @pytest.mark.asyncio
    async def test_event_callback(self, settings):
        events = []

        async def record(event):
            events.append(event["type"])

        client = OpenRouterClient(
            settings=settings,
            http_client=httpx.AsyncClient(
                transport=httpx.MockTransport(lambda request: httpx.Response(200, json=completion()))
            ),
            event_callback=record,
        )

        await client.chat(MESSAGES, model="m")

        assert events == ["text_call", "text_response"]

    @pytest.mark.parametrize("status, retryable", [(500, True), (503, True), (429, True), (408, True),
                                                   (400, False), (401, False), (404, False), (None, True)])
    def test_retryable(self, status, retryable):
        assert OpenRouterError("x", status_code=status).retryable is retryable
