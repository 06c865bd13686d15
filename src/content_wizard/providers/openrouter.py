"""OpenRouter chat-completion client.

Thin async wrapper over the OpenRouter HTTP API used by every wizard
service. Adds exponential-backoff retry and AI call logging.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ..constants import WIZARD_DEFAULT_TIMEOUT, ChatMessage
from .config import WizardSettings, get_settings

_logger = logging.getLogger("ai_calls")

# Type for AI event callback
AIEventCallback = Callable[[dict[str, Any]], Awaitable[None]] | None

SleepFunc = Callable[[float], Awaitable[None]]

NOT_CONFIGURED_MESSAGE = "OpenRouter API key not configured. Please set OPENROUTER_API_KEY."


class OpenRouterError(Exception):
    """Raised when an OpenRouter call fails."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def retryable(self) -> bool:
        """Client errors other than 408/429 will not succeed on retry."""
        if self.status_code is None:
            return True
        return self.status_code >= 500 or self.status_code in (408, 429)


class OpenRouterNotConfiguredError(OpenRouterError):
    """Raised when no API key is available."""

    def __init__(self) -> None:
        super().__init__(NOT_CONFIGURED_MESSAGE)

    @property
    def retryable(self) -> bool:
        return False


class OpenRouterEmptyResponseError(OpenRouterError):
    """Raised when a completion carries no message content."""

    def __init__(self) -> None:
        super().__init__("No content in response")


def _is_retryable(error: BaseException) -> bool:
    return isinstance(error, OpenRouterError) and error.retryable


class OpenRouterClient:
    """Async OpenRouter client.

    Usage:
        client = OpenRouterClient()
        text = await client.chat(
            [{"role": "system", "content": "..."}, {"role": "user", "content": "..."}],
            model="openai/gpt-4.1",
            json_mode=True,
            max_retries=2,
        )
        await client.close()
    """

    def __init__(
        self,
        settings: WizardSettings | None = None,
        timeout: float = WIZARD_DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
        sleep: SleepFunc = asyncio.sleep,
        event_callback: AIEventCallback = None,
    ):
        """Initialize the client.

        Args:
            settings: Wizard settings. If None, reads from the environment.
            timeout: Request timeout in seconds.
            http_client: Optional preconfigured httpx client (tests inject a mock transport).
            sleep: Coroutine used between retries.
            event_callback: Optional callback for AI events (for progress tracking).
        """
        self.settings = settings or get_settings()
        self.timeout = timeout
        self._http_client = http_client
        self._sleep = sleep
        self._event_callback = event_callback
        self._total_calls = 0
        self._total_tokens = 0

    @property
    def is_configured(self) -> bool:
        """Whether an API key is available."""
        return bool(self.settings.openrouter_api_key)

    @property
    def total_calls(self) -> int:
        return self._total_calls

    @property
    def total_tokens(self) -> int:
        return self._total_tokens

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> OpenRouterClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def _emit_event(self, event: dict[str, Any]) -> None:
        """Emit an AI event if callback is set."""
        if self._event_callback:
            await self._event_callback(event)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.openrouter_api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.settings.openrouter_app_url,
            "X-Title": self.settings.openrouter_app_name,
        }

    async def chat(
        self,
        messages: list[ChatMessage],
        *,
        model: str,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        json_mode: bool = False,
        task: str = "chat",
        max_retries: int = 0,
    ) -> str:
        """Send a chat completion and return the assistant text.

        Args:
            messages: Chat messages (system/user/assistant).
            model: OpenRouter model id.
            temperature: Sampling temperature.
            max_tokens: Optional completion token ceiling.
            json_mode: Request response_format json_object.
            task: Task name for logging.
            max_retries: Extra attempts after the first failure. Waits
                1s, 2s, 4s... between attempts.

        Returns:
            Message content of the first choice.

        Raises:
            OpenRouterNotConfiguredError: No API key.
            OpenRouterError: Last failure after retries are exhausted.
        """
        if not self.is_configured:
            raise OpenRouterNotConfiguredError()

        payload: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        def _log_retry(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.exception() if retry_state.outcome else None
            wait = retry_state.next_action.sleep if retry_state.next_action else 0
            _logger.warning(
                f"AI_RETRY | model:{model} | task:{task} | "
                f"attempt:{retry_state.attempt_number}/{max_retries + 1} | "
                f"wait:{wait:.0f}s | error:{error}"
            )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(max_retries + 1),
            wait=wait_exponential(multiplier=1, exp_base=2, max=60),
            retry=retry_if_exception(_is_retryable),
            sleep=self._sleep,
            before_sleep=_log_retry,
            reraise=True,
        )

        result = ""
        async for attempt in retrying:
            with attempt:
                result = await self._post(payload, task, attempt.retry_state.attempt_number)
        return result

    async def _post(self, payload: dict[str, Any], task: str, attempt: int) -> str:
        """Perform a single request."""
        client = await self._get_client()
        model = payload["model"]
        url = f"{self.settings.openrouter_base_url.rstrip('/')}/chat/completions"

        system = next((m["content"] for m in payload["messages"] if m.get("role") == "system"), None)
        prompt = "\n".join(m["content"] for m in payload["messages"] if m.get("role") != "system")

        await self._emit_event({
            "type": "text_call",
            "provider": "openrouter",
            "model": model,
            "task": task,
            "attempt": attempt,
            "prompt_preview": prompt[:200],
        })

        _logger.info(
            f"AI_REQUEST | provider:openrouter | model:{model} | task:{task} | attempt:{attempt}\n"
            f"--- SYSTEM ---\n{system or '(none)'}\n"
            f"--- PROMPT ---\n{prompt}\n"
            f"--- END REQUEST ---"
        )

        start_time = time.time()
        try:
            response = await client.post(url, json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            _logger.warning(f"AI_ERROR | model:{model} | task:{task} | error:{e}")
            await self._emit_event({"type": "text_error", "model": model, "error": str(e)[:100]})
            raise OpenRouterError(f"Request failed: {e}") from e

        if response.status_code >= 400:
            _logger.warning(
                f"AI_ERROR | model:{model} | task:{task} | "
                f"status:{response.status_code} | body:{response.text[:500]}"
            )
            await self._emit_event({
                "type": "text_error",
                "model": model,
                "error": f"{response.status_code} {response.reason_phrase}",
            })
            raise OpenRouterError(
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            _logger.warning(f"AI_ERROR | model:{model} | task:{task} | error:invalid JSON body")
            raise OpenRouterError("Invalid JSON in response", body=response.text) from e
        if not isinstance(data, dict):
            raise OpenRouterError("Invalid JSON in response", body=response.text)

        choices = data.get("choices") or [{}]
        content = (choices[0].get("message") or {}).get("content")
        if not content:
            _logger.warning(f"AI_ERROR | model:{model} | task:{task} | error:empty content")
            raise OpenRouterEmptyResponseError()

        duration = time.time() - start_time
        usage = data.get("usage") or {}
        tokens = int(usage.get("total_tokens") or 0)
        self._total_calls += 1
        self._total_tokens += tokens

        _logger.info(
            f"AI_RESPONSE | provider:openrouter | model:{data.get('model', model)} | "
            f"task:{task} | duration:{duration:.2f}s | tokens:{tokens}\n"
            f"--- RESPONSE ---\n{content}\n"
            f"--- END RESPONSE ---"
        )

        await self._emit_event({
            "type": "text_response",
            "provider": "openrouter",
            "model": model,
            "task": task,
            "response_preview": content[:200],
            "duration_seconds": duration,
            "total_calls": self._total_calls,
        })

        return content


# Module-level singleton for convenience
_default_client: OpenRouterClient | None = None


def get_openrouter_client(settings: WizardSettings | None = None) -> OpenRouterClient:
    """Get the default OpenRouter client instance."""
    global _default_client
    if _default_client is None or settings is not None:
        _default_client = OpenRouterClient(settings)
    return _default_client
