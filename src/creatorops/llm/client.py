"""Wrapper around the Anthropic Claude SDK."""

from __future__ import annotations

import structlog
from anthropic import Anthropic, APIStatusError, AuthenticationError
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from creatorops.config import Settings

logger = structlog.get_logger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    """Retry rate limits, 5xx responses and connection failures; fail fast on other 4xx."""
    if isinstance(exc, AuthenticationError):
        return False
    if isinstance(exc, APIStatusError) and exc.status_code < 500:
        return exc.status_code == 429
    return True


class ClaudeClient:
    """Thin wrapper providing retry logic, a request timeout and token tracking."""

    def __init__(self, settings: Settings) -> None:
        self._client = Anthropic(
            api_key=settings.anthropic_api_key,
            timeout=settings.request_timeout,
        )
        self._model = settings.model
        self._max_tokens = settings.max_tokens
        self._temperature = settings.temperature
        self._total_input_tokens = 0
        self._total_output_tokens = 0

    @retry(
        retry=retry_if_exception(_is_retryable),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        reraise=True,
    )
    def generate(
        self,
        system: str,
        messages: list[dict],
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        """Send a message to Claude and return the text response."""
        response = self._client.messages.create(
            model=self._model,
            max_tokens=max_tokens or self._max_tokens,
            temperature=temperature if temperature is not None else self._temperature,
            system=system,
            messages=messages,
        )
        self._total_input_tokens += response.usage.input_tokens
        self._total_output_tokens += response.usage.output_tokens
        logger.debug(
            "llm.completion",
            model=self._model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )
        return response.content[0].text

    def ask(self, system: str, text: str, **kwargs: object) -> str:
        """Single-turn convenience: one user message, one text reply."""
        return self.generate(system=system, messages=[{"role": "user", "content": text}], **kwargs)

    @property
    def usage_summary(self) -> dict:
        return {
            "total_input_tokens": self._total_input_tokens,
            "total_output_tokens": self._total_output_tokens,
        }
