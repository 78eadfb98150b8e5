"""Tests for the LLM client wrapper and prompt templates."""

from __future__ import annotations

import httpx
import pytest
from anthropic import AuthenticationError, RateLimitError
from jinja2 import UndefinedError

from creatorops.llm.client import ClaudeClient, _is_retryable
from creatorops.llm.prompts import campaign_review_prompt, render, stage_review_prompt
from tests.conftest import make_mock_response


def _status_error(cls, status: int):
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    return cls("error", response=httpx.Response(status, request=request), body=None)


def test_generate_returns_text(mock_claude_client: ClaudeClient) -> None:
    """Test that generate() returns the text from Claude's response."""
    mock_claude_client._client.messages.create.return_value = make_mock_response(
        "Hello, this is a test response."
    )

    result = mock_claude_client.generate(
        system="You are a test assistant.",
        messages=[{"role": "user", "content": "Say hello"}],
    )

    assert result == "Hello, this is a test response."
    assert mock_claude_client._total_input_tokens == 100
    assert mock_claude_client._total_output_tokens == 200


def test_usage_summary_accumulates(mock_claude_client: ClaudeClient) -> None:
    """Test that token usage accumulates across calls."""
    mock_claude_client._client.messages.create.return_value = make_mock_response(
        "Response 1", input_tokens=50, output_tokens=100
    )
    mock_claude_client.generate(system="test", messages=[{"role": "user", "content": "1"}])

    mock_claude_client._client.messages.create.return_value = make_mock_response(
        "Response 2", input_tokens=75, output_tokens=150
    )
    mock_claude_client.generate(system="test", messages=[{"role": "user", "content": "2"}])

    summary = mock_claude_client.usage_summary
    assert summary["total_input_tokens"] == 125
    assert summary["total_output_tokens"] == 250


def test_ask_sends_single_user_message(mock_claude_client: ClaudeClient) -> None:
    mock_claude_client._client.messages.create.return_value = make_mock_response("ok")

    assert mock_claude_client.ask("system prompt", "the text") == "ok"

    kwargs = mock_claude_client._client.messages.create.call_args.kwargs
    assert kwargs["system"] == "system prompt"
    assert kwargs["messages"] == [{"role": "user", "content": "the text"}]
    assert kwargs["max_tokens"] == 512


def test_authentication_error_is_not_retried(mock_claude_client: ClaudeClient) -> None:
    create = mock_claude_client._client.messages.create
    create.side_effect = _status_error(AuthenticationError, 401)

    with pytest.raises(AuthenticationError):
        mock_claude_client.ask("system", "text")
    assert create.call_count == 1


def test_retry_predicate() -> None:
    assert _is_retryable(_status_error(RateLimitError, 429)) is True
    assert _is_retryable(_status_error(AuthenticationError, 401)) is False
    assert _is_retryable(ConnectionError("reset")) is True


def test_stage_review_prompt() -> None:
    """Test that the stage prompt names the stage and lists guidelines."""
    rendered = stage_review_prompt("script", ["No competitor logos"])

    assert rendered.startswith("You are a content reviewer for scripts.")
    assert "brand safety" in rendered
    assert "- No competitor logos" in rendered


def test_stage_review_prompt_without_guidelines() -> None:
    rendered = stage_review_prompt("concept")
    assert rendered == (
        "You are a content reviewer for concepts. "
        "Review for brand safety, quality, and guidelines alignment."
    )


def test_campaign_review_prompt() -> None:
    assert "influencer marketing campaigns" in campaign_review_prompt()


def test_render_rejects_missing_variables() -> None:
    with pytest.raises(UndefinedError):
        render("stage_review.j2", guidelines=[])
