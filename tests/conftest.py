"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from creatorops.api.app import create_app
from creatorops.config import Settings
from creatorops.llm.client import ClaudeClient
from creatorops.review.ai import AIReviewer
from creatorops.storage.database import create_db_engine, get_session


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Create test settings with a temporary database."""
    return Settings(
        anthropic_api_key="test-key-not-real",
        model="claude-sonnet-4-20250514",
        max_tokens=512,
        temperature=0.3,
        db_path=tmp_path / "test.db",
        log_level="WARNING",
    )


@pytest.fixture
def mock_claude_client(settings: Settings) -> ClaudeClient:
    """Create a ClaudeClient with a mocked Anthropic SDK."""
    client = ClaudeClient(settings)
    # Replace the internal Anthropic client with a mock
    mock_anthropic = MagicMock()
    client._client = mock_anthropic
    return client


@pytest.fixture
def fake_llm() -> MagicMock:
    """A stand-in ClaudeClient whose ``ask`` replies are set per test."""
    llm = MagicMock(spec=ClaudeClient)
    llm.ask.return_value = "Looks on-brand and well structured."
    return llm


@pytest.fixture
def reviewer(fake_llm: MagicMock) -> AIReviewer:
    return AIReviewer(fake_llm)


@pytest.fixture
def session(settings: Settings):
    engine = create_db_engine(settings.db_path)
    with get_session(engine) as session:
        yield session
    engine.dispose()


@pytest.fixture
def client(settings: Settings, reviewer: AIReviewer) -> Iterator[TestClient]:
    """TestClient over a fresh app and database."""
    app = create_app(settings, reviewer=reviewer)
    with TestClient(app) as test_client:
        yield test_client


def make_mock_response(text: str, input_tokens: int = 100, output_tokens: int = 200):
    """Helper to create a mock Anthropic API response."""
    mock_response = MagicMock()
    mock_response.content = [MagicMock(text=text)]
    mock_response.usage.input_tokens = input_tokens
    mock_response.usage.output_tokens = output_tokens
    return mock_response


def content_payload(**overrides: object) -> dict:
    """A valid POST /api/content body."""
    payload = {
        "influencerId": "inf-1",
        "title": "Spring lookbook",
        "type": "video",
        "content": "Three outfits, one jacket, city walk.",
    }
    payload.update(overrides)
    return payload
