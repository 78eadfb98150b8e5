"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from creatorops.cli import main
from creatorops.config import Settings
from creatorops.content.models import Content, ContentStatus, ContentType
from creatorops.storage.database import create_db_engine, get_session
from creatorops.storage.store import ContentStore


def _seed(settings: Settings, **overrides) -> Content:
    data = {"influencer_id": "inf-1", "title": "Spring lookbook", "type": ContentType.VIDEO}
    data.update(overrides)
    engine = create_db_engine(settings.db_path)
    with get_session(engine) as session:
        record = ContentStore(session).insert(Content(**data))
    engine.dispose()
    return record


def _load(settings: Settings, content_id: str) -> Content:
    engine = create_db_engine(settings.db_path)
    with get_session(engine) as session:
        record = ContentStore(session).require(content_id)
    engine.dispose()
    return record


@pytest.fixture
def runner(settings: Settings):
    with patch("creatorops.config.get_settings", return_value=settings):
        yield CliRunner()


class TestListAndShow:
    def test_list_empty(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["list"])
        assert result.exit_code == 0
        assert "No content found." in result.output

    def test_list_shows_records(self, runner: CliRunner, settings: Settings) -> None:
        _seed(settings)
        result = runner.invoke(main, ["list"])
        assert result.exit_code == 0
        assert "1 total" in result.output

    def test_list_rejects_unknown_status(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["list", "--status", "archived"])
        assert result.exit_code != 0
        assert "--status" in result.output

    def test_show_missing(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["show", "nope"])
        assert result.exit_code == 1
        assert "Content not found" in result.output

    def test_show_record(self, runner: CliRunner, settings: Settings) -> None:
        record = _seed(settings)
        result = runner.invoke(main, ["show", record.id])
        assert result.exit_code == 0
        assert "Spring lookbook" in result.output
        assert "No reviews yet." in result.output


class TestDecide:
    def test_approve_advances_status(self, runner: CliRunner, settings: Settings) -> None:
        record = _seed(settings)

        result = runner.invoke(
            main, ["decide", record.id, "--stage", "concept", "--approve", "-r", "maria"]
        )

        assert result.exit_code == 0
        assert "script_review" in result.output
        stored = _load(settings, record.id)
        assert stored.status == ContentStatus.SCRIPT_REVIEW
        assert stored.reviews[-1].reviewer == "maria"

    def test_requires_a_decision(self, runner: CliRunner, settings: Settings) -> None:
        record = _seed(settings)
        result = runner.invoke(main, ["decide", record.id, "--stage", "concept"])
        assert result.exit_code != 0
        assert "--approve or --reject" in result.output

    def test_missing_record(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["decide", "nope", "--stage", "video", "--reject"])
        assert result.exit_code == 1


class TestCheck:
    def test_check_text(self, runner: CliRunner) -> None:
        with patch("creatorops.llm.client.ClaudeClient.ask", return_value="REJECTED: tone"):
            result = runner.invoke(main, ["check", "--text", "Buy now!!!"])
        assert result.exit_code == 0
        assert "REJECTED: tone" in result.output

    def test_check_file(self, runner: CliRunner, tmp_path: Path) -> None:
        draft = tmp_path / "draft.txt"
        draft.write_text("A calm walkthrough of the product.")
        with patch("creatorops.llm.client.ClaudeClient.ask", return_value="Looks good") as ask:
            result = runner.invoke(main, ["check", "--file", str(draft)])
        assert result.exit_code == 0
        assert ask.call_args.args[1] == "A calm walkthrough of the product."

    def test_check_reports_model_failure(self, runner: CliRunner) -> None:
        with patch(
            "creatorops.llm.client.ClaudeClient.ask", side_effect=RuntimeError("model down")
        ):
            result = runner.invoke(main, ["check", "--text", "hello"])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "model down" in result.output

    def test_check_needs_one_source(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["check"])
        assert result.exit_code != 0

    def test_check_needs_api_key(self, runner: CliRunner, settings: Settings) -> None:
        settings.anthropic_api_key = ""
        result = runner.invoke(main, ["check", "--text", "hello"])
        assert result.exit_code == 1
        assert "ANTHROPIC_API_KEY not set" in result.output
