"""CLI entry point for the creatorops review platform."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from creatorops.config import Settings
    from creatorops.content.models import Content
    from creatorops.content.service import ContentService

console = Console()

STATUS_STYLE = {
    "approved": "green",
    "published": "bold green",
    "rejected": "red",
}


@click.group()
@click.version_option(version="0.1.0")
def main() -> None:
    """creatorops influencer content review platform."""


# ---------------------------------------------------------------------------
# serve: run the HTTP API
# ---------------------------------------------------------------------------


@main.command()
@click.option("--host", default=None, help="Bind address (default from settings)")
@click.option("--port", "-p", type=int, default=None, help="Port (default from settings)")
def serve(host: str | None, port: int | None) -> None:
    """Run the REST API under uvicorn."""
    import uvicorn

    from creatorops.api.app import create_app
    from creatorops.config import get_settings

    settings = get_settings()
    app = create_app(settings)
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


# ---------------------------------------------------------------------------
# list / show: inspect content records
# ---------------------------------------------------------------------------


@main.command("list")
@click.option("--status", "-s", default=None, help="Filter by status")
@click.option("--influencer", "-i", "influencer_id", default=None, help="Filter by influencer id")
@click.option("--page", default=1, help="Page number")
@click.option("--limit", "-n", default=50, help="Records per page")
def list_content(status: str | None, influencer_id: str | None, page: int, limit: int) -> None:
    """List content records awaiting or past review."""
    from creatorops.content.models import ContentStatus

    try:
        status_filter = ContentStatus(status) if status else None
    except ValueError:
        choices = ", ".join(s.value for s in ContentStatus)
        raise click.BadParameter(f"must be one of: {choices}", param_hint="--status")

    with _content_service() as service:
        result = service.list(
            status=status_filter, influencer_id=influencer_id, page=page, limit=limit
        )

    if not result.data:
        console.print("[yellow]No content found.[/yellow]")
        return

    pages = max(result.total_pages, 1)
    table = Table(title=f"Content (page {result.page}/{pages}, {result.total} total)")
    table.add_column("ID", width=32)
    table.add_column("Title", width=40)
    table.add_column("Type", width=8)
    table.add_column("Status", width=15)
    table.add_column("Reviews", width=7, justify="right")
    for c in result.data:
        table.add_row(
            c.id,
            c.title[:40],
            str(c.type),
            _status(c.status.value),
            str(len(c.reviews)),
        )
    console.print(table)


@main.command()
@click.argument("content_id")
def show(content_id: str) -> None:
    """Show one record's timeline and review history."""
    from creatorops.errors import ResourceNotFoundError

    with _content_service() as service:
        try:
            record = service.get(content_id)
        except ResourceNotFoundError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise SystemExit(1)

    _print_record(record)


# ---------------------------------------------------------------------------
# decide: record a review decision
# ---------------------------------------------------------------------------


@main.command()
@click.argument("content_id")
@click.option(
    "--stage",
    "-S",
    type=click.Choice(["concept", "script", "video"]),
    required=True,
    help="Stage being reviewed",
)
@click.option("--approve/--reject", default=None, help="Decision")
@click.option("--feedback", "-f", default="", help="Feedback for the influencer")
@click.option("--reviewer", "-r", default="System", help="Reviewer name")
def decide(
    content_id: str, stage: str, approve: bool | None, feedback: str, reviewer: str
) -> None:
    """Approve or reject a stage and advance the record's status."""
    from creatorops.content.models import ReviewDecision, Stage
    from creatorops.errors import CreatorOpsError

    if approve is None:
        raise click.UsageError("Pass --approve or --reject.")

    decision = ReviewDecision(stage=Stage(stage), approved=approve, feedback=feedback)
    with _content_service() as service:
        try:
            record = service.review(content_id, decision, reviewer)
        except CreatorOpsError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise SystemExit(1)

    console.print(
        f"[bold]{record.title}[/bold]: {stage} "
        f"{'approved' if approve else 'rejected'} -> {_status(record.status.value)}"
    )


# ---------------------------------------------------------------------------
# check: quick AI verdict on free text
# ---------------------------------------------------------------------------


@main.command()
@click.option("--file", "-f", "file_path", type=click.Path(exists=True), default=None,
              help="Text file to review")
@click.option("--text", "-t", default=None, help="Text to review")
def check(file_path: str | None, text: str | None) -> None:
    """Ask the AI reviewer for a campaign verdict on a piece of text."""
    from creatorops.config import get_settings
    from creatorops.llm.client import ClaudeClient
    from creatorops.review.ai import AIReviewer

    if bool(file_path) == bool(text):
        raise click.UsageError("Pass exactly one of --file or --text.")
    body = Path(file_path).read_text() if file_path else text

    settings = get_settings()
    _check_api_key(settings)
    reviewer = AIReviewer(ClaudeClient(settings), settings.review_guidelines)

    try:
        with console.status("[bold green]Reviewing..."):
            verdict = reviewer.quick_review(body)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise SystemExit(1)

    verdict_label = "[green]APPROVED[/green]" if verdict.approved else "[red]REJECTED[/red]"
    console.print(Panel(verdict.review, title=verdict_label))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@contextmanager
def _content_service() -> Iterator[ContentService]:
    """Yield a ContentService bound to a fresh session on the configured database."""
    from creatorops.config import get_settings
    from creatorops.content.service import ContentService
    from creatorops.llm.client import ClaudeClient
    from creatorops.log import configure_logging
    from creatorops.review.ai import AIReviewer
    from creatorops.storage.database import create_db_engine, get_session
    from creatorops.storage.store import ContentStore

    settings = get_settings()
    configure_logging("WARNING")
    engine = create_db_engine(settings.db_path)
    try:
        with get_session(engine) as session:
            yield ContentService(
                ContentStore(session),
                AIReviewer(ClaudeClient(settings), settings.review_guidelines),
                enforce_stage_order=settings.enforce_stage_order,
            )
    finally:
        engine.dispose()


def _status(value: str) -> str:
    style = STATUS_STYLE.get(value)
    return f"[{style}]{value}[/{style}]" if style else value


def _print_record(record: Content) -> None:
    console.print(
        Panel(
            f"[bold]{record.title}[/bold]\n"
            f"Influencer: {record.influencer_id}\n"
            f"Type: {record.type}  Status: {_status(record.status.value)}",
            subtitle=record.id,
        )
    )

    timeline = Table(title="Timeline")
    timeline.add_column("Milestone", width=18)
    timeline.add_column("When", width=25)
    for name, stamp in record.timeline.model_dump(by_alias=True).items():
        if stamp is not None:
            timeline.add_row(name, stamp.strftime("%Y-%m-%d %H:%M:%S"))
    console.print(timeline)

    if not record.reviews:
        console.print("[dim]No reviews yet.[/dim]")
        return

    reviews = Table(title="Reviews")
    reviews.add_column("Date", width=19)
    reviews.add_column("Stage", width=8)
    reviews.add_column("Reviewer", width=10)
    reviews.add_column("Feedback", width=50)
    reviews.add_column("Safe", width=5, justify="center")
    for r in record.reviews:
        safe = ""
        if r.ai_analysis is not None:
            safe = "[green]yes[/green]" if r.ai_analysis.brand_safety_check else "[red]no[/red]"
        reviews.add_row(
            r.date.strftime("%Y-%m-%d %H:%M:%S"), r.stage.value, r.reviewer, r.feedback[:50], safe
        )
    console.print(reviews)


def _check_api_key(settings: Settings) -> None:
    """Exit with a helpful message if the API key is not set."""
    if not settings.anthropic_api_key:
        console.print(
            "[bold red]Error:[/bold red] ANTHROPIC_API_KEY not set.\n"
            "Add it to .env in the project root."
        )
        raise SystemExit(1)
