"""System prompts for the AI reviewer, rendered from jinja2 templates."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

_TEMPLATE_DIR = Path(__file__).parent.parent / "templates"

STAGE_REVIEW_TEMPLATE = "stage_review.j2"
CAMPAIGN_REVIEW_TEMPLATE = "campaign_review.j2"

# A missing variable is a template bug, not an empty string
_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render(template_name: str, **context: object) -> str:
    return _env.get_template(template_name).render(**context).strip()


def stage_review_prompt(stage: str, guidelines: list[str] | None = None) -> str:
    """Reviewer instructions for one stage's submission, plus any brand rules."""
    return render(STAGE_REVIEW_TEMPLATE, stage=stage, guidelines=guidelines or [])


def campaign_review_prompt() -> str:
    return render(CAMPAIGN_REVIEW_TEMPLATE)
