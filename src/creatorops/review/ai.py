"""AI-assisted screening of submitted concepts and scripts."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from creatorops.content.models import AIAnalysis, Stage
from creatorops.llm.client import ClaudeClient
from creatorops.llm.prompts import campaign_review_prompt, stage_review_prompt

logger = structlog.get_logger(__name__)

# The model's reply is not parsed for a score; every successful review gets this.
PLACEHOLDER_SCORE = 0.8

UNSAFE_MARKER = "unsafe"
REJECTED_MARKER = "REJECTED"
FAILED_FEEDBACK = "AI review failed"


@dataclass(frozen=True)
class AIReviewResult:
    """Output of a stage review."""

    score: float
    feedback: str
    detailed_feedback: str
    is_safe: bool

    def to_analysis(self) -> AIAnalysis:
        return AIAnalysis(
            score=self.score,
            feedback=self.detailed_feedback,
            brand_safety_check=self.is_safe,
        )


@dataclass(frozen=True)
class QuickReview:
    """Output of the campaign-level review endpoint."""

    review: str
    approved: bool


class AIReviewer:
    """Sends content text to Claude and turns the reply into a judgment.

    The two entry points read the reply differently:

    - ``review`` (submission screening): safe unless the reply mentions
      "unsafe" in any case; never raises.
    - ``quick_review`` (``POST /review``): approved unless the reply contains
      the exact string "REJECTED"; model errors propagate.
    """

    def __init__(self, client: ClaudeClient, guidelines: list[str] | None = None) -> None:
        self._client = client
        self._guidelines = guidelines or []

    def review(self, text: str, stage: Stage | str) -> AIReviewResult:
        """Screen ``text`` submitted for ``stage``.

        Any failure talking to the model yields a failed, unsafe result
        instead of an exception, so content submission can always proceed.
        """
        stage_name = str(stage)
        system = stage_review_prompt(stage_name, self._guidelines)
        try:
            analysis = self._client.ask(system, text)
        except Exception as e:
            logger.error("ai_review.failed", stage=stage_name, error=str(e))
            return AIReviewResult(
                score=0,
                feedback=FAILED_FEEDBACK,
                detailed_feedback=str(e),
                is_safe=False,
            )

        is_safe = UNSAFE_MARKER not in analysis.lower()
        logger.info("ai_review.completed", stage=stage_name, is_safe=is_safe)
        return AIReviewResult(
            score=PLACEHOLDER_SCORE,
            feedback=analysis,
            detailed_feedback=analysis,
            is_safe=is_safe,
        )

    def quick_review(self, text: str) -> QuickReview:
        """Campaign review of free text. Raises whatever the client raises."""
        reply = self._client.ask(campaign_review_prompt(), text)
        return QuickReview(review=reply, approved=REJECTED_MARKER not in reply)
