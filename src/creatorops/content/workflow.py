"""Review workflow state machine.

Every function here takes a ``Content`` and returns a new one; the input is
never mutated. Review history only ever grows.

    concept approved  -> script_review
    script approved   -> video_review
    video approved    -> approved
    any stage denied  -> rejected
    approved          -> published   (publish step)
"""

from __future__ import annotations

from datetime import datetime

from creatorops.content.models import (
    AIAnalysis,
    Content,
    ContentStatus,
    Review,
    Stage,
    utcnow,
)
from creatorops.errors import InvalidTransition

APPROVAL_MAP: dict[Stage, ContentStatus] = {
    Stage.CONCEPT: ContentStatus.SCRIPT_REVIEW,
    Stage.SCRIPT: ContentStatus.VIDEO_REVIEW,
    Stage.VIDEO: ContentStatus.APPROVED,
}

CLOSED_STATUSES = frozenset({ContentStatus.PUBLISHED})


def review_status(stage: Stage) -> ContentStatus:
    """The status a record sits in while ``stage`` awaits a decision."""
    return ContentStatus(f"{stage.value}_review")


def next_status(stage: Stage, approved: bool) -> ContentStatus:
    """Transition function: the status after a decision on ``stage``."""
    if not approved:
        return ContentStatus.REJECTED
    return APPROVAL_MAP[Stage(stage)]


def apply_review(
    record: Content,
    stage: Stage,
    approved: bool,
    feedback: str = "",
    reviewer: str = "System",
    *,
    now: datetime | None = None,
    enforce_stage_order: bool = False,
) -> Content:
    """Record a review decision and compute the record's next state.

    By default the stage is not checked against the current status, so a
    decision on any stage is applied as given. With ``enforce_stage_order``
    the record must be in ``<stage>_review``; otherwise InvalidTransition.
    """
    stage = Stage(stage)
    now = now or utcnow()

    if enforce_stage_order and record.status != review_status(stage):
        raise InvalidTransition(record.status.value, f"review:{stage.value}")

    # ValueError here means the map itself is wrong, not the request.
    status = ContentStatus(next_status(stage, approved))

    timeline_update = {f"{stage.value}_reviewed": now}
    if record.timeline.submitted(stage) is None:
        timeline_update[f"{stage.value}_submitted"] = now

    review = Review(stage=stage, reviewer=reviewer, feedback=feedback, date=now)
    return record.model_copy(
        update={
            "status": status,
            "timeline": record.timeline.model_copy(update=timeline_update),
            "reviews": [*record.reviews, review],
            "updated_at": now,
        }
    )


def submit_stage(record: Content, stage: Stage, *, now: datetime | None = None) -> Content:
    """Mark ``stage`` as submitted and put the record under review for it."""
    stage = Stage(stage)
    now = now or utcnow()
    if record.status in CLOSED_STATUSES:
        raise InvalidTransition(record.status.value, f"submit:{stage.value}")

    return record.model_copy(
        update={
            "status": review_status(stage),
            "timeline": record.timeline.model_copy(
                update={f"{stage.value}_submitted": now}
            ),
            "updated_at": now,
        }
    )


def publish(record: Content, *, now: datetime | None = None) -> Content:
    """Move an approved record to published."""
    if record.status != ContentStatus.APPROVED:
        raise InvalidTransition(record.status.value, "publish")
    now = now or utcnow()
    return record.model_copy(
        update={
            "status": ContentStatus.PUBLISHED,
            "timeline": record.timeline.model_copy(update={"published": now}),
            "updated_at": now,
        }
    )


def append_ai_review(
    record: Content,
    stage: Stage,
    feedback: str,
    analysis: AIAnalysis,
    *,
    now: datetime | None = None,
) -> Content:
    """Attach the submission-time AI judgment. Status and timeline are untouched."""
    review = Review(
        stage=Stage(stage),
        reviewer="AI",
        feedback=feedback,
        ai_analysis=analysis,
        date=now or utcnow(),
    )
    return record.model_copy(update={"reviews": [*record.reviews, review]})
