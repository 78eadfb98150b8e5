"""Tests for the review state machine."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from creatorops.content.models import (
    AIAnalysis,
    Content,
    ContentStatus,
    ContentType,
    Stage,
)
from creatorops.content.workflow import (
    append_ai_review,
    apply_review,
    next_status,
    publish,
    review_status,
    submit_stage,
)
from creatorops.errors import InvalidTransition

T0 = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


def _record(**overrides) -> Content:
    data = {
        "influencer_id": "inf-1",
        "title": "Unboxing",
        "type": ContentType.VIDEO,
        "body": "First look at the new headphones.",
    }
    data.update(overrides)
    return Content(**data)


@pytest.mark.parametrize(
    ("stage", "approved", "expected"),
    [
        (Stage.CONCEPT, True, ContentStatus.SCRIPT_REVIEW),
        (Stage.SCRIPT, True, ContentStatus.VIDEO_REVIEW),
        (Stage.VIDEO, True, ContentStatus.APPROVED),
        (Stage.CONCEPT, False, ContentStatus.REJECTED),
        (Stage.SCRIPT, False, ContentStatus.REJECTED),
        (Stage.VIDEO, False, ContentStatus.REJECTED),
    ],
)
def test_next_status(stage: Stage, approved: bool, expected: ContentStatus) -> None:
    assert next_status(stage, approved) == expected


def test_review_status_names_the_stage() -> None:
    assert review_status(Stage.SCRIPT) == ContentStatus.SCRIPT_REVIEW


def test_full_approval_path() -> None:
    record = _record()
    for i, stage in enumerate(Stage):
        record = apply_review(record, stage, True, now=T0 + timedelta(hours=i))

    assert record.status == ContentStatus.APPROVED
    assert [r.stage for r in record.reviews] == list(Stage)
    assert record.timeline.video_reviewed == T0 + timedelta(hours=2)


def test_apply_review_does_not_mutate_input() -> None:
    record = _record()
    updated = apply_review(record, Stage.CONCEPT, True, "Nice hook", "maria", now=T0)

    assert record.status == ContentStatus.CONCEPT_REVIEW
    assert record.reviews == []
    assert record.timeline.concept_reviewed is None
    assert updated.reviews[-1].reviewer == "maria"
    assert updated.reviews[-1].feedback == "Nice hook"
    assert updated.updated_at == T0


def test_review_history_only_grows() -> None:
    record = apply_review(_record(), Stage.CONCEPT, True, now=T0)
    first = record.reviews[0]

    record = apply_review(record, Stage.SCRIPT, False, "Too long", now=T0 + timedelta(days=1))

    assert len(record.reviews) == 2
    assert record.reviews[0] == first


def test_review_defaults_to_system_reviewer() -> None:
    record = apply_review(_record(), Stage.CONCEPT, True, now=T0)
    assert record.reviews[0].reviewer == "System"


def test_review_stamps_missing_submission() -> None:
    record = apply_review(_record(), Stage.SCRIPT, True, now=T0)

    assert record.timeline.script_submitted == T0
    assert record.timeline.script_reviewed == T0


def test_review_keeps_existing_submission_time() -> None:
    record = submit_stage(_record(), Stage.SCRIPT, now=T0)
    record = apply_review(record, Stage.SCRIPT, True, now=T0 + timedelta(hours=3))

    assert record.timeline.script_submitted == T0
    assert record.timeline.script_reviewed - record.timeline.script_submitted == timedelta(hours=3)


def test_permissive_mode_applies_any_stage() -> None:
    # The record is awaiting concept review; a video decision still applies.
    record = apply_review(_record(), Stage.VIDEO, True, now=T0)
    assert record.status == ContentStatus.APPROVED


def test_enforced_stage_order_rejects_out_of_order_review() -> None:
    with pytest.raises(InvalidTransition):
        apply_review(_record(), Stage.VIDEO, True, now=T0, enforce_stage_order=True)


def test_enforced_stage_order_accepts_current_stage() -> None:
    record = apply_review(_record(), Stage.CONCEPT, True, now=T0, enforce_stage_order=True)
    record = apply_review(record, Stage.SCRIPT, True, now=T0, enforce_stage_order=True)
    assert record.status == ContentStatus.VIDEO_REVIEW


def test_status_stays_in_enumeration() -> None:
    record = _record()
    for stage in Stage:
        for approved in (True, False):
            record = apply_review(record, stage, approved, now=T0)
            assert record.status in set(ContentStatus)


def test_submit_stage_moves_to_stage_review() -> None:
    record = apply_review(_record(), Stage.CONCEPT, False, now=T0)
    record = submit_stage(record, Stage.CONCEPT, now=T0 + timedelta(days=2))

    assert record.status == ContentStatus.CONCEPT_REVIEW
    assert record.timeline.concept_submitted == T0 + timedelta(days=2)


def test_publish_requires_approval() -> None:
    with pytest.raises(InvalidTransition):
        publish(_record(), now=T0)


def test_publish_approved_record() -> None:
    record = apply_review(_record(), Stage.VIDEO, True, now=T0)
    record = publish(record, now=T0 + timedelta(hours=1))

    assert record.status == ContentStatus.PUBLISHED
    assert record.timeline.published == T0 + timedelta(hours=1)


def test_published_record_cannot_be_resubmitted() -> None:
    record = publish(apply_review(_record(), Stage.VIDEO, True, now=T0), now=T0)
    with pytest.raises(InvalidTransition):
        submit_stage(record, Stage.VIDEO, now=T0)


def test_append_ai_review_leaves_status_and_timeline() -> None:
    record = _record(type=Stage.CONCEPT)
    analysis = AIAnalysis(score=0.8, feedback="fine", brand_safety_check=True)

    updated = append_ai_review(record, Stage.CONCEPT, "fine", analysis, now=T0)

    assert updated.status == record.status
    assert updated.timeline == record.timeline
    assert updated.reviews[0].reviewer == "AI"
    assert updated.reviews[0].ai_analysis == analysis
