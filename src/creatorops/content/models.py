"""Content record data model: status enum, timeline, review history."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(UTC)


def new_id() -> str:
    return uuid.uuid4().hex


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ContentType(StrEnum):
    VIDEO = "video"
    POST = "post"
    STORY = "story"


class Stage(StrEnum):
    CONCEPT = "concept"
    SCRIPT = "script"
    VIDEO = "video"


class ContentStatus(StrEnum):
    DRAFT = "draft"
    CONCEPT_REVIEW = "concept_review"
    SCRIPT_REVIEW = "script_review"
    VIDEO_REVIEW = "video_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    PUBLISHED = "published"


# Stages whose text is screened by the AI reviewer at submission time.
AI_REVIEWED_STAGES = frozenset({Stage.CONCEPT, Stage.SCRIPT})

# Submissions may tag ``type`` with a stage name instead of a format.
# Both vocabularies are kept as sent; see DESIGN.md.
SubmissionType = ContentType | Stage


class AIAnalysis(CamelModel):
    score: float
    feedback: str
    brand_safety_check: bool


class Review(CamelModel):
    """One entry of the append-only review history."""

    model_config = ConfigDict(frozen=True)

    stage: Stage
    reviewer: str = "System"
    feedback: str = ""
    ai_analysis: AIAnalysis | None = None
    date: datetime = Field(default_factory=utcnow)


class Timeline(CamelModel):
    concept_submitted: datetime | None = None
    concept_reviewed: datetime | None = None
    script_submitted: datetime | None = None
    script_reviewed: datetime | None = None
    video_submitted: datetime | None = None
    video_reviewed: datetime | None = None
    published: datetime | None = None

    @field_validator("*")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def submitted(self, stage: Stage) -> datetime | None:
        return getattr(self, f"{stage.value}_submitted")

    def reviewed(self, stage: Stage) -> datetime | None:
        return getattr(self, f"{stage.value}_reviewed")

    def latest_review(self) -> datetime | None:
        stamps = [self.reviewed(s) for s in Stage if self.reviewed(s) is not None]
        return max(stamps) if stamps else None


class Metrics(CamelModel):
    views: int | None = None
    likes: int | None = None
    comments: int | None = None
    engagement: float | None = None
    update_date: datetime | None = None


class AdCode(CamelModel):
    code: str
    url: str | None = None
    clicks: int = 0


class Content(CamelModel):
    """A piece of influencer content moving through the review pipeline."""

    id: str = Field(default_factory=new_id)
    influencer_id: str
    title: str
    type: SubmissionType
    body: str = Field(default="", alias="content")
    status: ContentStatus = ContentStatus.CONCEPT_REVIEW
    timeline: Timeline = Field(default_factory=Timeline)
    reviews: list[Review] = Field(default_factory=list)
    metrics: Metrics = Field(default_factory=Metrics)
    ad_codes: list[AdCode] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    version: int = 0


class ContentCreate(CamelModel):
    """Body of POST /content. Status and reviews are not client-settable."""

    model_config = ConfigDict(extra="ignore")

    influencer_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    type: SubmissionType
    body: str = Field(default="", alias="content")
    timeline: Timeline = Field(default_factory=Timeline)
    metrics: Metrics = Field(default_factory=Metrics)
    ad_codes: list[AdCode] = Field(default_factory=list)


class ReviewDecision(CamelModel):
    """Body of PATCH /content/{id}/review."""

    stage: Stage
    approved: bool
    feedback: str = ""


class StageSubmission(CamelModel):
    stage: Stage



class InfluencerRef(CamelModel):
    """The influencer fields shown alongside a content record."""

    id: str
    name: str
    channel_name: str


class ContentView(Content):
    """Read view of a record. ``influencer`` is None when the id matches no profile."""

    influencer: InfluencerRef | None = None
