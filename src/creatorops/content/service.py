"""Content operations shared by the HTTP API and the CLI."""

from __future__ import annotations

import math
from dataclasses import dataclass

import structlog

from creatorops.content import workflow
from creatorops.content.models import (
    AI_REVIEWED_STAGES,
    Content,
    ContentCreate,
    ContentStatus,
    ContentView,
    InfluencerRef,
    ReviewDecision,
    Stage,
    utcnow,
)
from creatorops.errors import ValidationError
from creatorops.review.ai import AIReviewer
from creatorops.storage.store import ContentStore, InfluencerStore

logger = structlog.get_logger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50


@dataclass
class Page:
    """One page of a listing."""

    data: list[Content]
    page: int
    total_pages: int
    total: int


class ContentService:
    """Ties the content store, the workflow engine and the AI reviewer together."""

    def __init__(
        self,
        store: ContentStore,
        reviewer: AIReviewer,
        influencers: InfluencerStore | None = None,
        *,
        enforce_stage_order: bool = False,
    ) -> None:
        self._store = store
        self._influencers = influencers
        self._reviewer = reviewer
        self._enforce_stage_order = enforce_stage_order

    def list(
        self,
        status: ContentStatus | None = None,
        influencer_id: str | None = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> Page:
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive integers")
        skip = (page - 1) * limit
        records, total = self._store.list(
            status=status.value if status else None,
            influencer_id=influencer_id,
            skip=skip,
            limit=limit,
        )
        return Page(data=records, page=page, total_pages=math.ceil(total / limit), total=total)

    def get(self, content_id: str) -> Content:
        return self._store.require(content_id)

    def for_influencer(self, influencer_id: str) -> list[Content]:
        return self._store.find(influencer_id=influencer_id)

    def all(self) -> list[Content]:
        return self._store.find()

    def with_influencers(self, records: list[Content]) -> list[ContentView]:
        """Attach each record's influencer name and channel."""
        refs: dict[str, InfluencerRef] = {}
        if self._influencers is not None:
            for influencer_id in {r.influencer_id for r in records}:
                influencer = self._influencers.get(influencer_id)
                if influencer is not None:
                    refs[influencer_id] = InfluencerRef(
                        id=influencer.id,
                        name=influencer.name,
                        channel_name=influencer.channel_name,
                    )
        return [
            ContentView(**r.model_dump(), influencer=refs.get(r.influencer_id)) for r in records
        ]

    def submit(self, data: ContentCreate) -> Content:
        """Create a record awaiting concept review.

        Submissions typed ``concept`` or ``script`` are screened by the AI
        reviewer first; a failed screening is recorded, not raised.
        """
        now = utcnow()
        record = Content(
            influencer_id=data.influencer_id,
            title=data.title,
            type=data.type,
            body=data.body,
            status=ContentStatus.CONCEPT_REVIEW,
            timeline=data.timeline.model_copy(update={"concept_submitted": now}),
            metrics=data.metrics,
            ad_codes=data.ad_codes,
            created_at=now,
            updated_at=now,
        )

        if record.type in AI_REVIEWED_STAGES:
            stage = Stage(record.type)
            result = self._reviewer.review(record.body, stage)
            record = workflow.append_ai_review(
                record, stage, result.feedback, result.to_analysis(), now=now
            )

        record = self._store.insert(record)
        logger.info(
            "content.submitted", id=record.id, type=str(record.type), reviews=len(record.reviews)
        )
        return record

    def review(self, content_id: str, decision: ReviewDecision, reviewer: str = "System") -> Content:
        record = self._store.require(content_id)
        updated = workflow.apply_review(
            record,
            decision.stage,
            decision.approved,
            decision.feedback,
            reviewer,
            enforce_stage_order=self._enforce_stage_order,
        )
        updated = self._store.update(updated)
        logger.info(
            "content.reviewed",
            id=content_id,
            stage=decision.stage.value,
            approved=decision.approved,
            status=updated.status.value,
            reviewer=reviewer,
        )
        return updated

    def submit_stage(self, content_id: str, stage: Stage) -> Content:
        record = self._store.require(content_id)
        updated = self._store.update(workflow.submit_stage(record, stage))
        logger.info("content.stage_submitted", id=content_id, stage=stage.value)
        return updated

    def publish(self, content_id: str) -> Content:
        record = self._store.require(content_id)
        updated = self._store.update(workflow.publish(record))
        logger.info("content.published", id=content_id)
        return updated
