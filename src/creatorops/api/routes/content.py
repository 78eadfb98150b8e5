"""
creatorops API: Content review routes.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from creatorops.api.deps import get_content_service, get_reviewer_name
from creatorops.api.schemas import PageResponse
from creatorops.content.models import (
    Content,
    ContentCreate,
    ContentStatus,
    ContentView,
    ReviewDecision,
    StageSubmission,
)
from creatorops.content.service import DEFAULT_LIMIT, DEFAULT_PAGE, ContentService

router = APIRouter(prefix="/content", tags=["Content"])


@router.get("", response_model=PageResponse[ContentView])
def list_content(
    status: ContentStatus | None = None,
    influencer_id: str | None = Query(default=None, alias="influencerId"),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1),
    service: ContentService = Depends(get_content_service),
):
    """List content with optional status/influencer filters, offset-paginated."""
    result = service.list(status=status, influencer_id=influencer_id, page=page, limit=limit)
    return PageResponse[ContentView].from_page(result, service.with_influencers(result.data))


@router.post("", response_model=Content, status_code=201)
def submit_content(
    data: ContentCreate,
    service: ContentService = Depends(get_content_service),
):
    """Submit new content. Concepts and scripts are screened by the AI reviewer."""
    return service.submit(data)


@router.get("/{content_id}", response_model=ContentView)
def get_content(content_id: str, service: ContentService = Depends(get_content_service)):
    [view] = service.with_influencers([service.get(content_id)])
    return view


@router.patch("/{content_id}/review", response_model=Content)
def review_content(
    content_id: str,
    decision: ReviewDecision,
    reviewer: str = Depends(get_reviewer_name),
    service: ContentService = Depends(get_content_service),
):
    """Record an approve/reject decision for one stage and advance the status."""
    return service.review(content_id, decision, reviewer)


@router.patch("/{content_id}/submit", response_model=Content)
def submit_stage(
    content_id: str,
    submission: StageSubmission,
    service: ContentService = Depends(get_content_service),
):
    """Record that a stage's material was handed in and is awaiting review."""
    return service.submit_stage(content_id, submission.stage)


@router.post("/{content_id}/publish", response_model=Content)
def publish_content(content_id: str, service: ContentService = Depends(get_content_service)):
    return service.publish(content_id)
