"""
creatorops API: Influencer routes.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from creatorops.api.deps import get_content_service, get_influencer_service
from creatorops.api.schemas import PageResponse
from creatorops.content.service import DEFAULT_LIMIT, DEFAULT_PAGE, ContentService
from creatorops.roster.analytics import influencer_analytics
from creatorops.roster.models import (
    Influencer,
    InfluencerFields,
    InfluencerStatusUpdate,
    InfluencerSummary,
)
from creatorops.roster.service import InfluencerService

router = APIRouter(prefix="/influencers", tags=["Influencers"])


@router.get("", response_model=PageResponse[InfluencerSummary])
def list_influencers(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1),
    service: InfluencerService = Depends(get_influencer_service),
):
    """List influencers; payment history is left out of the listing."""
    result = service.list(page=page, limit=limit)
    summaries = [InfluencerSummary.model_validate(i.model_dump()) for i in result.data]
    return PageResponse[InfluencerSummary].from_page(result, summaries)


@router.post("", response_model=Influencer, status_code=201)
def create_influencer(
    data: InfluencerFields,
    service: InfluencerService = Depends(get_influencer_service),
):
    return service.create(data)


@router.get("/{influencer_id}", response_model=Influencer)
def get_influencer(
    influencer_id: str,
    service: InfluencerService = Depends(get_influencer_service),
):
    return service.get(influencer_id)


@router.put("/{influencer_id}", response_model=Influencer)
def update_influencer(
    influencer_id: str,
    data: InfluencerFields,
    service: InfluencerService = Depends(get_influencer_service),
):
    return service.replace(influencer_id, data)


@router.patch("/{influencer_id}/status", response_model=Influencer)
def update_influencer_status(
    influencer_id: str,
    body: InfluencerStatusUpdate,
    service: InfluencerService = Depends(get_influencer_service),
):
    return service.set_status(influencer_id, body.status)


@router.get("/{influencer_id}/analytics")
def get_influencer_analytics(
    influencer_id: str,
    service: InfluencerService = Depends(get_influencer_service),
    content: ContentService = Depends(get_content_service),
):
    """Profile metrics plus review statistics over the influencer's content."""
    influencer = service.get(influencer_id)
    records = content.for_influencer(influencer_id)
    return influencer_analytics(influencer, records)
