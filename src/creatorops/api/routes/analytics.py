"""
creatorops API: Dashboard analytics routes.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from creatorops.api.deps import get_content_service, get_influencer_service
from creatorops.content.service import ContentService
from creatorops.roster.analytics import dashboard_metrics
from creatorops.roster.service import InfluencerService

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("/dashboard")
def get_dashboard_metrics(
    influencers: InfluencerService = Depends(get_influencer_service),
    content: ContentService = Depends(get_content_service),
):
    """Influencer, content and performance totals for the dashboard."""
    return dashboard_metrics(influencers.all(), content.all())
