"""
creatorops API: Campaign content review route.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from creatorops.api.deps import get_reviewer
from creatorops.api.schemas import QuickReviewRequest, QuickReviewResponse
from creatorops.review.ai import AIReviewer

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Review"])


@router.post("/review", response_model=QuickReviewResponse)
def review_text(body: QuickReviewRequest, reviewer: AIReviewer = Depends(get_reviewer)):
    """Ask the model for a verdict on free text; approved unless it answers REJECTED."""
    try:
        verdict = reviewer.quick_review(body.content)
    except Exception as e:
        logger.error("quick_review.failed", error=str(e))
        return JSONResponse(status_code=500, content={"error": "Error processing content review"})
    return QuickReviewResponse(review=verdict.review, approved=verdict.approved)
