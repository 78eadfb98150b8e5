"""Aggregate figures for influencer profiles and the dashboard."""

from __future__ import annotations

from collections import Counter
from statistics import mean

from creatorops.content.models import Content, ContentStatus
from creatorops.roster.models import Influencer, InfluencerStatus

APPROVED_STATUSES = frozenset({ContentStatus.APPROVED, ContentStatus.PUBLISHED})
PENDING_STATUSES = frozenset(
    {ContentStatus.CONCEPT_REVIEW, ContentStatus.SCRIPT_REVIEW, ContentStatus.VIDEO_REVIEW}
)
DECIDED_STATUSES = APPROVED_STATUSES | {ContentStatus.REJECTED}


def average_review_time(records: list[Content]) -> float:
    """Mean seconds from concept submission to the latest review decision.

    Records without both timestamps are skipped; 0 when none qualify.
    """
    durations = []
    for record in records:
        submitted = record.timeline.concept_submitted
        reviewed = record.timeline.latest_review()
        if submitted and reviewed:
            durations.append((reviewed - submitted).total_seconds())
    return mean(durations) if durations else 0


def influencer_analytics(influencer: Influencer, records: list[Content]) -> dict:
    return {
        "metrics": influencer.metrics.model_dump(by_alias=True),
        "contentStats": {
            "total": len(records),
            "approved": sum(1 for r in records if r.status in APPROVED_STATUSES),
            "averageReviewTime": average_review_time(records),
        },
    }


def dashboard_metrics(influencers: list[Influencer], records: list[Content]) -> dict:
    rates = [
        i.metrics.engagement_rate for i in influencers if i.metrics.engagement_rate is not None
    ]
    decided = [r for r in records if r.status in DECIDED_STATUSES]
    approved = [r for r in decided if r.status in APPROVED_STATUSES]
    by_type = Counter(str(r.type) for r in records)
    views = sum(r.metrics.views or 0 for r in records)
    engagements = sum((r.metrics.likes or 0) + (r.metrics.comments or 0) for r in records)

    return {
        "influencerMetrics": {
            "totalInfluencers": len(influencers),
            "activeInfluencers": sum(
                1 for i in influencers if i.status == InfluencerStatus.ACTIVE
            ),
            "averageEngagementRate": mean(rates) if rates else 0,
        },
        "contentMetrics": {
            "totalContent": len(records),
            "pendingReviews": sum(1 for r in records if r.status in PENDING_STATUSES),
            "approvalRate": len(approved) / len(decided) if decided else 0,
            "contentByType": [
                {"type": t, "count": n} for t, n in sorted(by_type.items())
            ],
        },
        "performanceMetrics": {
            "totalViews": views,
            "totalEngagements": engagements,
            "averageViewsPerContent": views / len(records) if records else 0,
        },
    }
