"""FastAPI dependencies resolving the services built in ``create_app``."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Header, Request
from sqlmodel import Session

from creatorops.config import Settings
from creatorops.content.service import ContentService
from creatorops.review.ai import AIReviewer
from creatorops.roster.service import ContractService, InfluencerService
from creatorops.storage.database import get_session
from creatorops.storage.store import ContentStore, ContractStore, InfluencerStore

DEFAULT_REVIEWER = "System"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_reviewer(request: Request) -> AIReviewer:
    return request.app.state.reviewer


def get_db(request: Request) -> Iterator[Session]:
    with get_session(request.app.state.db_engine) as session:
        yield session


def get_content_service(
    session: Session = Depends(get_db),
    reviewer: AIReviewer = Depends(get_reviewer),
    settings: Settings = Depends(get_settings),
) -> ContentService:
    return ContentService(
        ContentStore(session),
        reviewer,
        InfluencerStore(session),
        enforce_stage_order=settings.enforce_stage_order,
    )


def get_influencer_service(session: Session = Depends(get_db)) -> InfluencerService:
    return InfluencerService(InfluencerStore(session))


def get_contract_service(session: Session = Depends(get_db)) -> ContractService:
    return ContractService(ContractStore(session), InfluencerStore(session))


def get_reviewer_name(x_reviewer: str | None = Header(default=None)) -> str:
    """Reviewer identity is taken on trust from a header; nothing authenticates it."""
    return x_reviewer or DEFAULT_REVIEWER
