"""Influencer and contract records."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import ConfigDict, EmailStr, Field

from creatorops.content.models import CamelModel, new_id, utcnow


class InfluencerStatus(StrEnum):
    PENDING = "pending"
    ACTIVE = "active"
    PAUSED = "paused"
    TERMINATED = "terminated"


class AgreementStatus(StrEnum):
    """Contract state as tracked on the influencer profile."""

    PENDING = "pending"
    SENT = "sent"
    SIGNED = "signed"
    EXPIRED = "expired"


class PaymentStatus(StrEnum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class ContractStatus(StrEnum):
    DRAFT = "draft"
    SENT = "sent"
    SIGNED = "signed"
    EXPIRED = "expired"


class InfluencerMetrics(CamelModel):
    subscribers: int | None = None
    average_views: int | None = None
    engagement_rate: float | None = None


class Agreement(CamelModel):
    status: AgreementStatus = AgreementStatus.PENDING
    signed_date: datetime | None = None
    expiry_date: datetime | None = None


class Payment(CamelModel):
    amount: float
    date: datetime | None = None
    status: PaymentStatus = PaymentStatus.PENDING


class InfluencerFields(CamelModel):
    """Client-editable influencer fields (POST and PUT bodies)."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    email: EmailStr
    channel_name: str = Field(min_length=1)
    youtube_link: str | None = None
    status: InfluencerStatus = InfluencerStatus.PENDING
    metrics: InfluencerMetrics = Field(default_factory=InfluencerMetrics)
    contract: Agreement = Field(default_factory=Agreement)
    payments: list[Payment] = Field(default_factory=list)


class Influencer(InfluencerFields):
    id: str = Field(default_factory=new_id)
    created_at: datetime = Field(default_factory=utcnow)
    version: int = 0


class InfluencerSummary(CamelModel):
    """List view: everything except payment history."""

    id: str
    name: str
    email: str
    channel_name: str
    youtube_link: str | None = None
    status: InfluencerStatus
    metrics: InfluencerMetrics
    contract: Agreement
    created_at: datetime


class InfluencerStatusUpdate(CamelModel):
    status: InfluencerStatus


class ContractTerms(CamelModel):
    payment_terms: str | None = None
    deliverables: list[str] = Field(default_factory=list)
    compensation: float | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class ContractCreate(CamelModel):
    model_config = ConfigDict(extra="ignore")

    influencer_id: str = Field(min_length=1)
    template_id: str | None = None
    content: str = ""
    expires_at: datetime | None = None
    metadata: ContractTerms = Field(default_factory=ContractTerms)


class Contract(ContractCreate):
    id: str = Field(default_factory=new_id)
    status: ContractStatus = ContractStatus.DRAFT
    created_at: datetime = Field(default_factory=utcnow)
    signed_at: datetime | None = None
    version: int = 0


class ContractStatusUpdate(CamelModel):
    status: ContractStatus
