"""SQLModel tables: one JSON document per row plus indexed query columns."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class ContentRecord(SQLModel, table=True):
    """Persisted content document."""

    __tablename__ = "content"

    id: str = Field(primary_key=True)
    influencer_id: str = Field(index=True)
    status: str = Field(index=True)
    type: str
    created_at: datetime = Field(index=True)
    version: int = 0
    document: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))


class InfluencerRecord(SQLModel, table=True):
    """Persisted influencer profile."""

    __tablename__ = "influencer"

    id: str = Field(primary_key=True)
    email: str = Field(index=True, unique=True)
    status: str = Field(index=True)
    created_at: datetime = Field(index=True)
    version: int = 0
    document: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))


class ContractRecord(SQLModel, table=True):
    """Persisted influencer contract."""

    __tablename__ = "contract"

    id: str = Field(primary_key=True)
    influencer_id: str = Field(index=True)
    status: str = Field(index=True)
    created_at: datetime = Field(index=True)
    version: int = 0
    document: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
