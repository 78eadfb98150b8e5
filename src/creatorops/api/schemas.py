"""Response envelopes shared by the list endpoints."""

from __future__ import annotations

from typing import Generic, TypeVar

from creatorops.content.models import CamelModel
from creatorops.content.service import Page

T = TypeVar("T")


class PageResponse(CamelModel, Generic[T]):
    data: list[T]
    page: int
    total_pages: int
    total: int

    @classmethod
    def from_page(cls, page: Page, data: list | None = None) -> PageResponse[T]:
        return cls(
            data=page.data if data is None else data,
            page=page.page,
            total_pages=page.total_pages,
            total=page.total,
        )


class QuickReviewRequest(CamelModel):
    content: str


class QuickReviewResponse(CamelModel):
    review: str
    approved: bool
