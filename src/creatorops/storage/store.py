"""Document stores over SQLModel tables.

Each store persists a pydantic model as a JSON document and mirrors the
fields it is queried by into indexed columns. Writes check the ``version``
the caller read against the stored one, so a stale read cannot silently
overwrite a newer record.
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

import structlog
from pydantic import BaseModel
from sqlalchemy import update as sql_update
from sqlmodel import Session, SQLModel, func, select

from creatorops.content.models import Content
from creatorops.errors import ResourceNotFoundError, StaleRecordError, ValidationError
from creatorops.roster.models import Contract, Influencer
from creatorops.storage.models import ContentRecord, ContractRecord, InfluencerRecord

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

# Alias to avoid shadowing by the ``list`` methods below
_list = list


class DocumentStore(Generic[M]):
    """CRUD over one collection. Subclasses bind the table and model."""

    table: ClassVar[type[SQLModel]]
    model: ClassVar[type[BaseModel]]
    resource: ClassVar[str]
    indexed: ClassVar[tuple[str, ...]] = ()

    def __init__(self, session: Session) -> None:
        self._session = session

    # ── Private helpers ──────────────────────────────────────────

    def _columns(self, doc: M) -> dict[str, Any]:
        values = {name: getattr(doc, name) for name in self.indexed}
        return {k: (v.value if hasattr(v, "value") else v) for k, v in values.items()}

    def _to_document(self, doc: M) -> dict[str, Any]:
        return doc.model_dump(mode="json", by_alias=True)

    def _from_row(self, row: Any) -> M:
        return self.model.model_validate(row.document)

    def _where(self, stmt: Any, filters: dict[str, Any]) -> Any:
        for name, value in filters.items():
            if value is None:
                continue
            stmt = stmt.where(getattr(self.table, name) == value)
        return stmt

    # ── Read operations ──────────────────────────────────────────

    def get(self, doc_id: str) -> M | None:
        """Return a document by id, or None if not found."""
        row = self._session.get(self.table, doc_id)
        return self._from_row(row) if row is not None else None

    def require(self, doc_id: str) -> M:
        """Return a document by id.

        Raises ResourceNotFoundError if the id does not exist.
        """
        doc = self.get(doc_id)
        if doc is None:
            raise ResourceNotFoundError(self.resource, doc_id)
        return doc

    def count(self, **filters: Any) -> int:
        stmt = self._where(select(func.count()).select_from(self.table), filters)
        return self._session.exec(stmt).one()

    def find(self, *, skip: int = 0, limit: int | None = None, **filters: Any) -> _list[M]:
        """Return documents matching ``filters`` in creation order."""
        stmt = self._where(select(self.table), filters)
        stmt = stmt.order_by(self.table.created_at, self.table.id).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        return [self._from_row(row) for row in self._session.exec(stmt).all()]

    # ── Write operations ─────────────────────────────────────────

    def insert(self, doc: M) -> M:
        """Persist a new document at version 1."""
        doc = doc.model_copy(update={"version": 1})
        row = self.table(
            id=doc.id,
            created_at=doc.created_at,
            version=doc.version,
            document=self._to_document(doc),
            **self._columns(doc),
        )
        self._session.add(row)
        self._session.commit()
        logger.info("store.insert", resource=self.resource, id=doc.id)
        return doc

    def update(self, doc: M) -> M:
        """Replace a stored document in place.

        ``doc.version`` must match the stored version; the write bumps it.
        The version is compared in the UPDATE's WHERE clause, so the check
        and the write are one statement. Raises ResourceNotFoundError or
        StaleRecordError.
        """
        expected = doc.version
        doc = doc.model_copy(update={"version": expected + 1})
        result = self._session.execute(
            sql_update(self.table)
            .where(self.table.id == doc.id, self.table.version == expected)
            .values(version=doc.version, document=self._to_document(doc), **self._columns(doc))
        )

        if result.rowcount == 0:
            self._session.rollback()
            row = self._session.get(self.table, doc.id, populate_existing=True)
            if row is None:
                raise ResourceNotFoundError(self.resource, doc.id)
            raise StaleRecordError(self.resource, doc.id, expected, row.version)

        self._session.commit()
        logger.info("store.update", resource=self.resource, id=doc.id, version=doc.version)
        return doc


class ContentStore(DocumentStore[Content]):
    table = ContentRecord
    model = Content
    resource = "Content"
    indexed = ("influencer_id", "status", "type")

    def list(
        self,
        status: str | None = None,
        influencer_id: str | None = None,
        *,
        skip: int = 0,
        limit: int | None = None,
    ) -> tuple[_list[Content], int]:
        """Return one page of matching content plus the total match count."""
        filters = {"status": status, "influencer_id": influencer_id}
        return self.find(skip=skip, limit=limit, **filters), self.count(**filters)


class InfluencerStore(DocumentStore[Influencer]):
    table = InfluencerRecord
    model = Influencer
    resource = "Influencer"
    indexed = ("email", "status")

    def _check_email(self, doc: Influencer) -> None:
        stmt = select(InfluencerRecord.id).where(InfluencerRecord.email == doc.email)
        owner = self._session.exec(stmt).first()
        if owner is not None and owner != doc.id:
            raise ValidationError(f"Influencer with email '{doc.email}' already exists")

    def insert(self, doc: Influencer) -> Influencer:
        self._check_email(doc)
        return super().insert(doc)

    def update(self, doc: Influencer) -> Influencer:
        self._check_email(doc)
        return super().update(doc)


class ContractStore(DocumentStore[Contract]):
    table = ContractRecord
    model = Contract
    resource = "Contract"
    indexed = ("influencer_id", "status")

