"""Influencer and contract operations."""

from __future__ import annotations

import math

import structlog

from creatorops.content.models import utcnow
from creatorops.content.service import DEFAULT_LIMIT, DEFAULT_PAGE, Page
from creatorops.errors import InvalidTransition, ValidationError
from creatorops.roster.models import (
    Contract,
    ContractCreate,
    ContractStatus,
    Influencer,
    InfluencerFields,
    InfluencerStatus,
)
from creatorops.storage.store import ContractStore, InfluencerStore

logger = structlog.get_logger(__name__)


class InfluencerService:
    def __init__(self, store: InfluencerStore) -> None:
        self._store = store

    def list(self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> Page:
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive integers")
        records = self._store.find(skip=(page - 1) * limit, limit=limit)
        total = self._store.count()
        return Page(data=records, page=page, total_pages=math.ceil(total / limit), total=total)

    def get(self, influencer_id: str) -> Influencer:
        return self._store.require(influencer_id)

    def all(self) -> list[Influencer]:
        return self._store.find()

    def create(self, data: InfluencerFields) -> Influencer:
        influencer = self._store.insert(Influencer(**data.model_dump()))
        logger.info("influencer.created", id=influencer.id)
        return influencer

    def replace(self, influencer_id: str, data: InfluencerFields) -> Influencer:
        """Overwrite every editable field; id, creation time and version are kept."""
        current = self._store.require(influencer_id)
        updated = current.model_copy(update=data.model_dump())
        return self._store.update(Influencer.model_validate(updated.model_dump()))

    def set_status(self, influencer_id: str, status: InfluencerStatus) -> Influencer:
        current = self._store.require(influencer_id)
        updated = self._store.update(current.model_copy(update={"status": status}))
        logger.info("influencer.status", id=influencer_id, status=status.value)
        return updated


# Allowed manual moves between contract states
CONTRACT_TRANSITIONS: dict[ContractStatus, frozenset[ContractStatus]] = {
    ContractStatus.DRAFT: frozenset({ContractStatus.SENT, ContractStatus.EXPIRED}),
    ContractStatus.SENT: frozenset({ContractStatus.SIGNED, ContractStatus.EXPIRED}),
    ContractStatus.SIGNED: frozenset({ContractStatus.EXPIRED}),
    ContractStatus.EXPIRED: frozenset(),
}


class ContractService:
    def __init__(self, store: ContractStore, influencers: InfluencerStore) -> None:
        self._store = store
        self._influencers = influencers

    def list(
        self,
        influencer_id: str | None = None,
        status: ContractStatus | None = None,
    ) -> list[Contract]:
        return self._store.find(
            influencer_id=influencer_id,
            status=status.value if status else None,
        )

    def get(self, contract_id: str) -> Contract:
        return self._store.require(contract_id)

    def create(self, data: ContractCreate) -> Contract:
        self._influencers.require(data.influencer_id)
        contract = self._store.insert(Contract(**data.model_dump()))
        logger.info("contract.created", id=contract.id, influencer_id=contract.influencer_id)
        return contract

    def set_status(self, contract_id: str, status: ContractStatus) -> Contract:
        current = self._store.require(contract_id)
        if status == current.status:
            return current
        if status not in CONTRACT_TRANSITIONS[current.status]:
            raise InvalidTransition(current.status.value, status.value)

        update: dict = {"status": status}
        if status == ContractStatus.SIGNED:
            update["signed_at"] = utcnow()
        updated = self._store.update(current.model_copy(update=update))
        logger.info("contract.status", id=contract_id, status=status.value)
        return updated

    def send(self, contract_id: str) -> Contract:
        current = self._store.require(contract_id)
        if current.status != ContractStatus.DRAFT:
            raise InvalidTransition(current.status.value, ContractStatus.SENT.value)
        return self.set_status(contract_id, ContractStatus.SENT)
