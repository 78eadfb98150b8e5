"""
creatorops API: Contract routes.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from creatorops.api.deps import get_contract_service
from creatorops.roster.models import Contract, ContractCreate, ContractStatus, ContractStatusUpdate
from creatorops.roster.service import ContractService

router = APIRouter(prefix="/contracts", tags=["Contracts"])


@router.get("", response_model=list[Contract])
def list_contracts(
    influencer_id: str | None = Query(default=None, alias="influencerId"),
    status: ContractStatus | None = None,
    service: ContractService = Depends(get_contract_service),
):
    return service.list(influencer_id=influencer_id, status=status)


@router.post("", response_model=Contract, status_code=201)
def create_contract(
    data: ContractCreate,
    service: ContractService = Depends(get_contract_service),
):
    """Create a draft contract for an existing influencer."""
    return service.create(data)


@router.get("/{contract_id}", response_model=Contract)
def get_contract(contract_id: str, service: ContractService = Depends(get_contract_service)):
    return service.get(contract_id)


@router.patch("/{contract_id}/status", response_model=Contract)
def update_contract_status(
    contract_id: str,
    body: ContractStatusUpdate,
    service: ContractService = Depends(get_contract_service),
):
    return service.set_status(contract_id, body.status)


@router.post("/{contract_id}/send", response_model=Contract)
def send_contract(contract_id: str, service: ContractService = Depends(get_contract_service)):
    """Mark a draft contract as sent to the influencer."""
    return service.send(contract_id)
