"""
Contract API endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from invoicing.db.session import get_db
from invoicing.controllers.contract_controller import ContractController
from invoicing.models.contract import ContractStatus
from invoicing.schemas.contract import (
    ContractCreate,
    ContractResponse,
    ContractListResponse,
)

router = APIRouter()


@router.post("", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
async def create_contract(
    contract_data: ContractCreate,
    db: AsyncSession = Depends(get_db),
) -> ContractResponse:
    """Create a contract; totals and contract number are computed server side."""
    controller = ContractController(db)
    return await controller.create_contract(contract_data)


@router.get("", response_model=ContractListResponse)
async def list_contracts(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    status: Optional[ContractStatus] = Query(None),
    client_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> ContractListResponse:
    """List contracts with optional filters."""
    controller = ContractController(db)
    return await controller.list_contracts(
        skip=skip,
        limit=limit,
        status=status,
        client_id=client_id,
    )


@router.get("/{contract_id}", response_model=ContractResponse)
async def get_contract(
    contract_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ContractResponse:
    """Get contract by ID."""
    controller = ContractController(db)
    contract = await controller.get_contract(contract_id)
    if not contract:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Contract not found",
        )
    return contract


@router.post("/{contract_id}/deactivate", response_model=ContractResponse)
async def deactivate_contract(
    contract_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ContractResponse:
    """Deactivate a contract."""
    controller = ContractController(db)
    contract = await controller.deactivate_contract(contract_id)
    if not contract:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Contract not found",
        )
    return contract
