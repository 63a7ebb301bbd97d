"""
Contract controller.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.controllers.base_controller import BaseController
from invoicing.models.contract import ContractStatus
from invoicing.services.contract_service import ContractService
from invoicing.schemas.contract import ContractCreate, ContractResponse, ContractListResponse


class ContractController(BaseController):
    """Controller for contract operations."""

    def __init__(self, session: AsyncSession):
        self.contract_service = ContractService(session)

    async def create_contract(self, contract_data: ContractCreate) -> ContractResponse:
        """Create a new contract."""
        return await self.contract_service.create_contract(contract_data)

    async def get_contract(self, contract_id: UUID) -> Optional[ContractResponse]:
        """Get contract by ID."""
        return await self.contract_service.get_contract(contract_id)

    async def list_contracts(
        self,
        skip: int = 0,
        limit: int = 100,
        status: Optional[ContractStatus] = None,
        client_id: Optional[UUID] = None,
    ) -> ContractListResponse:
        """List contracts with optional filters."""
        contracts, total = await self.contract_service.list_contracts(
            skip=skip,
            limit=limit,
            status=status,
            client_id=client_id,
        )
        return ContractListResponse(items=contracts, total=total)

    async def deactivate_contract(self, contract_id: UUID) -> Optional[ContractResponse]:
        """Deactivate a contract."""
        return await self.contract_service.deactivate_contract(contract_id)
