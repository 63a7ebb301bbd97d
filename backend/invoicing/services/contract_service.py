"""
Contract service with business logic for pricing, totals and numbering.
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from invoicing.core.config import settings
from invoicing.core.exceptions import ConflictException, FailedPreconditionException, NotFoundException
from invoicing.services.base_service import BaseService
from invoicing.db.repositories.client_repository import ClientRepository
from invoicing.db.repositories.contract_repository import ContractRepository
from invoicing.db.repositories.document_counter_repository import DocumentCounterRepository
from invoicing.db.repositories.product_repository import ProductRepository
from invoicing.models.contract import Contract, ContractLineItem, ContractStatus
from invoicing.schemas.contract import ContractCreate, ContractResponse
from invoicing.utils.document_numbering import next_document_number_async
from invoicing.utils.invoice_math import compute_totals, to_rate
from invoicing.utils.invoice_projection import price_line_items

logger = logging.getLogger(__name__)


class ContractService(BaseService):
    """Service for contract operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.contract_repo = ContractRepository(session)
        self.client_repo = ClientRepository(session)
        self.product_repo = ProductRepository(session)
        self.counter_repo = DocumentCounterRepository(session)

    async def create_contract(self, contract_data: ContractCreate) -> ContractResponse:
        """Create a contract, pricing its lines and assigning its number."""
        client = await self.client_repo.get(contract_data.client_id)
        if not client:
            raise NotFoundException("Client not found", details={"client_id": str(contract_data.client_id)})
        if not client.is_active:
            raise FailedPreconditionException(
                f"Client {client.name} is inactive",
                details={"client_id": str(client.id)},
            )

        products = await self.product_repo.get_many(line.product_id for line in contract_data.line_items)
        lines = price_line_items(contract_data.line_items, products)
        tax_rate = to_rate(contract_data.tax_rate if contract_data.tax_rate is not None else settings.DEFAULT_TAX_RATE)
        totals = compute_totals(lines, tax_rate)

        contract = Contract(
            client_id=client.id,
            title=contract_data.title,
            description=contract_data.description,
            start_date=contract_data.start_date,
            end_date=contract_data.end_date,
            status=contract_data.status,
            is_active=True,
            terms=contract_data.terms,
            payment_terms=contract_data.payment_terms,
            currency=contract_data.currency or client.currency or settings.DEFAULT_CURRENCY,
            billing_cycle=contract_data.billing_cycle,
            auto_renew=contract_data.auto_renew,
            renewal_term_months=contract_data.renewal_term_months,
            tax_rate=tax_rate,
            subtotal=totals.subtotal,
            tax=totals.tax,
            total_amount=totals.total,
            notes=contract_data.notes,
            line_items=[
                ContractLineItem(
                    product_id=line.product_id,
                    description=line.description,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    discount=line.discount,
                    amount=line.amount,
                    notes=line.notes,
                    row_order=line.row_order,
                )
                for line in lines
            ],
        )
        contract_number = await self._assign_number(contract)

        try:
            await self.contract_repo.add(contract)
        except IntegrityError:
            await self.session.rollback()
            raise ConflictException(
                f"Contract number {contract_number} is already in use",
                details={"contract_number": contract_number},
            )
        await self.session.commit()

        logger.info(
            "Contract created",
            extra={
                "contract_id": str(contract.id),
                "contract_number": contract.contract_number,
                "total_amount": str(contract.total_amount),
            },
        )
        return ContractResponse.model_validate(contract)

    async def _assign_number(self, contract: Contract) -> str:
        """Give the contract a number unless it already has one."""
        if not contract.contract_number:
            contract.contract_number = await next_document_number_async(
                settings.CONTRACT_NUMBER_PREFIX,
                self.counter_repo,
                settings.DOCUMENT_NUMBER_WIDTH,
            )
        return contract.contract_number

    async def get_contract(self, contract_id: UUID) -> Optional[ContractResponse]:
        """Get contract by ID."""
        contract = await self.contract_repo.get(contract_id)
        if not contract:
            return None
        return ContractResponse.model_validate(contract)

    async def list_contracts(
        self,
        skip: int = 0,
        limit: int = 100,
        status: Optional[ContractStatus] = None,
        client_id: Optional[UUID] = None,
    ) -> Tuple[List[ContractResponse], int]:
        """List contracts with filters."""
        filters = {}
        if status:
            filters["status"] = status
        if client_id:
            filters["client_id"] = client_id

        contracts = await self.contract_repo.list(skip=skip, limit=limit, **filters)
        total = await self.contract_repo.count(**filters)
        return [ContractResponse.model_validate(contract) for contract in contracts], total

    async def deactivate_contract(self, contract_id: UUID) -> Optional[ContractResponse]:
        """Deactivate a contract so no further invoices are projected from it."""
        contract = await self.contract_repo.get(contract_id)
        if not contract:
            return None

        contract.is_active = False
        await self.session.commit()
        logger.info("Contract deactivated", extra={"contract_number": contract.contract_number})
        return ContractResponse.model_validate(contract)
