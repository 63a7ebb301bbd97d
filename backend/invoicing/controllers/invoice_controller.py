"""
Invoice controller.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.controllers.base_controller import BaseController
from invoicing.models.invoice import InvoiceStatus
from invoicing.services.invoice_service import InvoiceService
from invoicing.services.notification_service import NotificationService
from invoicing.schemas.invoice import (
    InvoiceCreate,
    InvoiceFromContract,
    InvoiceListResponse,
    InvoicePaymentUpdate,
    InvoiceResponse,
)


class InvoiceController(BaseController):
    """Controller for invoice operations."""

    def __init__(self, session: AsyncSession, notification_service: NotificationService = None):
        self.invoice_service = InvoiceService(session, notification_service)

    async def create_invoice(self, invoice_data: InvoiceCreate) -> InvoiceResponse:
        """Create an invoice from submitted line items."""
        return await self.invoice_service.create_invoice(invoice_data)

    async def create_invoice_from_contract(
        self,
        contract_id: UUID,
        options: Optional[InvoiceFromContract] = None,
    ) -> InvoiceResponse:
        """Create a draft invoice from a contract."""
        return await self.invoice_service.create_invoice_from_contract(contract_id, options)

    async def get_invoice(self, invoice_id: UUID) -> Optional[InvoiceResponse]:
        """Get invoice by ID."""
        return await self.invoice_service.get_invoice(invoice_id)

    async def list_invoices(
        self,
        skip: int = 0,
        limit: int = 100,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[UUID] = None,
    ) -> InvoiceListResponse:
        """List invoices with optional filters."""
        invoices, total = await self.invoice_service.list_invoices(
            skip=skip,
            limit=limit,
            status=status,
            client_id=client_id,
        )
        return InvoiceListResponse(items=invoices, total=total)

    async def send_invoice(self, invoice_id: UUID) -> InvoiceResponse:
        """Send an invoice."""
        return await self.invoice_service.send_invoice(invoice_id)

    async def cancel_invoice(self, invoice_id: UUID) -> InvoiceResponse:
        """Cancel an invoice."""
        return await self.invoice_service.cancel_invoice(invoice_id)

    async def mark_invoice_paid(self, invoice_id: UUID, payment_data: InvoicePaymentUpdate) -> InvoiceResponse:
        """Mark an invoice paid."""
        return await self.invoice_service.mark_invoice_paid(invoice_id, payment_data)
