"""
Invoice service with business logic for creation, projection from contracts,
numbering and status changes.
"""

import logging
from datetime import date, datetime
from typing import List, Optional, Tuple, Union
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from invoicing.core.config import settings
from invoicing.core.exceptions import ConflictException, FailedPreconditionException, NotFoundException
from invoicing.services.base_service import BaseService
from invoicing.services.notification_service import NotificationService
from invoicing.db.repositories.client_repository import ClientRepository
from invoicing.db.repositories.contract_repository import ContractRepository
from invoicing.db.repositories.document_counter_repository import DocumentCounterRepository
from invoicing.db.repositories.invoice_repository import InvoiceRepository
from invoicing.db.repositories.product_repository import ProductRepository
from invoicing.models.invoice import Invoice, InvoiceLineItem, InvoiceStatus
from invoicing.schemas.contract import LineItemResponse
from invoicing.schemas.invoice import (
    InvoiceCreate,
    InvoiceFromContract,
    InvoicePaymentUpdate,
    InvoiceResponse,
)
from invoicing.utils.document_numbering import next_document_number_async
from invoicing.utils.invoice_projection import InvoiceDraft, build_invoice_draft, project_invoice_from_contract
from invoicing.utils.invoice_state import (
    derive_payment_status,
    effective_status,
    mark_invoice_paid,
    transition_invoice,
)

logger = logging.getLogger(__name__)


def invoice_to_response(invoice: Invoice, now: Optional[Union[date, datetime]] = None) -> InvoiceResponse:
    """Build the response schema, deriving payment status and effective status at read time."""
    return InvoiceResponse(
        id=invoice.id,
        invoice_number=invoice.invoice_number,
        contract_id=invoice.contract_id,
        client_id=invoice.client_id,
        issue_date=invoice.issue_date,
        due_date=invoice.due_date,
        status=invoice.status,
        effective_status=effective_status(invoice, now),
        payment_status=derive_payment_status(invoice, now),
        payment_terms=invoice.payment_terms,
        currency=invoice.currency,
        tax_rate=invoice.tax_rate,
        subtotal=invoice.subtotal,
        tax=invoice.tax,
        total_amount=invoice.total_amount,
        is_paid=invoice.is_paid,
        payment_date=invoice.payment_date,
        payment_method=invoice.payment_method,
        payment_reference=invoice.payment_reference,
        notes=invoice.notes,
        line_items=[LineItemResponse.model_validate(line) for line in invoice.line_items],
    )


class InvoiceService(BaseService):
    """Service for invoice operations."""

    def __init__(self, session: AsyncSession, notification_service: Optional[NotificationService] = None):
        self.session = session
        self.notification_service = notification_service or NotificationService()
        self.invoice_repo = InvoiceRepository(session)
        self.contract_repo = ContractRepository(session)
        self.client_repo = ClientRepository(session)
        self.product_repo = ProductRepository(session)
        self.counter_repo = DocumentCounterRepository(session)

    async def create_invoice(self, invoice_data: InvoiceCreate) -> InvoiceResponse:
        """Create an invoice from submitted line items."""
        client = await self.client_repo.get(invoice_data.client_id)
        if not client:
            raise NotFoundException("Client not found", details={"client_id": str(invoice_data.client_id)})
        if not client.is_active:
            raise FailedPreconditionException(
                f"Client {client.name} is inactive",
                details={"client_id": str(client.id)},
            )

        products = await self.product_repo.get_many(line.product_id for line in invoice_data.line_items)
        draft = build_invoice_draft(
            client_id=client.id,
            lines=invoice_data.line_items,
            products=products,
            issue_date=invoice_data.issue_date,
            payment_terms=invoice_data.payment_terms or client.payment_terms,
            currency=invoice_data.currency or client.currency or settings.DEFAULT_CURRENCY,
            tax_rate=invoice_data.tax_rate if invoice_data.tax_rate is not None else settings.DEFAULT_TAX_RATE,
        )
        invoice = await self._persist_draft(draft, notes=invoice_data.notes)
        return invoice_to_response(invoice)

    async def create_invoice_from_contract(
        self,
        contract_id: UUID,
        options: Optional[InvoiceFromContract] = None,
    ) -> InvoiceResponse:
        """Project a new draft invoice from a contract."""
        options = options or InvoiceFromContract()
        contract = await self.contract_repo.get(contract_id)
        products = []
        if contract is not None:
            products = await self.product_repo.get_many(line.product_id for line in contract.line_items)

        draft = project_invoice_from_contract(
            contract,
            products,
            issue_date=options.issue_date,
            tax_rate=options.tax_rate,
        )
        invoice = await self._persist_draft(draft, notes=options.notes)
        logger.info(
            "Invoice projected from contract",
            extra={"invoice_number": invoice.invoice_number, "contract_number": contract.contract_number},
        )
        return invoice_to_response(invoice)

    async def _persist_draft(self, draft: InvoiceDraft, notes: Optional[str] = None) -> Invoice:
        """Number and store a draft invoice with its line items."""
        invoice = Invoice(
            contract_id=draft.contract_id,
            client_id=draft.client_id,
            issue_date=draft.issue_date,
            due_date=draft.due_date,
            status=draft.status,
            payment_terms=draft.payment_terms,
            currency=draft.currency,
            tax_rate=draft.tax_rate,
            subtotal=draft.subtotal,
            tax=draft.tax,
            total_amount=draft.total_amount,
            is_paid=False,
            notes=notes,
            line_items=[
                InvoiceLineItem(
                    product_id=line.product_id,
                    description=line.description,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    discount=line.discount,
                    amount=line.amount,
                    notes=line.notes,
                    row_order=line.row_order,
                )
                for line in draft.line_items
            ],
        )
        invoice_number = await self._assign_number(invoice)

        try:
            await self.invoice_repo.add(invoice)
        except IntegrityError:
            await self.session.rollback()
            raise ConflictException(
                f"Invoice number {invoice_number} is already in use",
                details={"invoice_number": invoice_number},
            )
        await self.session.commit()

        logger.info(
            "Invoice created",
            extra={
                "invoice_id": str(invoice.id),
                "invoice_number": invoice_number,
                "total_amount": str(invoice.total_amount),
            },
        )
        return invoice

    async def _assign_number(self, invoice: Invoice) -> str:
        """Give the invoice a number unless it already has one."""
        if not invoice.invoice_number:
            invoice.invoice_number = await next_document_number_async(
                settings.INVOICE_NUMBER_PREFIX,
                self.counter_repo,
                settings.DOCUMENT_NUMBER_WIDTH,
            )
        return invoice.invoice_number

    async def _get_or_raise(self, invoice_id: UUID) -> Invoice:
        invoice = await self.invoice_repo.get(invoice_id)
        if not invoice:
            raise NotFoundException("Invoice not found", details={"invoice_id": str(invoice_id)})
        return invoice

    async def get_invoice(self, invoice_id: UUID) -> Optional[InvoiceResponse]:
        """Get invoice by ID."""
        invoice = await self.invoice_repo.get(invoice_id)
        if not invoice:
            return None
        return invoice_to_response(invoice)

    async def list_invoices(
        self,
        skip: int = 0,
        limit: int = 100,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[UUID] = None,
    ) -> Tuple[List[InvoiceResponse], int]:
        """List invoices with filters."""
        filters = {}
        if status:
            filters["status"] = status
        if client_id:
            filters["client_id"] = client_id

        invoices = await self.invoice_repo.list(skip=skip, limit=limit, **filters)
        total = await self.invoice_repo.count(**filters)
        return [invoice_to_response(invoice) for invoice in invoices], total

    async def send_invoice(self, invoice_id: UUID) -> InvoiceResponse:
        """Move a draft invoice to sent."""
        invoice = await self._get_or_raise(invoice_id)
        transition_invoice(invoice, InvoiceStatus.SENT)
        await self.session.commit()
        return invoice_to_response(invoice)

    async def cancel_invoice(self, invoice_id: UUID) -> InvoiceResponse:
        """Cancel an unpaid invoice. Cancellation is terminal."""
        invoice = await self._get_or_raise(invoice_id)
        transition_invoice(invoice, InvoiceStatus.CANCELLED)
        await self.session.commit()
        return invoice_to_response(invoice)

    async def mark_invoice_paid(self, invoice_id: UUID, payment_data: InvoicePaymentUpdate) -> InvoiceResponse:
        """Record an invoice as paid in full and send the paid notification."""
        invoice = await self._get_or_raise(invoice_id)
        mark_invoice_paid(
            invoice,
            payment_date=payment_data.payment_date,
            payment_method=payment_data.payment_method,
            payment_reference=payment_data.payment_reference,
        )
        await self.session.commit()
        await self.notify_paid(invoice)
        return invoice_to_response(invoice)

    async def notify_paid(self, invoice: Invoice) -> None:
        """Send the paid notification; a notification failure never undoes the payment."""
        try:
            await self.notification_service.invoice_paid(invoice)
        except Exception:
            logger.exception(
                "Failed to send paid notification",
                extra={"invoice_number": invoice.invoice_number},
            )
