"""
Payment service: records payments and settles invoices once fully paid.
"""

import logging
from typing import List, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.core.exceptions import ConflictException, NotFoundException
from invoicing.services.base_service import BaseService
from invoicing.services.invoice_service import InvoiceService, invoice_to_response
from invoicing.services.notification_service import NotificationService
from invoicing.db.repositories.invoice_repository import InvoiceRepository
from invoicing.db.repositories.payment_repository import PaymentRepository
from invoicing.models.invoice import Invoice, InvoiceStatus
from invoicing.schemas.payment import (
    InvoiceBalanceResponse,
    PaymentCreate,
    PaymentRecordedResponse,
    PaymentResponse,
)
from invoicing.utils.invoice_math import to_money
from invoicing.utils.invoice_state import mark_invoice_paid

logger = logging.getLogger(__name__)


class PaymentService(BaseService):
    """Service for payment operations."""

    def __init__(self, session: AsyncSession, notification_service: NotificationService = None):
        self.session = session
        self.invoice_repo = InvoiceRepository(session)
        self.payment_repo = PaymentRepository(session)
        self.invoice_service = InvoiceService(session, notification_service)

    async def _get_invoice(self, invoice_id: UUID) -> Invoice:
        invoice = await self.invoice_repo.get(invoice_id)
        if not invoice:
            raise NotFoundException("Invoice not found", details={"invoice_id": str(invoice_id)})
        return invoice

    async def record_payment(self, invoice_id: UUID, payment_data: PaymentCreate) -> PaymentRecordedResponse:
        """
        Record a payment against an invoice.

        Once the accumulated payments reach the invoice total the invoice is
        marked paid with the closing payment's date and method.
        """
        invoice = await self._get_invoice(invoice_id)
        if invoice.status == InvoiceStatus.CANCELLED:
            raise ConflictException(
                "Payments cannot be recorded against a cancelled invoice",
                details={"invoice_number": invoice.invoice_number},
            )
        if invoice.is_paid:
            raise ConflictException(
                "Invoice is already paid",
                details={"invoice_number": invoice.invoice_number},
            )

        payment = await self.payment_repo.create(
            invoice_id=invoice.id,
            amount=to_money(payment_data.amount),
            method=payment_data.method,
            payment_date=payment_data.payment_date,
            reference=payment_data.reference,
        )
        amount_paid = to_money(await self.payment_repo.total_paid(invoice.id))

        settled = amount_paid >= invoice.total_amount
        if settled:
            mark_invoice_paid(
                invoice,
                payment_date=payment.payment_date,
                payment_method=payment.method,
                payment_reference=payment.reference,
            )

        await self.session.commit()
        logger.info(
            "Payment recorded",
            extra={
                "invoice_number": invoice.invoice_number,
                "amount": str(payment.amount),
                "amount_paid": str(amount_paid),
                "settled": settled,
            },
        )

        if settled:
            await self.invoice_service.notify_paid(invoice)

        return PaymentRecordedResponse(
            payment=PaymentResponse.model_validate(payment),
            invoice=invoice_to_response(invoice),
        )

    async def list_payments(self, invoice_id: UUID) -> Tuple[List[PaymentResponse], int]:
        """List payments recorded against an invoice."""
        await self._get_invoice(invoice_id)
        payments = await self.payment_repo.list_by_invoice(invoice_id)
        return [PaymentResponse.model_validate(payment) for payment in payments], len(payments)

    async def get_balance(self, invoice_id: UUID) -> InvoiceBalanceResponse:
        """Amount paid so far and the remaining balance of an invoice."""
        invoice = await self._get_invoice(invoice_id)
        amount_paid = to_money(await self.payment_repo.total_paid(invoice.id))
        balance_due = max(to_money(invoice.total_amount) - amount_paid, to_money(0))
        return InvoiceBalanceResponse(
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            total_amount=to_money(invoice.total_amount),
            amount_paid=amount_paid,
            balance_due=balance_due,
        )
