"""
Payment controller.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.controllers.base_controller import BaseController
from invoicing.services.notification_service import NotificationService
from invoicing.services.payment_service import PaymentService
from invoicing.schemas.payment import (
    InvoiceBalanceResponse,
    PaymentCreate,
    PaymentListResponse,
    PaymentRecordedResponse,
)


class PaymentController(BaseController):
    """Controller for payment operations."""

    def __init__(self, session: AsyncSession, notification_service: NotificationService = None):
        self.payment_service = PaymentService(session, notification_service)

    async def record_payment(self, invoice_id: UUID, payment_data: PaymentCreate) -> PaymentRecordedResponse:
        """Record a payment against an invoice."""
        return await self.payment_service.record_payment(invoice_id, payment_data)

    async def list_payments(self, invoice_id: UUID) -> PaymentListResponse:
        """List payments for an invoice."""
        payments, total = await self.payment_service.list_payments(invoice_id)
        return PaymentListResponse(items=payments, total=total)

    async def get_balance(self, invoice_id: UUID) -> InvoiceBalanceResponse:
        """Get the paid and outstanding amounts of an invoice."""
        return await self.payment_service.get_balance(invoice_id)
