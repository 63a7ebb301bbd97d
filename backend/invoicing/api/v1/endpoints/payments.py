"""
Payment API endpoints, nested under their invoice.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from invoicing.db.session import get_db
from invoicing.deps.di_container import get_notification_service
from invoicing.controllers.payment_controller import PaymentController
from invoicing.services.notification_service import NotificationService
from invoicing.schemas.payment import (
    InvoiceBalanceResponse,
    PaymentCreate,
    PaymentListResponse,
    PaymentRecordedResponse,
)

router = APIRouter()


@router.post(
    "/{invoice_id}/payments",
    response_model=PaymentRecordedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_payment(
    invoice_id: UUID,
    payment_data: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    notification_service: NotificationService = Depends(get_notification_service),
) -> PaymentRecordedResponse:
    """Record a payment; the invoice is marked paid once fully covered."""
    controller = PaymentController(db, notification_service)
    return await controller.record_payment(invoice_id, payment_data)


@router.get("/{invoice_id}/payments", response_model=PaymentListResponse)
async def list_payments(
    invoice_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> PaymentListResponse:
    """List payments recorded against an invoice."""
    controller = PaymentController(db)
    return await controller.list_payments(invoice_id)


@router.get("/{invoice_id}/balance", response_model=InvoiceBalanceResponse)
async def get_balance(
    invoice_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> InvoiceBalanceResponse:
    """Get the paid and outstanding amounts of an invoice."""
    controller = PaymentController(db)
    return await controller.get_balance(invoice_id)
