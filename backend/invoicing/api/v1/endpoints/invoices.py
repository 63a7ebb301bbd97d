"""
Invoice API endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Body, Depends, Query, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from invoicing.db.session import get_db
from invoicing.deps.di_container import get_notification_service
from invoicing.controllers.invoice_controller import InvoiceController
from invoicing.models.invoice import InvoiceStatus
from invoicing.services.notification_service import NotificationService
from invoicing.schemas.invoice import (
    InvoiceCreate,
    InvoiceFromContract,
    InvoiceListResponse,
    InvoicePaymentUpdate,
    InvoiceResponse,
)

router = APIRouter()


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice_data: InvoiceCreate,
    db: AsyncSession = Depends(get_db),
) -> InvoiceResponse:
    """Create an invoice; totals and invoice number are computed server side."""
    controller = InvoiceController(db)
    return await controller.create_invoice(invoice_data)


@router.post(
    "/from-contract/{contract_id}",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_invoice_from_contract(
    contract_id: UUID,
    options: Optional[InvoiceFromContract] = Body(None),
    db: AsyncSession = Depends(get_db),
) -> InvoiceResponse:
    """Create a draft invoice from a contract."""
    controller = InvoiceController(db)
    return await controller.create_invoice_from_contract(contract_id, options)


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    status: Optional[InvoiceStatus] = Query(None),
    client_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> InvoiceListResponse:
    """List invoices with optional filters."""
    controller = InvoiceController(db)
    return await controller.list_invoices(
        skip=skip,
        limit=limit,
        status=status,
        client_id=client_id,
    )


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> InvoiceResponse:
    """Get invoice by ID, including its derived payment status."""
    controller = InvoiceController(db)
    invoice = await controller.get_invoice(invoice_id)
    if not invoice:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invoice not found",
        )
    return invoice


@router.post("/{invoice_id}/send", response_model=InvoiceResponse)
async def send_invoice(
    invoice_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> InvoiceResponse:
    """Move a draft invoice to sent."""
    controller = InvoiceController(db)
    return await controller.send_invoice(invoice_id)


@router.post("/{invoice_id}/cancel", response_model=InvoiceResponse)
async def cancel_invoice(
    invoice_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> InvoiceResponse:
    """Cancel an unpaid invoice."""
    controller = InvoiceController(db)
    return await controller.cancel_invoice(invoice_id)


@router.post("/{invoice_id}/mark-paid", response_model=InvoiceResponse)
async def mark_invoice_paid(
    invoice_id: UUID,
    payment_data: InvoicePaymentUpdate,
    db: AsyncSession = Depends(get_db),
    notification_service: NotificationService = Depends(get_notification_service),
) -> InvoiceResponse:
    """Mark an invoice paid in full."""
    controller = InvoiceController(db, notification_service)
    return await controller.mark_invoice_paid(invoice_id, payment_data)
