"""
Payment Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date
from uuid import UUID
from decimal import Decimal

from invoicing.schemas.invoice import InvoiceResponse


class PaymentCreate(BaseModel):
    """Schema for recording a payment against an invoice."""
    amount: Decimal = Field(..., gt=0, max_digits=15, decimal_places=2)
    method: str = Field(..., min_length=1, max_length=50)
    payment_date: date
    reference: Optional[str] = Field(None, max_length=255)


class PaymentResponse(BaseModel):
    """Schema for payment response."""
    id: UUID
    invoice_id: UUID
    amount: Decimal
    method: str
    payment_date: date
    reference: Optional[str] = None

    class Config:
        from_attributes = True


class PaymentListResponse(BaseModel):
    """Schema for payment list response."""
    items: List[PaymentResponse]
    total: int


class InvoiceBalanceResponse(BaseModel):
    """Amounts paid and outstanding on an invoice."""
    invoice_id: UUID
    invoice_number: str
    total_amount: Decimal
    amount_paid: Decimal
    balance_due: Decimal


class PaymentRecordedResponse(BaseModel):
    """Result of recording a payment: the payment and the invoice after it."""
    payment: PaymentResponse
    invoice: InvoiceResponse
