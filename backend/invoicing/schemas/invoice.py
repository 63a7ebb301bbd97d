"""
Invoice Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date
from uuid import UUID
from decimal import Decimal

from invoicing.models.client import PaymentTerms
from invoicing.models.invoice import InvoiceStatus
from invoicing.schemas.contract import LineItemCreate, LineItemResponse
from invoicing.utils.invoice_state import PaymentStatus


class InvoiceCreate(BaseModel):
    """Schema for creating an invoice directly. Totals and number are computed server side."""
    client_id: UUID
    issue_date: Optional[date] = None
    payment_terms: Optional[PaymentTerms] = Field(None, description="Defaults to the client's payment terms")
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    tax_rate: Optional[Decimal] = Field(None, ge=0, le=1, decimal_places=4)
    notes: Optional[str] = Field(None, max_length=2000)
    line_items: List[LineItemCreate] = Field(..., min_length=1)


class InvoiceFromContract(BaseModel):
    """Options when projecting an invoice from a contract."""
    issue_date: Optional[date] = None
    tax_rate: Optional[Decimal] = Field(None, ge=0, le=1, decimal_places=4)
    notes: Optional[str] = Field(None, max_length=2000)


class InvoicePaymentUpdate(BaseModel):
    """Schema for marking an invoice paid."""
    payment_date: date
    payment_method: Optional[str] = Field(None, max_length=50)
    payment_reference: Optional[str] = Field(None, max_length=255)


class InvoiceResponse(BaseModel):
    """Schema for invoice response, including the derived payment state."""
    id: UUID
    invoice_number: str
    contract_id: Optional[UUID] = None
    client_id: UUID
    issue_date: date
    due_date: date
    status: InvoiceStatus
    effective_status: InvoiceStatus
    payment_status: PaymentStatus
    payment_terms: Optional[PaymentTerms] = None
    currency: str
    tax_rate: Decimal
    subtotal: Decimal
    tax: Decimal
    total_amount: Decimal
    is_paid: bool
    payment_date: Optional[date] = None
    payment_method: Optional[str] = None
    payment_reference: Optional[str] = None
    notes: Optional[str] = None
    line_items: List[LineItemResponse] = []


class InvoiceListResponse(BaseModel):
    """Schema for invoice list response."""
    items: List[InvoiceResponse]
    total: int
