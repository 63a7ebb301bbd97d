"""
Contract Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import date
from uuid import UUID
from decimal import Decimal

from invoicing.models.client import PaymentTerms
from invoicing.models.contract import ContractStatus, BillingCycle


class LineItemCreate(BaseModel):
    """Requested product line for a contract or invoice."""
    product_id: UUID
    quantity: Decimal = Field(..., ge=0, max_digits=15, decimal_places=2)
    unit_price: Optional[Decimal] = Field(
        None, ge=0, max_digits=15, decimal_places=2,
        description="Defaults to the product price when omitted",
    )
    discount: Decimal = Field(Decimal(0), ge=0, le=100, decimal_places=2, description="Discount percentage")
    description: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = Field(None, max_length=1000)


class LineItemResponse(BaseModel):
    """Priced product line."""
    id: UUID
    product_id: UUID
    description: Optional[str] = None
    quantity: Decimal
    unit_price: Decimal
    discount: Decimal
    amount: Decimal
    notes: Optional[str] = None
    row_order: int

    class Config:
        from_attributes = True


class ContractCreate(BaseModel):
    """Schema for creating a contract. Totals and number are computed server side."""
    client_id: UUID
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    start_date: date
    end_date: date
    status: ContractStatus = ContractStatus.DRAFT
    terms: Optional[str] = Field(None, max_length=4000)
    payment_terms: PaymentTerms = PaymentTerms.NET30
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    billing_cycle: BillingCycle = BillingCycle.ONE_TIME
    auto_renew: bool = False
    renewal_term_months: int = Field(12, ge=1, le=120)
    tax_rate: Optional[Decimal] = Field(None, ge=0, le=1, decimal_places=4)
    notes: Optional[str] = Field(None, max_length=2000)
    line_items: List[LineItemCreate] = Field(..., min_length=1)

    @model_validator(mode='after')
    def validate_dates(self) -> 'ContractCreate':
        """Validate that end_date is after start_date."""
        if self.end_date <= self.start_date:
            raise ValueError('End date must be after start date')
        return self


class ContractResponse(BaseModel):
    """Schema for contract response."""
    id: UUID
    contract_number: str
    client_id: UUID
    title: str
    description: Optional[str] = None
    start_date: date
    end_date: date
    status: ContractStatus
    is_active: bool
    terms: Optional[str] = None
    payment_terms: PaymentTerms
    currency: str
    billing_cycle: BillingCycle
    auto_renew: bool
    renewal_term_months: int
    tax_rate: Decimal
    subtotal: Decimal
    tax: Decimal
    total_amount: Decimal
    notes: Optional[str] = None
    line_items: List[LineItemResponse] = []

    class Config:
        from_attributes = True


class ContractListResponse(BaseModel):
    """Schema for contract list response."""
    items: List[ContractResponse]
    total: int
