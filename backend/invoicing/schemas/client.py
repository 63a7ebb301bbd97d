"""
Client Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID

from invoicing.models.client import PaymentTerms


class ClientBase(BaseModel):
    """Base client schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)
    company: Optional[str] = Field(None, max_length=255)
    tax_id: Optional[str] = Field(None, max_length=50)
    payment_terms: PaymentTerms = PaymentTerms.NET30
    currency: str = Field("USD", min_length=3, max_length=3)
    tax_exempt: bool = False


class ClientCreate(ClientBase):
    """Schema for creating a client."""
    pass


class ClientResponse(ClientBase):
    """Schema for client response."""
    id: UUID
    is_active: bool

    class Config:
        from_attributes = True
