"""
Product Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from decimal import Decimal

from invoicing.models.product import ProductUnit


class ProductBase(BaseModel):
    """Base product schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    sku: Optional[str] = Field(None, max_length=100)
    price: Decimal = Field(..., ge=0, max_digits=15, decimal_places=2)
    unit: ProductUnit = ProductUnit.PIECE
    tax_rate: Optional[Decimal] = Field(None, ge=0, le=1, decimal_places=4)


class ProductCreate(ProductBase):
    """Schema for creating a product."""
    pass


class ProductResponse(ProductBase):
    """Schema for product response."""
    id: UUID
    is_active: bool

    class Config:
        from_attributes = True
