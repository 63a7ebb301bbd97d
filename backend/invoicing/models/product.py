"""
Product model for the priced catalogue referenced by line items.
"""

from sqlalchemy import Column, String, Boolean, Numeric, DateTime, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
import uuid
import enum

from invoicing.db.base import Base


class ProductUnit(str, enum.Enum):
    """Unit of measure for a product."""
    PIECE = "piece"
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    KG = "kg"
    METER = "meter"


class Product(Base):
    """Catalogue product."""

    __tablename__ = "products"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False)
    description = Column(String(1000), nullable=True)
    sku = Column(String(100), nullable=True, unique=True)
    price = Column(Numeric(15, 2), nullable=False)
    unit = Column(SQLEnum(ProductUnit), nullable=False, default=ProductUnit.PIECE)
    tax_rate = Column(Numeric(5, 4), nullable=True)  # Informational, totals use the document rate
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
