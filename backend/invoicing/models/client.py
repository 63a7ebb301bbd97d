"""
Client model for billed customers.
"""

from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
import enum

from invoicing.db.base import Base


class PaymentTerms(str, enum.Enum):
    """Payment terms shared by clients, contracts and invoices."""
    IMMEDIATE = "immediate"
    NET15 = "net15"
    NET30 = "net30"
    NET60 = "net60"


class Client(Base):
    """Client billed through contracts and invoices."""

    __tablename__ = "clients"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
    company = Column(String(255), nullable=True)
    tax_id = Column(String(50), nullable=True)
    payment_terms = Column(SQLEnum(PaymentTerms), nullable=False, default=PaymentTerms.NET30)
    currency = Column(String(3), nullable=False, default="USD")
    tax_exempt = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    contracts = relationship("Contract", back_populates="client")
    invoices = relationship("Invoice", back_populates="client")
