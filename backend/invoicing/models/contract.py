"""
Contract model with ordered line items.
"""

from sqlalchemy import Column, String, Date, Boolean, Integer, Numeric, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
import enum

from invoicing.db.base import Base
from invoicing.models.client import PaymentTerms


class ContractStatus(str, enum.Enum):
    """Contract status enumeration."""
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BillingCycle(str, enum.Enum):
    """Contract billing cycle enumeration."""
    ONE_TIME = "one-time"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"


class Contract(Base):
    """Contract between the business and a client."""

    __tablename__ = "contracts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    contract_number = Column(String(50), nullable=False, unique=True, index=True)
    client_id = Column(UUID(as_uuid=True), ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(String(2000), nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(SQLEnum(ContractStatus), nullable=False, default=ContractStatus.DRAFT, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    terms = Column(String(4000), nullable=True)
    payment_terms = Column(SQLEnum(PaymentTerms), nullable=False, default=PaymentTerms.NET30)
    currency = Column(String(3), nullable=False, default="USD")
    billing_cycle = Column(SQLEnum(BillingCycle), nullable=False, default=BillingCycle.ONE_TIME)
    auto_renew = Column(Boolean, nullable=False, default=False)
    renewal_term_months = Column(Integer, nullable=False, default=12)
    tax_rate = Column(Numeric(5, 4), nullable=False)
    subtotal = Column(Numeric(15, 2), nullable=False, default=0)
    tax = Column(Numeric(15, 2), nullable=False, default=0)
    total_amount = Column(Numeric(15, 2), nullable=False, default=0)
    notes = Column(String(2000), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    client = relationship("Client", back_populates="contracts")
    line_items = relationship(
        "ContractLineItem",
        back_populates="contract",
        cascade="all, delete-orphan",
        order_by="ContractLineItem.row_order",
    )
    invoices = relationship("Invoice", back_populates="contract")


class ContractLineItem(Base):
    """Product line on a contract."""

    __tablename__ = "contract_line_items"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    contract_id = Column(UUID(as_uuid=True), ForeignKey("contracts.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(UUID(as_uuid=True), ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    description = Column(String(500), nullable=True)
    quantity = Column(Numeric(15, 2), nullable=False)
    unit_price = Column(Numeric(15, 2), nullable=False)
    discount = Column(Numeric(5, 2), nullable=False, default=0)
    amount = Column(Numeric(15, 2), nullable=False)
    notes = Column(String(1000), nullable=True)
    row_order = Column(Integer, nullable=False, default=0)

    # Relationships
    contract = relationship("Contract", back_populates="line_items")
    product = relationship("Product")
