"""
Invoice model with ordered line items.
"""

from sqlalchemy import Column, String, Date, Boolean, Integer, Numeric, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
import enum

from invoicing.db.base import Base
from invoicing.models.client import PaymentTerms


class InvoiceStatus(str, enum.Enum):
    """Invoice status enumeration. OVERDUE is derived at read time, never stored."""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Invoice(Base):
    """Invoice issued to a client, optionally projected from a contract."""

    __tablename__ = "invoices"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    invoice_number = Column(String(50), nullable=False, unique=True, index=True)
    contract_id = Column(UUID(as_uuid=True), ForeignKey("contracts.id", ondelete="SET NULL"), nullable=True, index=True)
    client_id = Column(UUID(as_uuid=True), ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True)
    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    status = Column(SQLEnum(InvoiceStatus), nullable=False, default=InvoiceStatus.DRAFT, index=True)
    payment_terms = Column(SQLEnum(PaymentTerms), nullable=True)
    currency = Column(String(3), nullable=False, default="USD")
    tax_rate = Column(Numeric(5, 4), nullable=False)
    subtotal = Column(Numeric(15, 2), nullable=False, default=0)
    tax = Column(Numeric(15, 2), nullable=False, default=0)
    total_amount = Column(Numeric(15, 2), nullable=False, default=0)
    is_paid = Column(Boolean, nullable=False, default=False, index=True)
    payment_date = Column(Date, nullable=True)
    payment_method = Column(String(50), nullable=True)
    payment_reference = Column(String(255), nullable=True)
    notes = Column(String(2000), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    client = relationship("Client", back_populates="invoices")
    contract = relationship("Contract", back_populates="invoices")
    line_items = relationship(
        "InvoiceLineItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceLineItem.row_order",
    )
    payments = relationship("Payment", back_populates="invoice", cascade="all, delete-orphan")


class InvoiceLineItem(Base):
    """Product line on an invoice, copied verbatim from the source contract when projected."""

    __tablename__ = "invoice_line_items"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    invoice_id = Column(UUID(as_uuid=True), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(UUID(as_uuid=True), ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    description = Column(String(500), nullable=True)
    quantity = Column(Numeric(15, 2), nullable=False)
    unit_price = Column(Numeric(15, 2), nullable=False)
    discount = Column(Numeric(5, 2), nullable=False, default=0)
    amount = Column(Numeric(15, 2), nullable=False)
    notes = Column(String(1000), nullable=True)
    row_order = Column(Integer, nullable=False, default=0)

    # Relationships
    invoice = relationship("Invoice", back_populates="line_items")
    product = relationship("Product")
