"""
Payment model for amounts received against an invoice.
"""

from sqlalchemy import Column, String, Date, Numeric, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from invoicing.db.base import Base


class Payment(Base):
    """Payment recorded against an invoice."""

    __tablename__ = "payments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    invoice_id = Column(UUID(as_uuid=True), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(15, 2), nullable=False)
    method = Column(String(50), nullable=False)
    payment_date = Column(Date, nullable=False)
    reference = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    invoice = relationship("Invoice", back_populates="payments")
