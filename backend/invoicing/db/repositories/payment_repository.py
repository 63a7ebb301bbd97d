"""
Payment repository for database operations.
"""

from decimal import Decimal
from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from invoicing.db.repositories.base_repository import BaseRepository
from invoicing.models.payment import Payment


class PaymentRepository(BaseRepository[Payment]):
    """Repository for payment operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Payment, session)

    async def list_by_invoice(self, invoice_id: UUID) -> List[Payment]:
        """List payments for an invoice in the order they were received."""
        result = await self.session.execute(
            select(Payment)
            .where(Payment.invoice_id == invoice_id)
            .order_by(Payment.payment_date, Payment.created_at)
        )
        return list(result.scalars().all())

    async def total_paid(self, invoice_id: UUID) -> Decimal:
        """Sum of payments recorded against an invoice."""
        result = await self.session.execute(
            select(func.coalesce(func.sum(Payment.amount), 0)).where(Payment.invoice_id == invoice_id)
        )
        return Decimal(str(result.scalar_one()))
