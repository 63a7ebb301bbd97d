"""
Invoice repository for database operations and invoice aggregates.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, List, Dict, Any
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, case, and_, extract
from sqlalchemy.orm import selectinload

from invoicing.db.repositories.base_repository import BaseRepository
from invoicing.models.client import Client
from invoicing.models.invoice import Invoice, InvoiceStatus


class InvoiceRepository(BaseRepository[Invoice]):
    """Repository for invoice operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Invoice, session)

    def _base_query(self):
        """Base query with line items eagerly loaded."""
        return select(Invoice).options(selectinload(Invoice.line_items))

    async def get(self, id: UUID) -> Optional[Invoice]:
        """Get invoice by ID with line items loaded."""
        result = await self.session.execute(self._base_query().where(Invoice.id == id))
        return result.scalar_one_or_none()

    async def list(
        self,
        skip: int = 0,
        limit: int = 100,
        **filters,
    ) -> List[Invoice]:
        """List invoices with pagination and filters, newest first."""
        query = self._base_query()

        for key, value in filters.items():
            if hasattr(Invoice, key):
                query = query.where(getattr(Invoice, key) == value)

        query = query.order_by(Invoice.created_at.desc(), Invoice.invoice_number.desc())
        query = query.offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, **filters) -> int:
        """Count invoices matching filters."""
        query = select(func.count(Invoice.id))

        for key, value in filters.items():
            if hasattr(Invoice, key):
                query = query.where(getattr(Invoice, key) == value)

        result = await self.session.execute(query)
        return result.scalar_one()

    async def count_unpaid(self) -> int:
        """Count unpaid invoices that are not cancelled."""
        result = await self.session.execute(
            select(func.count(Invoice.id)).where(
                Invoice.is_paid == False,  # noqa: E712
                Invoice.status != InvoiceStatus.CANCELLED,
            )
        )
        return result.scalar_one()

    async def count_overdue(self, today: date) -> int:
        """Count unpaid sent invoices whose due date has passed."""
        result = await self.session.execute(
            select(func.count(Invoice.id)).where(
                Invoice.is_paid == False,  # noqa: E712
                Invoice.status == InvoiceStatus.SENT,
                Invoice.due_date < today,
            )
        )
        return result.scalar_one()

    async def sum_paid_revenue(self) -> Decimal:
        """Sum of totals over paid invoices."""
        result = await self.session.execute(
            select(func.coalesce(func.sum(Invoice.total_amount), 0)).where(Invoice.is_paid == True)  # noqa: E712
        )
        return Decimal(str(result.scalar_one()))

    async def sum_outstanding(self) -> Decimal:
        """Sum of totals over unpaid, non-cancelled invoices."""
        result = await self.session.execute(
            select(func.coalesce(func.sum(Invoice.total_amount), 0)).where(
                Invoice.is_paid == False,  # noqa: E712
                Invoice.status != InvoiceStatus.CANCELLED,
            )
        )
        return Decimal(str(result.scalar_one()))

    async def client_totals(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Per-client invoiced and paid totals for non-cancelled invoices, largest first."""
        total_invoiced = func.sum(Invoice.total_amount).label("total_invoiced")
        query = (
            select(
                Client.id,
                Client.name,
                Client.email,
                total_invoiced,
                func.sum(case((Invoice.is_paid == True, Invoice.total_amount), else_=0)).label("paid_revenue"),  # noqa: E712
                func.count(Invoice.id).label("invoice_count"),
                func.sum(case((Invoice.is_paid == True, 1), else_=0)).label("paid_invoice_count"),  # noqa: E712
            )
            .join(Invoice, and_(Invoice.client_id == Client.id, Invoice.status != InvoiceStatus.CANCELLED))
            .group_by(Client.id, Client.name, Client.email)
            .order_by(total_invoiced.desc())
            .limit(limit)
        )
        result = await self.session.execute(query)
        return [dict(row._mapping) for row in result.all()]

    async def revenue_by_period(self, period: str = "monthly", year: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Paid invoice revenue and counts grouped by payment date.

        Args:
            period: "monthly", "quarterly" or "yearly"
            year: Year to report on; ignored for the yearly grouping, which spans all years

        Returns:
            Rows with year, month or quarter, revenue and invoice_count, latest period first
        """
        year_part = extract("year", Invoice.payment_date)
        month_part = extract("month", Invoice.payment_date)
        query = (
            select(
                year_part.label("year"),
                month_part.label("month"),
                func.sum(Invoice.total_amount).label("revenue"),
                func.count(Invoice.id).label("invoice_count"),
            )
            .where(
                Invoice.is_paid == True,  # noqa: E712
                Invoice.payment_date.is_not(None),
            )
            .group_by(year_part, month_part)
        )
        if period != "yearly" and year is not None:
            query = query.where(
                Invoice.payment_date >= date(year, 1, 1),
                Invoice.payment_date < date(year + 1, 1, 1),
            )
        result = await self.session.execute(query)

        # SQLite has no quarter field, so months are folded into quarters and years here
        buckets: Dict[tuple, Dict[str, Any]] = {}
        for row in result.all():
            row_year, row_month = int(row.year), int(row.month)
            if period == "monthly":
                key = {"year": row_year, "month": row_month}
            elif period == "quarterly":
                key = {"year": row_year, "quarter": (row_month - 1) // 3 + 1}
            else:
                key = {"year": row_year}

            bucket = buckets.setdefault(
                tuple(key.values()),
                {**key, "revenue": Decimal("0"), "invoice_count": 0},
            )
            bucket["revenue"] += Decimal(str(row.revenue or 0))
            bucket["invoice_count"] += int(row.invoice_count)

        return [buckets[key] for key in sorted(buckets, reverse=True)]
