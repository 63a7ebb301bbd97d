"""
Dashboard service with invoicing statistics and client analytics.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.services.base_service import BaseService
from invoicing.db.repositories.client_repository import ClientRepository
from invoicing.db.repositories.invoice_repository import InvoiceRepository
from invoicing.schemas.dashboard import (
    ClientAnalyticsItem,
    ClientAnalyticsResponse,
    DashboardStatsResponse,
    RevenueAnalyticsResponse,
    RevenuePeriod,
    RevenuePeriodItem,
)
from invoicing.utils.invoice_math import to_money


class DashboardService(BaseService):
    """Service for dashboard operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.client_repo = ClientRepository(session)
        self.invoice_repo = InvoiceRepository(session)

    async def get_stats(self, today: Optional[date] = None) -> DashboardStatsResponse:
        """
        Get headline figures.

        Overdue counts unpaid sent invoices past their due date, the same rule
        effective_status applies; it is not a stored status.
        """
        today = today or datetime.now(timezone.utc).date()
        return DashboardStatsResponse(
            total_clients=await self.client_repo.count(),
            total_invoices=await self.invoice_repo.count(),
            unpaid_invoices=await self.invoice_repo.count_unpaid(),
            overdue_invoices=await self.invoice_repo.count_overdue(today),
            total_revenue=to_money(await self.invoice_repo.sum_paid_revenue()),
            outstanding_amount=to_money(await self.invoice_repo.sum_outstanding()),
        )

    async def get_client_analytics(self, limit: int = 10) -> ClientAnalyticsResponse:
        """Get the top clients by invoiced amount with their payment rate."""
        rows = await self.invoice_repo.client_totals(limit=limit)
        items = []
        for row in rows:
            invoice_count = int(row["invoice_count"] or 0)
            paid_count = int(row["paid_invoice_count"] or 0)
            payment_rate = (
                to_money(Decimal(paid_count) * 100 / Decimal(invoice_count))
                if invoice_count
                else to_money(0)
            )
            items.append(
                ClientAnalyticsItem(
                    client_id=row["id"],
                    name=row["name"],
                    email=row["email"],
                    total_invoiced=to_money(row["total_invoiced"] or 0),
                    paid_revenue=to_money(row["paid_revenue"] or 0),
                    invoice_count=invoice_count,
                    paid_invoice_count=paid_count,
                    payment_rate=payment_rate,
                )
            )
        return ClientAnalyticsResponse(items=items)

    async def get_revenue_analytics(
        self,
        period: RevenuePeriod = RevenuePeriod.MONTHLY,
        year: Optional[int] = None,
    ) -> RevenueAnalyticsResponse:
        """Paid revenue grouped by payment month, quarter or year; defaults to the current year."""
        period = RevenuePeriod(period)
        year = year or datetime.now(timezone.utc).year
        rows = await self.invoice_repo.revenue_by_period(period.value, year)
        return RevenueAnalyticsResponse(
            period=period,
            year=year,
            items=[
                RevenuePeriodItem(
                    year=row["year"],
                    month=row.get("month"),
                    quarter=row.get("quarter"),
                    revenue=to_money(row["revenue"]),
                    invoice_count=row["invoice_count"],
                )
                for row in rows
            ],
        )
