"""
Dashboard controller.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.controllers.base_controller import BaseController
from invoicing.services.dashboard_service import DashboardService
from invoicing.schemas.dashboard import (
    ClientAnalyticsResponse,
    DashboardStatsResponse,
    RevenueAnalyticsResponse,
    RevenuePeriod,
)


class DashboardController(BaseController):
    """Controller for dashboard operations."""

    def __init__(self, session: AsyncSession):
        self.dashboard_service = DashboardService(session)

    async def get_stats(self) -> DashboardStatsResponse:
        """Get headline invoicing figures."""
        return await self.dashboard_service.get_stats()

    async def get_client_analytics(self, limit: int = 10) -> ClientAnalyticsResponse:
        """Get top clients by invoiced amount."""
        return await self.dashboard_service.get_client_analytics(limit=limit)

    async def get_revenue_analytics(
        self,
        period: RevenuePeriod = RevenuePeriod.MONTHLY,
        year: Optional[int] = None,
    ) -> RevenueAnalyticsResponse:
        """Get paid revenue by period."""
        return await self.dashboard_service.get_revenue_analytics(period=period, year=year)
