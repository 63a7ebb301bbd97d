"""
Dashboard API endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.db.session import get_db
from invoicing.controllers.dashboard_controller import DashboardController
from invoicing.schemas.dashboard import (
    ClientAnalyticsResponse,
    DashboardStatsResponse,
    RevenueAnalyticsResponse,
    RevenuePeriod,
)

router = APIRouter()


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_stats(
    db: AsyncSession = Depends(get_db),
) -> DashboardStatsResponse:
    """Get headline invoicing figures."""
    controller = DashboardController(db)
    return await controller.get_stats()


@router.get("/clients", response_model=ClientAnalyticsResponse)
async def get_client_analytics(
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
) -> ClientAnalyticsResponse:
    """Get the top clients by invoiced amount."""
    controller = DashboardController(db)
    return await controller.get_client_analytics(limit=limit)


@router.get("/revenue", response_model=RevenueAnalyticsResponse)
async def get_revenue_analytics(
    period: RevenuePeriod = Query(RevenuePeriod.MONTHLY),
    year: Optional[int] = Query(None, ge=1900, le=9999),
    db: AsyncSession = Depends(get_db),
) -> RevenueAnalyticsResponse:
    """Get paid revenue grouped by payment month, quarter or year."""
    controller = DashboardController(db)
    return await controller.get_revenue_analytics(period=period, year=year)
