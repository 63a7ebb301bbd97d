"""
Dashboard response schemas.
"""

import enum
from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID
from decimal import Decimal


class DashboardStatsResponse(BaseModel):
    """Headline invoicing figures."""
    total_clients: int
    total_invoices: int
    unpaid_invoices: int
    overdue_invoices: int
    total_revenue: Decimal
    outstanding_amount: Decimal


class ClientAnalyticsItem(BaseModel):
    """Invoicing figures for a single client."""
    client_id: UUID
    name: str
    email: str
    total_invoiced: Decimal
    paid_revenue: Decimal
    invoice_count: int
    paid_invoice_count: int
    payment_rate: Decimal


class ClientAnalyticsResponse(BaseModel):
    """Top clients by invoiced amount."""
    items: List[ClientAnalyticsItem]


class RevenuePeriod(str, enum.Enum):
    """Grouping for revenue analytics."""
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class RevenuePeriodItem(BaseModel):
    """Paid revenue for one period; month or quarter is set for the finer groupings."""
    year: int
    month: Optional[int] = None
    quarter: Optional[int] = None
    revenue: Decimal
    invoice_count: int


class RevenueAnalyticsResponse(BaseModel):
    """Paid revenue by payment date, latest period first."""
    period: RevenuePeriod
    year: int
    items: List[RevenuePeriodItem]
