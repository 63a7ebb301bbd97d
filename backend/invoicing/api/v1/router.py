"""
API v1 router that aggregates all endpoint routers.
"""

from fastapi import APIRouter

from invoicing.api.v1.endpoints import (
    health,
    clients,
    products,
    contracts,
    invoices,
    payments,
    dashboard,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(contracts.router, prefix="/contracts", tags=["contracts"])
api_router.include_router(invoices.router, prefix="/invoices", tags=["invoices"])
api_router.include_router(payments.router, prefix="/invoices", tags=["payments"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
