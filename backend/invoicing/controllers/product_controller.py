"""
Product controller.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.controllers.base_controller import BaseController
from invoicing.services.product_service import ProductService
from invoicing.schemas.product import ProductCreate, ProductResponse


class ProductController(BaseController):
    """Controller for product operations."""

    def __init__(self, session: AsyncSession):
        self.product_service = ProductService(session)

    async def create_product(self, product_data: ProductCreate) -> ProductResponse:
        """Create a new product."""
        return await self.product_service.create_product(product_data)

    async def get_product(self, product_id: UUID) -> Optional[ProductResponse]:
        """Get product by ID."""
        return await self.product_service.get_product(product_id)

    async def deactivate_product(self, product_id: UUID) -> Optional[ProductResponse]:
        """Deactivate a product."""
        return await self.product_service.deactivate_product(product_id)
