"""
Product service with business logic.
"""

import logging
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from invoicing.core.exceptions import ConflictException
from invoicing.services.base_service import BaseService
from invoicing.db.repositories.product_repository import ProductRepository
from invoicing.schemas.product import ProductCreate, ProductResponse

logger = logging.getLogger(__name__)


class ProductService(BaseService):
    """Service for product operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.product_repo = ProductRepository(session)

    async def create_product(self, product_data: ProductCreate) -> ProductResponse:
        """Create a new product. SKUs are unique when given."""
        if product_data.sku:
            existing = await self.product_repo.get_by_sku(product_data.sku)
            if existing:
                raise ConflictException(
                    f"A product with SKU {product_data.sku} already exists",
                    details={"product_id": str(existing.id)},
                )

        try:
            product = await self.product_repo.create(**product_data.model_dump(), is_active=True)
        except IntegrityError:
            # Another request stored the same SKU first
            await self.session.rollback()
            raise ConflictException(
                f"A product with SKU {product_data.sku} already exists",
                details={"sku": product_data.sku},
            )
        await self.session.commit()
        logger.info("Product created", extra={"product_id": str(product.id)})
        return ProductResponse.model_validate(product)

    async def get_product(self, product_id: UUID) -> Optional[ProductResponse]:
        """Get product by ID."""
        product = await self.product_repo.get(product_id)
        if not product:
            return None
        return ProductResponse.model_validate(product)

    async def deactivate_product(self, product_id: UUID) -> Optional[ProductResponse]:
        """Deactivate a product so it can no longer be put on new documents."""
        product = await self.product_repo.get(product_id)
        if not product:
            return None

        product.is_active = False
        await self.session.commit()
        logger.info("Product deactivated", extra={"product_id": str(product_id)})
        return ProductResponse.model_validate(product)
