"""
Product repository for database operations.
"""

from typing import Iterable, List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from invoicing.db.repositories.base_repository import BaseRepository
from invoicing.models.product import Product


class ProductRepository(BaseRepository[Product]):
    """Repository for product operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Product, session)

    async def get_many(self, ids: Iterable[UUID]) -> List[Product]:
        """Get every product whose id is in ids; missing ids are simply absent."""
        unique_ids = list(set(ids))
        if not unique_ids:
            return []
        result = await self.session.execute(
            select(Product).where(Product.id.in_(unique_ids))
        )
        return list(result.scalars().all())

    async def get_by_sku(self, sku: str) -> Optional[Product]:
        """Get product by stock keeping unit."""
        result = await self.session.execute(
            select(Product).where(Product.sku == sku)
        )
        return result.scalar_one_or_none()
