"""
Contract repository for database operations.
"""

from typing import Optional, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from invoicing.db.repositories.base_repository import BaseRepository
from invoicing.models.contract import Contract


class ContractRepository(BaseRepository[Contract]):
    """Repository for contract operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Contract, session)

    def _base_query(self):
        """Base query with line items eagerly loaded."""
        return select(Contract).options(selectinload(Contract.line_items))

    async def get(self, id: UUID) -> Optional[Contract]:
        """Get contract by ID with line items loaded."""
        result = await self.session.execute(self._base_query().where(Contract.id == id))
        return result.scalar_one_or_none()

    async def list(
        self,
        skip: int = 0,
        limit: int = 100,
        **filters,
    ) -> List[Contract]:
        """List contracts with pagination and filters, newest first."""
        query = self._base_query()

        for key, value in filters.items():
            if hasattr(Contract, key):
                query = query.where(getattr(Contract, key) == value)

        query = query.order_by(Contract.created_at.desc(), Contract.contract_number.desc())
        query = query.offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, **filters) -> int:
        """Count contracts matching filters."""
        query = select(func.count(Contract.id))

        for key, value in filters.items():
            if hasattr(Contract, key):
                query = query.where(getattr(Contract, key) == value)

        result = await self.session.execute(query)
        return result.scalar_one()
