"""
Client repository for database operations.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from invoicing.db.repositories.base_repository import BaseRepository
from invoicing.models.client import Client


class ClientRepository(BaseRepository[Client]):
    """Repository for client operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Client, session)

    async def get_by_email(self, email: str) -> Optional[Client]:
        """Get client by email address."""
        result = await self.session.execute(
            select(Client).where(Client.email == email)
        )
        return result.scalar_one_or_none()
