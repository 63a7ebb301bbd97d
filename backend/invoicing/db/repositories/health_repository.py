"""
Health repository: connectivity and schema checks used by the health check.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError

from invoicing.models.document_counter import DocumentCounter


class HealthRepository:
    """Read-only checks against the invoicing database."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def check_database(self) -> bool:
        """True when the database answers a trivial query."""
        try:
            result = await self.session.execute(text("SELECT 1"))
            return result.scalar() == 1
        except SQLAlchemyError:
            return False

    async def check_numbering(self) -> bool:
        """True when the document counter table exists and can be read."""
        try:
            await self.session.execute(select(func.count()).select_from(DocumentCounter))
            return True
        except SQLAlchemyError:
            return False
