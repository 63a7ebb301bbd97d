"""
Document counter repository.

Increments run as a single UPDATE ... RETURNING inside the caller's
transaction. The updated row stays locked until commit, so concurrent
creators are serialized and a rolled back creation releases its number.
"""

import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import insert, update, select
from sqlalchemy.exc import IntegrityError

from invoicing.models.document_counter import DocumentCounter

logger = logging.getLogger(__name__)


class DocumentCounterRepository:
    """Repository implementing the async counter store over the document_counters table."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.table = DocumentCounter.__table__

    async def _bump(self, key: str) -> Optional[int]:
        result = await self.session.execute(
            update(self.table)
            .where(self.table.c.key == key)
            .values(value=self.table.c.value + 1)
            .returning(self.table.c.value)
        )
        return result.scalar_one_or_none()

    async def increment(self, key: str) -> int:
        """
        Atomically increment the counter for key and return the new value.

        Args:
            key: Counter key, the document prefix

        Returns:
            The newly reserved sequence value
        """
        value = await self._bump(key)
        if value is not None:
            return value

        try:
            async with self.session.begin_nested():
                await self.session.execute(insert(self.table).values(key=key, value=1))
        except IntegrityError:
            # Another transaction created the row first
            logger.info("Document counter created concurrently, retrying increment", extra={"key": key})
            value = await self._bump(key)
            if value is None:
                raise
            return value

        logger.info("Document counter initialized", extra={"key": key})
        return 1

    async def current(self, key: str) -> int:
        """Last issued value for key, 0 when nothing has been issued."""
        result = await self.session.execute(
            select(self.table.c.value).where(self.table.c.key == key)
        )
        return result.scalar_one_or_none() or 0
