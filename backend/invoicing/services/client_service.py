"""
Client service with business logic.
"""

import logging
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from invoicing.core.exceptions import ConflictException
from invoicing.services.base_service import BaseService
from invoicing.db.repositories.client_repository import ClientRepository
from invoicing.schemas.client import ClientCreate, ClientResponse

logger = logging.getLogger(__name__)


class ClientService(BaseService):
    """Service for client operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.client_repo = ClientRepository(session)

    async def create_client(self, client_data: ClientCreate) -> ClientResponse:
        """Create a new client. Email addresses are unique."""
        existing = await self.client_repo.get_by_email(client_data.email)
        if existing:
            raise ConflictException(
                f"A client with email {client_data.email} already exists",
                details={"client_id": str(existing.id)},
            )

        try:
            client = await self.client_repo.create(**client_data.model_dump(), is_active=True)
        except IntegrityError:
            # Another request stored the same email first
            await self.session.rollback()
            raise ConflictException(
                f"A client with email {client_data.email} already exists",
                details={"email": client_data.email},
            )
        await self.session.commit()
        logger.info("Client created", extra={"client_id": str(client.id)})
        return ClientResponse.model_validate(client)

    async def get_client(self, client_id: UUID) -> Optional[ClientResponse]:
        """Get client by ID."""
        client = await self.client_repo.get(client_id)
        if not client:
            return None
        return ClientResponse.model_validate(client)
