"""
Client controller.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.controllers.base_controller import BaseController
from invoicing.services.client_service import ClientService
from invoicing.schemas.client import ClientCreate, ClientResponse


class ClientController(BaseController):
    """Controller for client operations."""

    def __init__(self, session: AsyncSession):
        self.client_service = ClientService(session)

    async def create_client(self, client_data: ClientCreate) -> ClientResponse:
        """Create a new client."""
        return await self.client_service.create_client(client_data)

    async def get_client(self, client_id: UUID) -> Optional[ClientResponse]:
        """Get client by ID."""
        return await self.client_service.get_client(client_id)
