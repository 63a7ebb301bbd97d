"""
Client API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from invoicing.db.session import get_db
from invoicing.controllers.client_controller import ClientController
from invoicing.schemas.client import ClientCreate, ClientResponse

router = APIRouter()


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    client_data: ClientCreate,
    db: AsyncSession = Depends(get_db),
) -> ClientResponse:
    """Create a new client."""
    controller = ClientController(db)
    return await controller.create_client(client_data)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ClientResponse:
    """Get client by ID."""
    controller = ClientController(db)
    client = await controller.get_client(client_id)
    if not client:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Client not found",
        )
    return client
