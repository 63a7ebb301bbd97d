"""
Health check endpoint.
"""

from fastapi import APIRouter, Depends

from invoicing.controllers.health_controller import HealthController
from invoicing.deps.di_container import get_container
from invoicing.schemas.health import HealthResponse

router = APIRouter()


def get_health_controller() -> HealthController:
    return get_container().health_controller()


@router.get("/health", response_model=HealthResponse)
async def get_health(
    controller: HealthController = Depends(get_health_controller),
) -> HealthResponse:
    """Service status, uptime and the database and numbering checks."""
    return await controller.get_health()
