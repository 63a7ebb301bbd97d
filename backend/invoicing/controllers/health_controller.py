"""
Health controller.
"""

from invoicing.controllers.base_controller import BaseController
from invoicing.schemas.health import HealthResponse
from invoicing.services.health_service import HealthService


class HealthController(BaseController):
    """Exposes the shared health service to the endpoints."""

    def __init__(self, health_service: HealthService):
        self.health_service = health_service

    async def get_health(self) -> HealthResponse:
        return await self.health_service.get_health()
