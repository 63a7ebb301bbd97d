"""
Dependency injection container using dependency-injector.
Holds the process-wide services; request-scoped services are built per
request from the database session.
"""

from dependency_injector import containers, providers

from invoicing.core.config import settings
from invoicing.services.health_service import HealthService
from invoicing.services.notification_service import NotificationService
from invoicing.controllers.health_controller import HealthController


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    config = providers.Configuration()

    # Services
    health_service = providers.Singleton(
        HealthService,
        version=config.version,
    )

    notification_service = providers.Singleton(
        NotificationService,
        enabled=config.notifications_enabled,
    )

    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )


_container: Container = None


def build_container() -> Container:
    """Create a container configured from application settings."""
    container = Container()
    container.config.from_dict({
        "version": settings.VERSION,
        "notifications_enabled": settings.NOTIFICATIONS_ENABLED,
    })
    return container


def get_container() -> Container:
    """Get the global container, building it on first use."""
    global _container
    if _container is None:
        _container = build_container()
    return _container


def get_notification_service() -> NotificationService:
    """FastAPI dependency returning the shared notification service."""
    return get_container().notification_service()
