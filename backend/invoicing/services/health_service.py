"""
Health service: uptime plus database and numbering checks.
"""

import time
from typing import Callable, Optional

from invoicing.core.config import settings
from invoicing.db import session as db_session
from invoicing.db.repositories.health_repository import HealthRepository
from invoicing.schemas.health import HealthResponse
from invoicing.services.base_service import BaseService


class HealthService(BaseService):
    """Service for health check operations."""

    def __init__(self, session_factory: Optional[Callable] = None, version: Optional[str] = None):
        self.session_factory = session_factory
        self.version = version or settings.VERSION
        self.start_time = time.time()

    def _sessions(self):
        if self.session_factory is not None:
            return self.session_factory
        if db_session.async_session_maker is None:
            db_session.create_sessionmaker()
        return db_session.async_session_maker

    async def get_health(self) -> HealthResponse:
        """
        Probe the database and the document counters.

        Any check other than "ok" degrades the overall status; the check never raises.
        """
        uptime = f"PT{int(time.time() - self.start_time)}S"
        checks = {}

        try:
            async with self._sessions()() as session:
                repo = HealthRepository(session)
                checks["database"] = "ok" if await repo.check_database() else "error"
                checks["numbering"] = "ok" if await repo.check_numbering() else "error"
        except Exception as e:
            checks["database"] = f"error: {e}"

        return HealthResponse(
            service=settings.PROJECT_NAME,
            version=self.version,
            status="ok" if all(check == "ok" for check in checks.values()) else "degraded",
            uptime=uptime,
            checks=checks,
        )
