"""
Health check response schema.
"""

from pydantic import BaseModel
from typing import Dict


class HealthResponse(BaseModel):
    """Service status with the result of each check ("ok" or an error string)."""
    service: str
    version: str
    status: str
    uptime: str
    checks: Dict[str, str] = {}
