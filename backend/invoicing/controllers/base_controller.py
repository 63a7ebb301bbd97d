"""
Controllers sit between the endpoints and the services: they call one
service and shape its result into the response schema.
"""

from abc import ABC


class BaseController(ABC):
    """Base class for invoicing controllers."""
