"""
Services hold the invoicing workflows. Each one owns its repositories and
commits its own unit of work.
"""

from abc import ABC


class BaseService(ABC):
    """Base class for invoicing services."""
