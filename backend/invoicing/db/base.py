"""
Declarative base shared by the invoicing models.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Every table registers itself on Base.metadata."""
