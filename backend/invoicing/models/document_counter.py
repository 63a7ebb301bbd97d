"""
Document counter model backing sequential document numbers.
"""

from sqlalchemy import Column, String, Integer

from invoicing.db.base import Base


class DocumentCounter(Base):
    """Last issued sequence per document prefix."""

    __tablename__ = "document_counters"

    key = Column(String(20), primary_key=True)
    value = Column(Integer, nullable=False, default=0)
