"""
Sequential human-readable document numbers (INV-000001, CON-000001).

A number is produced by one atomic increment-and-read against a counter store
followed by formatting. Counting existing documents and adding one is a
check-then-act race and is never used.
"""

import enum
import threading
from typing import Dict, Protocol


DEFAULT_NUMBER_WIDTH = 6


class DocumentPrefix(str, enum.Enum):
    """Prefixes for numbered document types."""
    INVOICE = "INV"
    CONTRACT = "CON"


class CounterStore(Protocol):
    """Blocking counter store."""

    def increment(self, key: str) -> int:
        """Atomically increment the counter for key and return the new value."""
        ...


class AsyncCounterStore(Protocol):
    """Counter store backed by an async persistence layer."""

    async def increment(self, key: str) -> int:
        """Atomically increment the counter for key and return the new value."""
        ...


class InMemoryCounterStore:
    """Thread-safe in-process counter store."""

    def __init__(self, initial: Dict[str, int] = None):
        self._values: Dict[str, int] = dict(initial or {})
        self._lock = threading.Lock()

    def increment(self, key: str) -> int:
        with self._lock:
            value = self._values.get(key, 0) + 1
            self._values[key] = value
            return value

    def current(self, key: str) -> int:
        with self._lock:
            return self._values.get(key, 0)


def _prefix_value(prefix) -> str:
    return prefix.value if isinstance(prefix, DocumentPrefix) else str(prefix)


def format_document_number(prefix, sequence: int, width: int = DEFAULT_NUMBER_WIDTH) -> str:
    """
    Format a document number as <PREFIX>-<zero padded sequence>.

    Sequences wider than width are kept whole rather than truncated.
    """
    if sequence < 1:
        raise ValueError(f"Document sequence must be positive, got {sequence}")
    return f"{_prefix_value(prefix)}-{sequence:0{width}d}"


def next_document_number(
    prefix,
    counter_store: CounterStore,
    width: int = DEFAULT_NUMBER_WIDTH,
) -> str:
    """Reserve and format the next number for prefix."""
    key = _prefix_value(prefix)
    return format_document_number(key, counter_store.increment(key), width)


async def next_document_number_async(
    prefix,
    counter_store: AsyncCounterStore,
    width: int = DEFAULT_NUMBER_WIDTH,
) -> str:
    """Reserve and format the next number for prefix against an async store."""
    key = _prefix_value(prefix)
    return format_document_number(key, await counter_store.increment(key), width)
