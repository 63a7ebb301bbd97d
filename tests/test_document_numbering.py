"""
Document numbering tests: formatting, in-process concurrency and the
database backed counter.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from invoicing.db.repositories.document_counter_repository import DocumentCounterRepository
from invoicing.utils.document_numbering import (
    DocumentPrefix,
    InMemoryCounterStore,
    format_document_number,
    next_document_number,
    next_document_number_async,
)


def test_format_pads_to_six_digits():
    assert format_document_number("INV", 1) == "INV-000001"
    assert format_document_number(DocumentPrefix.CONTRACT, 42) == "CON-000042"


def test_format_keeps_wide_sequences_whole():
    assert format_document_number("INV", 1234567) == "INV-1234567"


def test_format_rejects_non_positive_sequence():
    with pytest.raises(ValueError):
        format_document_number("INV", 0)


def test_first_number_for_fresh_store():
    store = InMemoryCounterStore()
    assert next_document_number(DocumentPrefix.INVOICE, store) == "INV-000001"
    assert next_document_number(DocumentPrefix.INVOICE, store) == "INV-000002"


def test_prefixes_have_independent_sequences():
    store = InMemoryCounterStore({"INV": 7})
    assert next_document_number("INV", store) == "INV-000008"
    assert next_document_number("CON", store) == "CON-000001"


def test_concurrent_requests_get_distinct_gapless_numbers():
    store = InMemoryCounterStore()
    requests = 200

    with ThreadPoolExecutor(max_workers=16) as pool:
        numbers = list(pool.map(lambda _: next_document_number("INV", store), range(requests)))

    assert len(set(numbers)) == requests
    assert sorted(numbers) == [f"INV-{n:06d}" for n in range(1, requests + 1)]
    assert store.current("INV") == requests


def test_two_simultaneous_first_invoices_are_not_both_number_one():
    store = InMemoryCounterStore()

    with ThreadPoolExecutor(max_workers=2) as pool:
        first, second = pool.map(lambda _: next_document_number("INV", store), range(2))

    assert {first, second} == {"INV-000001", "INV-000002"}


async def test_async_numbers_from_in_memory_store_are_distinct():
    class AsyncStore:
        def __init__(self):
            self.store = InMemoryCounterStore()

        async def increment(self, key):
            await asyncio.sleep(0)
            return self.store.increment(key)

    store = AsyncStore()
    numbers = await asyncio.gather(*(next_document_number_async("INV", store) for _ in range(50)))

    assert len(set(numbers)) == 50


async def test_database_counter_issues_sequential_values(test_db_session):
    repo = DocumentCounterRepository(test_db_session)

    assert await repo.current("INV") == 0
    assert await next_document_number_async("INV", repo) == "INV-000001"
    assert await next_document_number_async("INV", repo) == "INV-000002"
    assert await next_document_number_async("CON", repo) == "CON-000001"
    assert await next_document_number_async("INV", repo) == "INV-000003"
    await test_db_session.commit()

    assert await repo.current("INV") == 3
    assert await repo.current("CON") == 1


async def test_database_counter_releases_number_on_rollback(test_db_session):
    repo = DocumentCounterRepository(test_db_session)

    assert await repo.increment("INV") == 1
    await test_db_session.commit()

    assert await repo.increment("INV") == 2
    await test_db_session.rollback()

    assert await repo.increment("INV") == 2
