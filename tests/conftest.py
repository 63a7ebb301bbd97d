"""
Pytest configuration and fixtures.
Provides test app client, async DB session replacement and seed helpers.
"""

from datetime import date
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import invoicing.models  # noqa: F401
from invoicing.main import app
from invoicing.db import session as db_session
from invoicing.db.base import Base
from invoicing.db.session import get_db
from invoicing.models.client import Client, PaymentTerms
from invoicing.models.contract import Contract, ContractLineItem, ContractStatus
from invoicing.models.product import Product


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_engine():
    """Create an in-memory engine with every table created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
def test_session_maker(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture(scope="function")
async def test_db_session(test_session_maker):
    """
    Create a test database session.
    Uses in-memory SQLite for fast tests.
    """
    async with test_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def test_client(test_session_maker, monkeypatch):
    """
    Create a test HTTP client.
    Requests get sessions from the test database.
    """
    async def override_get_db():
        async with test_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    monkeypatch.setattr(db_session, "async_session_maker", test_session_maker)
    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


class RecordingNotificationService:
    """Notification double that remembers which invoices were announced."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.paid = []

    async def invoice_paid(self, invoice) -> bool:
        if self.fail:
            raise RuntimeError("notification channel unavailable")
        self.paid.append(invoice.invoice_number)
        return True


@pytest.fixture
def notifications():
    return RecordingNotificationService()


async def create_client(session, email="billing@acme.test", **kwargs) -> Client:
    values = {
        "name": "Acme Corp",
        "email": email,
        "payment_terms": PaymentTerms.NET30,
        "currency": "USD",
        "tax_exempt": False,
        "is_active": True,
    }
    values.update(kwargs)
    client = Client(**values)
    session.add(client)
    await session.commit()
    return client


async def create_product(session, name="Consulting", price="100.00", **kwargs) -> Product:
    product = Product(name=name, price=Decimal(price), is_active=kwargs.pop("is_active", True), **kwargs)
    session.add(product)
    await session.commit()
    return product


async def create_contract(session, client, lines, **kwargs) -> Contract:
    """
    Insert a contract directly.

    lines holds (product, quantity, unit_price, discount) tuples.
    """
    values = {
        "contract_number": "CON-900001",
        "client_id": client.id,
        "title": "Support agreement",
        "start_date": date(2024, 1, 1),
        "end_date": date(2024, 12, 31),
        "status": ContractStatus.ACTIVE,
        "is_active": True,
        "payment_terms": PaymentTerms.NET15,
        "currency": "USD",
        "tax_rate": Decimal("0.10"),
        "subtotal": Decimal("0"),
        "tax": Decimal("0"),
        "total_amount": Decimal("0"),
    }
    values.update(kwargs)
    contract = Contract(
        **values,
        line_items=[
            ContractLineItem(
                product_id=product.id,
                description=product.name,
                quantity=Decimal(quantity),
                unit_price=Decimal(unit_price),
                discount=Decimal(discount),
                amount=Decimal("0"),
                row_order=index,
            )
            for index, (product, quantity, unit_price, discount) in enumerate(lines)
        ],
    )
    session.add(contract)
    await session.commit()
    return contract
