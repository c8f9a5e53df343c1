"""
Test configuration and fixtures
"""

import os
import tempfile
from decimal import Decimal

# Settings must exist before the application modules are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="bank_transfers_logs_"))
os.environ.setdefault("SIMPLE_ADMIN_TOKEN", "test-token")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bank_transfers.api.deps import get_db
from bank_transfers.app import app
from bank_transfers.db.models import AccountModel, BankModel
from bank_transfers.db.session import Base

# In-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test."""
    test_engine = create_async_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(session_factory):
    """
    Two accounts (2000 and 1000) and one bank with no transfers yet.
    """
    async with session_factory() as session:
        async with session.begin():
            origin = AccountModel(owner="Martin", balance=Decimal("2000"))
            destination = AccountModel(owner="Alicia", balance=Decimal("1000"))
            bank = BankModel(name="National Bank", total_transfers=0)
            session.add_all([origin, destination, bank])
            await session.flush()
            ids = {"origin": origin.id, "destination": destination.id, "bank": bank.id}
    return ids


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client driving the app in-process with the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def fetch_state(session_factory, seeded):
    """Read both balances and the bank counter straight from the database."""

    async def _fetch():
        async with session_factory() as session:
            origin = await session.get(AccountModel, seeded["origin"])
            destination = await session.get(AccountModel, seeded["destination"])
            bank = await session.get(BankModel, seeded["bank"])
            return Decimal(origin.balance), Decimal(destination.balance), bank.total_transfers

    return _fetch
