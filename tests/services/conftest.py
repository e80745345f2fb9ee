"""Service test fixtures — async DB, fixed clock, ledger helpers, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db, get_clock and get_settings overridden for route tests
    - Ledger helpers open and close their own sessions so each call sees committed state

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so every session
      sees the same database
    - FixedClock starts at a known instant; tests advance it explicitly
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from submarket.api.dependencies import get_clock
from submarket.config import Settings, get_settings
from submarket.core.rent import RentSchedule
from submarket.db.base import Base
from submarket.infrastructure.clock import FixedClock
from submarket.infrastructure.database import get_db
from submarket.infrastructure.ledger import SqlLedger
from submarket.main import app
import submarket.models  # noqa: F401

START = 1_700_000_000


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
def clock():
    return FixedClock(START)


@pytest.fixture
def rent():
    return RentSchedule()


@pytest.fixture
def test_settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        faucet_enabled=True,
        faucet_max_lamports=100_000_000_000,
    )


@pytest.fixture
def ledger(test_session_factory):
    """fund(identity, amount) and balance(identity), each in its own session."""

    class _Ledger:
        async def fund(self, identity: str, amount: int) -> None:
            async with test_session_factory() as db:
                await SqlLedger(db).credit(identity, amount)
                await db.commit()

        async def balance(self, identity: str) -> int:
            async with test_session_factory() as db:
                return await SqlLedger(db).get_balance(identity)

    return _Ledger()


@pytest.fixture
async def client(test_session_factory, clock, test_settings):
    """FastAPI test client with DB, clock and settings dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
