"""Service test fixtures — async DB, record store and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so the readiness check sees the test engine
    - seed/fetch use their own short-lived sessions, like separate requests

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so every session
      sees the same database (ADR: PostgreSQL-specific features not exercised here)
    - raise_app_exceptions=False: the catch-all handler's 500 reaches the test
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from roster_api.db.base import Base
from roster_api.infrastructure.database import get_db, DatabaseSessionManager
from roster_api.infrastructure.record_store import RecordStore
import roster_api.infrastructure.database as db_module
import roster_api.models  # noqa: F401
from roster_api.main import app


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
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def store(test_db):
    return RecordStore(test_db)


@pytest.fixture
def seed(test_session_factory):
    """Insert records directly through the store; returns them as stored."""
    async def _seed(table: str, *records: dict) -> list[dict]:
        async with test_session_factory() as session:
            store = RecordStore(session)
            return [await store.insert(table, record) for record in records]
    return _seed


@pytest.fixture
def fetch(test_session_factory):
    """Read a table back, ordered by id, outside any request."""
    async def _fetch(table: str) -> list[dict]:
        async with test_session_factory() as session:
            return await RecordStore(session).select(table, order_by="id")
    return _fetch


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
