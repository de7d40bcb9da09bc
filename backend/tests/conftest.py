"""
CarValue Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own in-memory SQLite database (aiosqlite) with
       the full schema created from Base.metadata. Endpoint tests talk to
       the FastAPI app through httpx's ASGITransport with get_db_session
       overridden to use that database.

Fixture Hierarchy (all function-scoped):
    ├── db_engine / db_session: in-memory database and a session on it
    ├── mock_db_session: AsyncMock session for store-failure paths
    ├── make_user / make_report: row factories
    ├── captured_events: entity events emitted during the test
    └── test_client: HTTPX AsyncClient bound to the app
"""

import os

# Must run before any carvalue import: settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SESSION_SECRET_KEY"] = "test-session-secret"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from carvalue import events
from carvalue.database import Base, get_db_session
from carvalue.models import Report, User
from carvalue.security import hash_password


@pytest_asyncio.fixture
async def db_engine():
    """A fresh in-memory database; StaticPool keeps the single connection alive."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        with pytest.raises(DatabaseError):
            await reports_service.estimate(mock_db_session, ...)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.get = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    session.info = {}
    return session


@pytest.fixture
def make_user(db_session):
    """Factory: insert a user row directly (bypasses AuthService)."""

    async def _make_user(email="asdf@test.com", password="password", admin=True):
        user = User(email=email, password=hash_password(password), admin=admin)
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_report(db_session):
    """
    Factory: insert a report row directly.

    Defaults describe an approved 2018 toyota corolla at (0, 0) with
    50,000 miles; override any field per test.
    """

    async def _make_report(owner, **overrides):
        fields = {
            "make": "toyota",
            "model": "corolla",
            "price": 10000,
            "year": 2018,
            "mileage": 50000,
            "lng": 0.0,
            "lat": 0.0,
            "approved": True,
        }
        fields.update(overrides)
        report = Report(user_id=owner.id, **fields)
        db_session.add(report)
        await db_session.commit()
        return report

    return _make_report


@pytest.fixture
def captured_events():
    captured = []
    events.subscribe(captured.append)
    yield captured
    events.unsubscribe(captured.append)


@pytest_asyncio.fixture
async def test_client(db_session):
    """
    HTTPX AsyncClient wired to the FastAPI app and the test database.

    The client keeps cookies between requests, so signing up or in
    carries the session into later calls just like a browser.
    """
    from carvalue.main import app

    async def _override_db_session():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db_session] = _override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
