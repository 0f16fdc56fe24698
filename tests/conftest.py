"""Root conftest: shared env, DB and app fixtures."""

import os
from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from tasklist.api.dependencies import get_clock
from tasklist.db.base import Base
from tasklist.infrastructure.database import get_db
from tasklist.main import app
from tasklist.models.user import User
import tasklist.models  # noqa: F401

# Tests never sign with a production secret or touch a real database
os.environ.setdefault(
    "JWT_SECRET", "test-signing-secret-0123456789abcdef0123456789",
)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")


class FakeClock:
    """Settable clock shared by the codec and the task service."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 14, 9, 30, 0, tzinfo=timezone.utc))


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
async def seed_user(test_db):
    """Insert user 'alice' (password 'wonderland', 3 tasks per day)."""
    user = User(id="alice", password="wonderland", max_todo=3)
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
async def client(test_session_factory, clock):
    """FastAPI test client with DB and clock dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
