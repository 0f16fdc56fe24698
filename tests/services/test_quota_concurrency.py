"""Concurrent creation: K simultaneous requests against limit N store exactly N.

Invariants:
    - Each attempt uses its own session (one per request, as in production)
    - Holds across repeated trials, one trial per day

Design Decisions:
    - File-backed SQLite: every session gets its own connection, like separate requests
"""

import asyncio
from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tasklist.core.domain_types import creation_day
from tasklist.core.errors import QuotaExceededError
from tasklist.db.base import Base
from tasklist.infrastructure.stores import SqlIdentityStore, SqlTaskStore
from tasklist.models.user import User
from tasklist.schemas.task import TaskCreate
from tasklist.services.task_service import TaskService

LIMIT = 3
CONCURRENT_ATTEMPTS = 12
TRIALS = 5


@pytest.fixture
async def file_session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'quota.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as db:
        db.add(User(id="alice", password="wonderland", max_todo=LIMIT))
        await db.commit()
    yield factory
    await engine.dispose()


async def test_concurrent_creations_store_exactly_limit(file_session_factory, clock):
    async def attempt(i: int) -> bool:
        async with file_session_factory() as db:
            service = TaskService(SqlIdentityStore(db), SqlTaskStore(db), clock=clock)
            try:
                await service.create_task("alice", TaskCreate(content=f"task {i}"))
            except QuotaExceededError:
                return False
            return True

    for _ in range(TRIALS):
        results = await asyncio.gather(
            *(attempt(i) for i in range(CONCURRENT_ATTEMPTS)),
        )
        assert sum(results) == LIMIT

        async with file_session_factory() as db:
            count = await SqlTaskStore(db).count_tasks("alice", creation_day(clock.now))
        assert count == LIMIT
        clock.now = clock.now + timedelta(days=1)
