"""SQL Store Adapters: SQLAlchemy implementations of IdentityStore and TaskStore.

Invariants:
    - Every public method maps SQLAlchemyError to StoreUnavailableError (detail logged)
    - One AsyncSession per request: a creation attempt reads its own writes
    - insert_task_if_under_limit counts and inserts in ONE transaction, after locking
      the owner's users row, so concurrent creators for the same user serialize
    - list_tasks ordering is insertion order (seq): stable across repeated reads

Design Decisions:
    - SELECT ... FOR UPDATE on users row: exact quota on PostgreSQL across workers;
      SQLAlchemy omits the clause on SQLite, where the service's KeyedLock serializes
    - Password check via hmac.compare_digest, run even for unknown users so both
      failure paths take the same code path
"""

import hmac
import logging
from functools import wraps

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tasklist.core.domain_types import TaskRecord, UserId
from tasklist.core.errors import StoreUnavailableError
from tasklist.models.task import Task
from tasklist.models.user import User

logger = logging.getLogger(__name__)

_UNKNOWN_USER_PASSWORD = "\x00unknown-user\x00"


def store_call(operation: str):
    """Decorator: run a store method, translating DB failures into StoreUnavailableError."""
    def decorator(fn):
        @wraps(fn)
        async def wrapper(self, *args, **kwargs):
            try:
                return await fn(self, *args, **kwargs)
            except SQLAlchemyError as e:
                logger.error(
                    f"Store operation {operation} failed: {e}",
                    extra={"operation": operation},
                )
                try:
                    await self.db.rollback()
                except SQLAlchemyError as rollback_error:
                    logger.warning(f"Rollback after {operation} failed: {rollback_error}")
                raise StoreUnavailableError(operation, str(e)) from e
        return wrapper
    return decorator


class SqlIdentityStore:
    """IdentityStore backed by the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @store_call("validate_credential")
    async def validate_credential(self, user_id: str, password: str) -> bool:
        result = await self.db.execute(
            select(User.password).where(User.id == user_id),
        )
        stored = result.scalar_one_or_none()
        matches = hmac.compare_digest(
            (stored if stored is not None else _UNKNOWN_USER_PASSWORD).encode(),
            password.encode(),
        )
        return stored is not None and matches

    @store_call("get_limit")
    async def get_limit(self, user_id: UserId) -> int | None:
        result = await self.db.execute(
            select(User.max_todo).where(User.id == user_id),
        )
        return result.scalar_one_or_none()


class SqlTaskStore:
    """TaskStore backed by the tasks table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, user_id: str, created_date: str) -> int:
        result = await self.db.execute(
            select(func.count(Task.seq)).where(
                Task.user_id == user_id, Task.created_date == created_date,
            ),
        )
        return int(result.scalar_one())

    @store_call("count_tasks")
    async def count_tasks(self, user_id: UserId, created_date: str) -> int:
        return await self._count(user_id, created_date)

    @store_call("insert_task")
    async def insert_task(self, task: TaskRecord) -> None:
        self.db.add(Task.from_record(task))
        await self.db.commit()

    @store_call("insert_task_if_under_limit")
    async def insert_task_if_under_limit(self, task: TaskRecord, limit: int) -> bool:
        await self.db.execute(
            select(User.id).where(User.id == task.user_id).with_for_update(),
        )
        count = await self._count(task.user_id, task.created_date)
        if count >= limit:
            await self.db.rollback()
            return False
        self.db.add(Task.from_record(task))
        await self.db.commit()
        return True

    @store_call("list_tasks")
    async def list_tasks(
        self, user_id: UserId, created_date: str | None = None,
    ) -> list[TaskRecord]:
        query = select(Task).where(Task.user_id == user_id)
        if created_date is not None:
            query = query.where(Task.created_date == created_date)
        query = query.order_by(Task.seq)
        result = await self.db.execute(query)
        return [row.to_record() for row in result.scalars().all()]
