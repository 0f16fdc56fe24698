"""Quota-Guarded Task Creator: creates tasks without ever exceeding the daily limit.

Invariants:
    - count(user, day) <= max_todo(user) after every successful creation
    - id, user_id and created_date are server-assigned; payload supplies content only
    - Quota count and insert use the same creation_day() string
    - A rejected creation writes nothing
    - No retries: store failures propagate as StoreUnavailableError

Design Decisions:
    - Atomic policy: check-and-insert runs as one store transaction
      (insert_task_if_under_limit) inside a per-(user, day) KeyedLock
    - _creation_locks is module-level: deliberate exception to no-global-state rule,
      it must be shared by every request in the process. It holds locks only, no task data
"""

import logging
import uuid
from datetime import datetime
from typing import Callable

from tasklist.core.domain_types import (
    TaskId, TaskRecord, UserId, creation_day, utc_now,
)
from tasklist.core.errors import IdentityNotFoundError, QuotaExceededError
from tasklist.core.keyed_lock import KeyedLock
from tasklist.core.repository_protocols import IdentityStore, TaskStore
from tasklist.schemas.task import TaskCreate

logger = logging.getLogger(__name__)

_creation_locks = KeyedLock()


def new_task_id() -> TaskId:
    return TaskId(str(uuid.uuid4()))


class TaskService:
    """Lists and creates tasks for an authenticated identity."""

    def __init__(
        self,
        identity_store: IdentityStore,
        task_store: TaskStore,
        clock: Callable[[], datetime] = utc_now,
        locks: KeyedLock | None = None,
    ):
        self.identity_store = identity_store
        self.task_store = task_store
        self.clock = clock
        self.locks = locks if locks is not None else _creation_locks

    async def create_task(self, identity: UserId, payload: TaskCreate) -> TaskRecord:
        """Persist a new task for identity if today's quota allows it."""
        limit = await self.identity_store.get_limit(identity)
        if limit is None:
            logger.error(
                "Token names a user that no longer exists",
                extra={"user_id": identity},
            )
            raise IdentityNotFoundError(identity)

        today = creation_day(self.clock())
        task = TaskRecord(
            id=new_task_id(),
            content=payload.content,
            user_id=identity,
            created_date=today,
        )

        async with self.locks.hold((identity, today)):
            inserted = await self.task_store.insert_task_if_under_limit(task, limit)

        if not inserted:
            logger.info(
                "Daily task limit reached",
                extra={"user_id": identity, "limit": limit},
            )
            raise QuotaExceededError(limit)
        return task

    async def list_tasks(
        self, identity: UserId, created_date: str | None = None,
    ) -> list[TaskRecord]:
        """Tasks owned by identity, optionally restricted to one day, in insertion order."""
        return await self.task_store.list_tasks(identity, created_date)
