"""Boundary Protocols: contracts between core and the user/task stores.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO goes through these Protocol types
    - Any store failure surfaces as StoreUnavailableError, never a raw driver exception
    - count_tasks reflects the caller's own completed inserts (read-your-writes)

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass plain fakes
    - insert_task_if_under_limit is the single conditional write used by task creation:
      the check and the insert happen in one store transaction
"""

from typing import Protocol

from tasklist.core.domain_types import TaskRecord, UserId


class IdentityStore(Protocol):
    """Owns user credentials and each user's daily task limit."""
    async def validate_credential(self, user_id: str, password: str) -> bool: ...
    async def get_limit(self, user_id: UserId) -> int | None: ...


class TaskStore(Protocol):
    """Owns task records and per-user, per-day counts."""
    async def count_tasks(self, user_id: UserId, created_date: str) -> int: ...
    async def insert_task(self, task: TaskRecord) -> None: ...
    async def insert_task_if_under_limit(self, task: TaskRecord, limit: int) -> bool: ...
    async def list_tasks(
        self, user_id: UserId, created_date: str | None = None,
    ) -> list[TaskRecord]: ...
