"""Domain Types: identity aliases, the task record, and the canonical creation day.

Invariants:
    - creation_day() is the ONLY formatter for created_date: quota counts and inserts
      must agree on it or the quota check silently diverges from stored data
    - Days are UTC calendar days formatted YYYY-MM-DD
    - TaskRecord.id, user_id and created_date are always server-assigned

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - TaskRecord is a frozen dataclass: tasks are immutable once created
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import NewType

UserId = NewType("UserId", str)
TaskId = NewType("TaskId", str)

DAY_FORMAT = "%Y-%m-%d"
DAY_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def creation_day(moment: datetime) -> str:
    """Format a moment as the UTC calendar day used for quota accounting.

    Naive datetimes are taken to be UTC already.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(DAY_FORMAT)


@dataclass(frozen=True)
class TaskRecord:
    """A persisted task as seen by the core."""
    id: TaskId
    content: str
    user_id: UserId
    created_date: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "content": self.content,
            "user_id": self.user_id,
            "created_date": self.created_date,
        }
