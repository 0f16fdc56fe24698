"""Task ORM: one row per created task.

Invariants:
    - id, user_id and created_date are server-assigned
    - created_date uses the canonical UTC day format (core/domain_types.creation_day)
    - Rows are never updated or deleted by the service

Design Decisions:
    - created_date stored as YYYY-MM-DD string: count lookups and inserts compare
      the exact same text, no timezone conversion in SQL
    - Composite index (user_id, created_date) serves both the quota count and day listing
    - Integer seq primary key gives list ordering a strict insertion order;
      the public id is a separate unique UUID string
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tasklist.db.base import Base
from tasklist.core.domain_types import TaskId, TaskRecord, UserId


class Task(Base):
    """Task entity owned by exactly one user."""
    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_user_id_created_date", "user_id", "created_date"),
    )

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), unique=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id"), nullable=False,
    )
    created_date: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @classmethod
    def from_record(cls, record: TaskRecord) -> "Task":
        return cls(
            id=record.id,
            content=record.content,
            user_id=record.user_id,
            created_date=record.created_date,
        )

    def to_record(self) -> TaskRecord:
        return TaskRecord(
            id=TaskId(self.id),
            content=self.content,
            user_id=UserId(self.user_id),
            created_date=self.created_date,
        )
