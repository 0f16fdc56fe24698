"""User ORM: credentials and the per-user daily task limit.

Invariants:
    - id is the caller-facing login handle (string primary key)
    - max_todo >= 0 is the number of tasks the user may create per UTC day
"""

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from tasklist.db.base import Base

DEFAULT_MAX_TODO = 5


class User(Base):
    """Registered user with a daily creation quota."""
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("max_todo >= 0", name="ck_users_max_todo_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    max_todo: Mapped[int] = mapped_column(
        Integer, nullable=False, default=DEFAULT_MAX_TODO,
    )
