"""Initial schema: users and tasks.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("max_todo", sa.Integer, nullable=False, server_default="5"),
        sa.CheckConstraint("max_todo >= 0", name="ck_users_max_todo_non_negative"),
    )

    op.create_table(
        "tasks",
        sa.Column("seq", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("id", sa.String(36), nullable=False, unique=True),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("user_id", sa.String(255), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_date", sa.String(10), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_tasks_user_id_created_date", "tasks", ["user_id", "created_date"],
    )


def downgrade() -> None:
    op.drop_index("ix_tasks_user_id_created_date", table_name="tasks")
    op.drop_table("tasks")
    op.drop_table("users")
