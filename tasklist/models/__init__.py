"""ORM Models: SQLAlchemy declarative models for users and tasks.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete before create_all or autogenerate
"""

from tasklist.models.user import User  # noqa: F401
from tasklist.models.task import Task  # noqa: F401
