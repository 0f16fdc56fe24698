"""Task Schemas: Pydantic models for task creation input and task output.

Invariants:
    - TaskCreate accepts content only; id, user_id and created_date in the body are dropped
    - TaskResponse mirrors TaskRecord field-for-field

Design Decisions:
    - extra="ignore" over extra="forbid": clients that echo full task objects still work,
      and spoofed ownership fields are silently discarded rather than trusted
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tasklist.core.domain_types import TaskRecord


class TaskCreate(BaseModel):
    """Caller-supplied task fields."""
    model_config = ConfigDict(extra="ignore")

    content: str = Field(min_length=1, max_length=10_000)

    @field_validator("content")
    @classmethod
    def reject_blank_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("content cannot be empty or whitespace")
        return v


class TaskResponse(BaseModel):
    """Persisted task, including server-assigned fields."""
    id: str
    content: str
    user_id: str
    created_date: str

    @classmethod
    def from_record(cls, record: TaskRecord) -> "TaskResponse":
        return cls(**record.to_dict())
