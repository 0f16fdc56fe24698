"""Task Routes: list and create tasks for the authenticated caller.

Invariants:
    - Both routes depend on require_authenticated; the identity comes only from the token
    - The POST body is read and validated only after the token is accepted, so an
      unauthenticated request is 401 whatever its body
    - created_date filter must be YYYY-MM-DD (400 otherwise); an empty value means no filter
    - POST returns 200 with the persisted task, server-assigned fields included
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from tasklist.api.dependencies import get_task_service, require_authenticated
from tasklist.core.auth_gate import AuthenticatedRequest
from tasklist.core.domain_types import DAY_PATTERN
from tasklist.schemas.task import TaskCreate, TaskResponse
from tasklist.services.task_service import TaskService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tasks", tags=["tasks"])

_OPTIONAL_DAY_PATTERN = f"^({DAY_PATTERN.strip('^$')})?$"


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    auth: AuthenticatedRequest = Depends(require_authenticated),
    created_date: str | None = Query(None, pattern=_OPTIONAL_DAY_PATTERN),
    service: TaskService = Depends(get_task_service),
):
    """List the caller's tasks, optionally for a single day."""
    records = await service.list_tasks(auth.identity, created_date or None)
    return [TaskResponse.from_record(r) for r in records]


@router.post(
    "",
    response_model=TaskResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": TaskCreate.model_json_schema()}},
        },
    },
)
async def create_task(
    request: Request,
    auth: AuthenticatedRequest = Depends(require_authenticated),
    service: TaskService = Depends(get_task_service),
):
    """Create a task, subject to the caller's daily limit."""
    body = await _read_task_create(request)
    record = await service.create_task(auth.identity, body)
    logger.info("Task created", extra={"user_id": auth.identity})
    return TaskResponse.from_record(record)


async def _read_task_create(request: Request) -> TaskCreate:
    try:
        return TaskCreate.model_validate_json(await request.body())
    except ValidationError as e:
        raise RequestValidationError(
            [{**err, "loc": ("body", *err["loc"])} for err in e.errors(include_url=False)],
        ) from e
