"""Login Route: credential exchange for a short-lived token.

Invariants:
    - GET and POST both accepted; user_id/password read from query string or form body
    - 200 body is the bare token (text/plain); failures use the error envelope
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from tasklist.api.dependencies import get_login_service
from tasklist.services.login import LoginService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


async def _read_field(request: Request, name: str) -> str:
    value = request.query_params.get(name)
    if value is None and request.method == "POST":
        form = await request.form()
        field = form.get(name)
        value = field if isinstance(field, str) else None
    return value or ""


@router.api_route(
    "/login", methods=["GET", "POST"], response_class=PlainTextResponse,
)
async def login(
    request: Request, service: LoginService = Depends(get_login_service),
):
    """Exchange user_id/password for a token."""
    user_id = await _read_field(request, "user_id")
    password = await _read_field(request, "password")
    token = await service.login(user_id, password)
    return PlainTextResponse(token)
