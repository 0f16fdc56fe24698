"""FastAPI Dependencies: wires settings, stores and services into route handlers.

Invariants:
    - require_authenticated runs before any protected handler body
    - A rejected token raises InvalidTokenError (401) and the handler never runs
    - Stores share the request's single AsyncSession

Design Decisions:
    - Clock and codec are dependencies so tests can override them per app
"""

from datetime import datetime
from typing import Callable

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from tasklist.config import get_settings
from tasklist.core.auth_gate import AuthenticatedRequest, authenticate
from tasklist.core.domain_types import utc_now
from tasklist.core.errors import InvalidTokenError
from tasklist.core.token_codec import TokenCodec
from tasklist.infrastructure.database import get_db
from tasklist.infrastructure.stores import SqlIdentityStore, SqlTaskStore
from tasklist.services.login import LoginService
from tasklist.services.task_service import TaskService


def get_clock() -> Callable[[], datetime]:
    return utc_now


def get_token_codec(
    clock: Callable[[], datetime] = Depends(get_clock),
) -> TokenCodec:
    settings = get_settings()
    return TokenCodec(
        settings.jwt_secret,
        ttl=settings.token_ttl,
        algorithm=settings.jwt_algorithm,
        clock=clock,
    )


def get_login_service(
    db: AsyncSession = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec),
) -> LoginService:
    return LoginService(SqlIdentityStore(db), codec)


def get_task_service(
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> TaskService:
    return TaskService(SqlIdentityStore(db), SqlTaskStore(db), clock=clock)


async def require_authenticated(
    authorization: str | None = Header(default=None),
    codec: TokenCodec = Depends(get_token_codec),
) -> AuthenticatedRequest:
    """Auth gate for protected routes."""
    auth = authenticate(authorization, codec)
    if auth is None:
        raise InvalidTokenError()
    return auth
