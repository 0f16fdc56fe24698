"""Error Handlers: global exception handlers for the task list API.

Invariants:
    - TaskListError → structured JSON with error code, message, severity
    - RequestValidationError → 400 with field-level error details
    - HTTPException (unknown path 404, wrong verb 405) → same envelope shape
    - Exception (catch-all) → never leaks internal details
    - 401 responses carry WWW-Authenticate: Bearer

Design Decisions:
    - Four-layer handler: domain, validation, routing, catch-all
    - 500-level domain errors logged with their server-side debug_info; 400-level at INFO
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasklist.api.middleware import internal_error_response
from tasklist.core.errors import ErrorSeverity, TaskListError

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES = {
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(TaskListError)
    async def task_list_error_handler(request: Request, exc: TaskListError):
        """Handle all task list domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "user_id": exc.context.user_id,
            "operation": exc.context.operation,
        }
        if exc.http_status >= 500:
            logger.error(
                f"TaskListError: {exc.message} {exc.context.debug_info or ''}".rstrip(),
                extra=extra,
            )
        else:
            logger.info(f"TaskListError: {exc.message}", extra=extra)
        headers = None
        if exc.http_status == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(), headers=headers,
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Render routing errors in the standard envelope."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
                    "message": str(exc.detail),
                    "category": "validation",
                    "severity": ErrorSeverity.ERROR.value,
                },
            },
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all, never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return internal_error_response()


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
