"""Request Middleware: permissive CORS on every response and per-request logging.

Invariants:
    - Every response, errors included, carries wildcard Allow-Origin/Headers/Methods
    - OPTIONS on any path answers 200 with an empty body, before routing or auth
    - An exception escaping the app becomes the generic INTERNAL_ERROR 500 here,
      so it still gets CORS headers and an access-log line
    - Each request logged once with method, path, status and duration
"""

import logging
import time

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from tasklist.core.errors import ErrorSeverity

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "*",
}

INTERNAL_ERROR_BODY = {
    "error": {
        "code": "INTERNAL_ERROR",
        "message": "An unexpected error occurred",
        "category": "internal",
        "severity": ErrorSeverity.CRITICAL.value,
    },
}


def internal_error_response() -> JSONResponse:
    """Generic 500, never leaks internal details."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=INTERNAL_ERROR_BODY,
    )


def register_middleware(app: FastAPI) -> None:
    """Attach the CORS/logging middleware to the app."""

    @app.middleware("http")
    async def cors_and_access_log(request: Request, call_next):
        started = time.perf_counter()
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    f"Unhandled exception on {request.url.path}: {e}",
                    exc_info=True,
                )
                response = internal_error_response()
        response.headers.update(CORS_HEADERS)
        logger.info(
            f"{request.method} {request.url.path}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return response
