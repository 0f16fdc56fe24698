"""Error Hierarchy: typed, categorized exceptions for every task list failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope and never includes internal details
    - Login failures use one message whether the user is unknown or the password is wrong

Design Decisions:
    - Single hierarchy with TaskListError base: one FastAPI handler catches all (uniform error shape)
    - ErrorContext as dataclass: observability fields without coupling to logging
    - debug_info stays server-side: logged by the handler, never rendered
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class TaskListError(Exception):
    """Base exception for all task list errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class AuthenticationFailedError(TaskListError):
    """Login credentials rejected."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "incorrect user_id/pwd",
            "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidTokenError(TaskListError):
    """Token missing, malformed, forged or expired. Reason is kept server-side."""
    def __init__(self, reason: str = "invalid token", context: ErrorContext | None = None):
        super().__init__(
            "Invalid or missing token",
            "INVALID_TOKEN", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.reason = reason


class QuotaExceededError(TaskListError):
    """Daily task creation limit reached."""
    def __init__(self, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"Limited to {limit} tasks per day",
            "QUOTA_EXCEEDED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.INFO, context, 400,
        )
        self.limit = limit


# ─── Internal Errors (500-level) ────────────────────────────────

class IdentityNotFoundError(TaskListError):
    """A valid token names a user the identity store no longer has."""
    def __init__(self, user_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            "Authenticated user no longer exists",
            "IDENTITY_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 500,
        )
        self.user_id = user_id


class StoreUnavailableError(TaskListError):
    """A store call failed. Detail is logged, the client sees a generic message."""
    def __init__(self, operation: str, detail: str = "", context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        ctx.debug_info = {"detail": detail} if detail else None
        super().__init__(
            "Storage temporarily unavailable",
            "STORE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class SigningError(TaskListError):
    """Token signing failed."""
    def __init__(self, detail: str = "", context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"detail": detail} if detail else None
        super().__init__(
            "Could not issue token",
            "SIGNING_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
