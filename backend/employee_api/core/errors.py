"""Error Hierarchy — typed, categorized exceptions for all employee API failure modes.

Invariants:
    - Every error has a code (str), kind (ErrorKind), severity (ErrorSeverity)
    - HTTP status is derived from kind via HTTP_STATUS_BY_KIND, never from message text
    - to_response() produces the REST failure envelope {success: false, error: message}
    - Messages are pinned strings; clients and tests match on them

Design Decisions:
    - Closed ErrorKind enum with an explicit status table
    - Email conflicts answer 400, not 409, to keep the established client contract
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorKind(str, Enum):
    """Closed set of failure kinds surfaced to HTTP clients."""
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    INTERNAL = "internal"


HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFLICT: 400,
    ErrorKind.INTERNAL: 500,
}


EMPLOYEE_NOT_FOUND = "Employee not found"
EMAIL_ALREADY_EXISTS = "Employee with this email already exists"
NO_FIELDS_TO_UPDATE = "No fields to update"
DEPARTMENT_REQUIRED = "Department is required"


@dataclass
class ErrorContext:
    """Context attached to an error for logging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    employee_id: int | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class EmployeeApiError(Exception):
    """Base exception for all employee API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        kind: ErrorKind,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.severity = severity
        self.context = context or ErrorContext()

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]

    def to_response(self) -> dict:
        """Convert to the REST failure envelope."""
        return {"success": False, "error": self.message}


# ─── Domain Errors (400-level) ──────────────────────────────────

class EmployeeNotFoundError(EmployeeApiError):
    """No employee row matches the requested id."""
    def __init__(self, employee_id: int | str | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        if ctx.employee_id is None and employee_id is not None:
            ctx.employee_id = _as_int_or_none(employee_id)
        super().__init__(
            EMPLOYEE_NOT_FOUND, "EMPLOYEE_NOT_FOUND", ErrorKind.NOT_FOUND,
            ErrorSeverity.WARNING, ctx,
        )


class InputValidationError(EmployeeApiError):
    """Request input failed field-level validation."""
    def __init__(self, message: str, errors: list[str] | None = None, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorKind.VALIDATION,
            ErrorSeverity.WARNING, context,
        )
        self.errors = errors if errors is not None else [message]

    @classmethod
    def from_errors(cls, errors: list[str], context: ErrorContext | None = None) -> "InputValidationError":
        return cls(", ".join(errors), errors, context)


class EmailConflictError(EmployeeApiError):
    """Email is already held by another employee."""
    def __init__(self, email: str | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        if email is not None:
            ctx.debug_info = {**(ctx.debug_info or {}), "email": email}
        super().__init__(
            EMAIL_ALREADY_EXISTS, "EMAIL_CONFLICT", ErrorKind.CONFLICT,
            ErrorSeverity.WARNING, ctx,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(EmployeeApiError):
    """Database operation failed. The message is the driver's text, unprefixed;
    the failed operation travels in .operation and the context."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            message,
            "DATABASE_ERROR", ErrorKind.INTERNAL,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.operation = operation


def _as_int_or_none(value: int | str) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
