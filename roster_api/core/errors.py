"""Error Hierarchy — typed, categorized exceptions for every Roster API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) reply {"error": message}
    - Store/internal errors (500-level) reply {"error": "Server xatosi", "detail": ...}
    - Not-found on update/delete is a StoreError, same 500 shape as an outage

Design Decisions:
    - Single hierarchy with RosterError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Client-facing messages kept in Uzbek: the roster frontend displays them verbatim
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


SERVER_ERROR_MESSAGE = "Server xatosi"
DUPLICATE_ATTENDANCE_MESSAGE = "Bu guruhning bugungi davomati mavjud."


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    table: str | None = None
    operation: str | None = None
    record_id: Any = None


class RosterError(Exception):
    """Base exception for all Roster API errors."""

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
        """Convert to the REST error body."""
        return {"error": self.message}

    def log_extra(self) -> dict:
        """Fields surfaced by the JSON log formatter."""
        return {
            "error_code": self.code,
            "table": self.context.table,
            "record_id": self.context.record_id,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class DuplicateAttendanceError(RosterError):
    """An attendance record for the same (date, group, day) already exists."""
    def __init__(
        self, date: Any, group: Any, day: Any, context: ErrorContext | None = None,
    ):
        super().__init__(
            DUPLICATE_ATTENDANCE_MESSAGE, "DUPLICATE_ATTENDANCE",
            ErrorCategory.BUSINESS_RULE, ErrorSeverity.WARNING, context, 400,
        )
        self.triple = (date, group, day)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(RosterError):
    """A store call failed: query, constraint, missing row or connectivity."""
    def __init__(
        self, detail: str, operation: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            SERVER_ERROR_MESSAGE, "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.detail = detail
        self.operation = operation

    def to_response(self) -> dict:
        return {"error": self.message, "detail": self.detail}


def internal_error_response(exc: BaseException) -> dict:
    """Body for exceptions that escaped every typed handler."""
    return {"error": SERVER_ERROR_MESSAGE, "detail": str(exc) or type(exc).__name__}
