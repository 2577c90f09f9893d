"""Error Hierarchy — closed, kind-tagged exceptions for every voting store failure.

Invariants:
    - Every error has a code (str), kind (ErrorKind), severity (ErrorSeverity)
    - ErrorKind is closed: validation, not_found, constraint_violation,
      malformed_timestamp, invalid_identifier, corrupt_row, transport
    - Callers branch on `exc.kind` or isinstance, never on message text
    - to_response() produces the REST envelope used at the HTTP boundary

Design Decisions:
    - Single hierarchy with VotingError base: one handler at the boundary maps
      kind -> status (not_found 404, validation/constraint 400, rest 500)
    - ErrorContext as dataclass: operation and identifier travel with the error
      without coupling to the logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorKind(str, Enum):
    """Closed set of failure kinds raised by the core."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONSTRAINT_VIOLATION = "constraint_violation"
    MALFORMED_TIMESTAMP = "malformed_timestamp"
    INVALID_IDENTIFIER = "invalid_identifier"
    CORRUPT_ROW = "corrupt_row"
    TRANSPORT = "transport"


@dataclass
class ErrorContext:
    """Diagnostic context attached to an error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    entity: str | None = None
    entity_id: str | None = None
    debug_info: dict[str, Any] | None = None


class VotingError(Exception):
    """Base exception for all voting store errors."""

    def __init__(
        self,
        message: str,
        code: str,
        kind: ErrorKind,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "kind": self.kind.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "entity": self.context.entity,
                    "entity_id": self.context.entity_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(VotingError):
    """Entity constructor or mutator rejected its input."""
    def __init__(
        self,
        message: str,
        field: str,
        code: str = "VALIDATION_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorKind.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class NotFoundError(VotingError):
    """Requested row does not exist."""
    def __init__(
        self, resource_type: str, resource_id: object, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = ctx.entity or resource_type
        ctx.entity_id = ctx.entity_id or str(resource_id)
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorKind.NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConstraintViolationError(VotingError):
    """Store rejected a write because of a uniqueness or foreign-key rule."""
    def __init__(
        self,
        message: str,
        operation: str,
        rule: str = "unknown",
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            f"Constraint violated during {operation}: {message}",
            "CONSTRAINT_VIOLATION", ErrorKind.CONSTRAINT_VIOLATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.operation = operation
        self.rule = rule


# ─── Decoding Errors (500-level) ────────────────────────────────

class MalformedTimestampError(VotingError):
    """Stored timestamp text matches none of the known layouts."""
    def __init__(self, value: object, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot parse {value!r} as timestamp",
            "MALFORMED_TIMESTAMP", ErrorKind.MALFORMED_TIMESTAMP,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.value = value


class InvalidIdentifierError(VotingError):
    """Stored identifier text is not a valid UUID."""
    def __init__(
        self, value: object, field: str = "id", context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Invalid identifier for {field}: {value!r}",
            "INVALID_IDENTIFIER", ErrorKind.INVALID_IDENTIFIER,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.value = value
        self.field = field


class CorruptRowError(VotingError):
    """A stored row could not be rehydrated into an entity."""
    def __init__(
        self, table: str, row_id: object, reason: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = ctx.entity or table
        ctx.entity_id = ctx.entity_id or str(row_id)
        super().__init__(
            f"Row {table}[{row_id}] is corrupt: {reason}",
            "CORRUPT_ROW", ErrorKind.CORRUPT_ROW,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.table = table
        self.row_id = row_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(VotingError):
    """Connection-level or driver failure."""
    def __init__(
        self,
        message: str,
        operation: str,
        code: str = "STORE_ERROR",
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            f"Store {operation} failed: {message}",
            code, ErrorKind.TRANSPORT,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class StoreTimeoutError(StoreError):
    """Operation exceeded its statement deadline."""
    def __init__(
        self, operation: str, timeout: float | None, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"deadline of {timeout}s exceeded", operation,
            "STORE_TIMEOUT", context,
        )
        self.timeout = timeout
