"""Error Hierarchy — typed, categorized exceptions for all Folio failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are raised before any store access
    - StoreError is always surfaced to the client (500) and paired with an audit event
    - to_response() produces the REST envelope; no internal details leaked in messages

Design Decisions:
    - Single hierarchy with FolioError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: parameter/entity/event fields without coupling to logging
    - Missing fan-out slots are NOT errors: they never reach this hierarchy
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


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    parameter: str | None = None
    entity_type: str | None = None
    entity_id: str | None = None
    event_id: str | None = None
    uri: str | None = None
    debug_info: dict[str, Any] | None = None


class FolioError(Exception):
    """Base exception for all Folio errors."""

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
                "context": {
                    "parameter": self.context.parameter,
                    "entity_type": self.context.entity_type,
                    "entity_id": self.context.entity_id,
                    "event_id": self.context.event_id,
                    "uri": self.context.uri,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class ValidationError(FolioError):
    """Malformed request parameter (boolean, integer, enum, ID shape, date)."""
    def __init__(self, message: str, parameter: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.parameter = parameter
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.parameter = parameter


class NotFoundError(FolioError):
    """Requested entity (or entity version) does not exist."""
    def __init__(
        self, entity_type: str, entity_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity_type = entity_type
        ctx.entity_id = entity_id
        super().__init__(
            f"{entity_type} '{entity_id}' not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class UnprocessableEntityError(FolioError):
    """Entity body is well-formed but fails semantic validation."""
    def __init__(
        self, entity_type: str, problems: list[str], context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity_type = entity_type
        super().__init__(
            f"Invalid {entity_type}: {'; '.join(problems)}",
            "UNPROCESSABLE_ENTITY", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 422,
        )
        self.problems = problems

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["problems"] = self.problems
        return response


class AuthenticationError(FolioError):
    """Credentials rejected (unknown user, wrong password, disabled account)."""
    def __init__(self, message: str = "Invalid credentials", context: ErrorContext | None = None):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(FolioError):
    """Backing store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class ListingTimeoutError(FolioError):
    """Listing did not complete within the configured request timeout."""
    def __init__(self, listing: str, timeout_seconds: float, context: ErrorContext | None = None):
        super().__init__(
            f"Listing {listing} exceeded {timeout_seconds}s",
            "LISTING_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.ERROR, context, 504,
        )
        self.listing = listing
