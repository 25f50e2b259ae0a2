"""Error Hierarchy: typed, categorized exceptions for reward crediting failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (4xx) carry zero side effects; deployment and storage errors are 5xx
    - to_response() produces the REST envelope used by the global handlers
    - Secrets and signatures never appear in user-facing messages

Design Decisions:
    - Single hierarchy with RewardsError base: one FastAPI handler maps all of them
    - ErrorContext as dataclass: carries platform/event ids for logs without a logging dependency
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFIGURATION = "configuration"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    platform: str | None = None
    event_id: str | None = None
    user_id: str | None = None
    debug_info: dict[str, Any] | None = None


class RewardsError(Exception):
    """Base exception for all reward crediting errors."""

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
                    "platform": self.context.platform,
                    "event_id": self.context.event_id,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidSignatureError(RewardsError):
    """Callback signature mismatch, or required parameters missing/malformed."""
    def __init__(self, message: str = "Invalid signature.", context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_SIGNATURE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class UnrecognizedValueError(RewardsError):
    """Well-formed callback whose reward token maps to no known RewardType."""
    def __init__(self, value: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unknown reward type: {value}",
            "UNRECOGNIZED_VALUE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.value = value


class ForbiddenError(RewardsError):
    """Reward recognized but currently disabled by live configuration."""
    def __init__(self, message: str = "Reward is currently disabled.", context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(RewardsError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class DuplicateEventError(RewardsError):
    """Idempotency marker for this event was inserted concurrently."""
    def __init__(self, scope: str, event_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Event '{event_id}' already recorded in scope '{scope}'",
            "DUPLICATE_EVENT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.scope = scope
        self.event_id = event_id


# ─── Deployment & Infrastructure Errors (500-level) ─────────────

class MisconfiguredSecretError(RewardsError):
    """A verifier's signing secret or key source is absent."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "MISCONFIGURED_SECRET", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class KeyFetchError(RewardsError):
    """Public verification keys could not be retrieved."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to fetch verification keys: {message}",
            "KEY_FETCH_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 503,
        )


class DatabaseError(RewardsError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
