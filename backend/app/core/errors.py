"""Error Hierarchy — typed, categorized exceptions for all Hive user API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the {success: false, msg} envelope the frontend expects
    - context (component, route, user_id) and severity drive the log line, never the response body
    - Business failures from the user-data service carry exactly one ServiceErrorCode

Design Decisions:
    - Single hierarchy with HiveError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ServiceErrorCode enum over string matching on caught exceptions (ADR: closed taxonomy)
"""

from dataclasses import dataclass, field
from enum import Enum
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
    AUTHORIZATION = "authorization"
    CONFLICT = "conflict"
    DATABASE = "database"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


class ServiceErrorCode(str, Enum):
    """Business failures the user-data service may report."""
    USER_NOT_FOUND = "USER_NOT_FOUND"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    OAUTH_REQUIRED = "OAUTH_REQUIRED"
    ACCOUNT_DISABLED = "ACCOUNT_DISABLED"
    EMAIL_EXISTS = "EMAIL_EXISTS"


@dataclass
class ErrorContext:
    """Where a failure happened; read by the global handler when logging it."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    component: str | None = None
    route: str | None = None
    user_id: str | None = None


class HiveError(Exception):
    """Base exception for all Hive user API errors."""

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
        """Convert to the REST failure envelope."""
        return {"success": False, "msg": self.message}


# ─── Service Errors (raised by UserDataService implementations) ──

class UserServiceError(HiveError):
    """Business failure reported by the user-data service."""
    _STATUS = {
        ServiceErrorCode.USER_NOT_FOUND: 401,
        ServiceErrorCode.INVALID_CREDENTIALS: 401,
        ServiceErrorCode.OAUTH_REQUIRED: 400,
        ServiceErrorCode.ACCOUNT_DISABLED: 403,
        ServiceErrorCode.EMAIL_EXISTS: 409,
    }

    def __init__(
        self, code: ServiceErrorCode, message: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code.value, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.ERROR, context, self._STATUS[code],
        )
        self.error_code = code


# ─── Client Errors (400-level) ───────────────────────────────────

class InputValidationError(HiveError):
    """Request body failed shape validation."""
    def __init__(self, message: str, field: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class OAuthRequiredError(HiveError):
    """Account must sign in through its OAuth provider."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "OAUTH_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 400,
        )


class AuthenticationError(HiveError):
    """Missing, invalid, or rejected credentials."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class AccountDisabledError(HiveError):
    """Credentials were valid but the account is disabled."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Your account has been disabled", "ACCOUNT_DISABLED",
            ErrorCategory.AUTHORIZATION, ErrorSeverity.WARNING, context, 403,
        )


class ConflictError(HiveError):
    """Resource already exists."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Infrastructure Errors (500-level) ───────────────────────────

class InternalError(HiveError):
    """Unclassified failure; message is safe to show the client."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class DatabaseError(HiveError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ConfigurationError(HiveError):
    """Application wiring is incomplete or invalid."""
    def __init__(self, message: str, setting: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.setting = setting
