"""Error Hierarchy: typed, categorized exceptions for every pdfsmith failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Startup errors terminate the process; they are never turned into responses
    - LogStoreError never crosses the request handler boundary
    - ArtifactError is the only error a caller of POST /documents can observe
    - to_response() never includes internal details (paths, driver messages)
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
    CONFIGURATION = "configuration"
    DATABASE = "database"
    ARTIFACT = "artifact"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    artifact_id: str | None = None


class PdfsmithError(Exception):
    """Base exception for all pdfsmith errors."""

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


# ─── Process-fatal Errors ───────────────────────────────────────

class ConfigurationError(PdfsmithError):
    """Required configuration is missing or invalid."""
    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, None, 500,
        )
        self.missing = missing or []


class StartupError(PdfsmithError):
    """The log store could not be reached while building the pool."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Log store unreachable at startup: {message}",
            "STARTUP_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )


# ─── Request-scoped Errors ──────────────────────────────────────

class LogStoreError(PdfsmithError):
    """A single log append failed. Best-effort: absorbed by the handler."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Log store {operation} failed: {message}",
            "LOG_STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.WARNING, context, 503,
        )
        self.operation = operation


class ArtifactError(PdfsmithError):
    """Rendering or persisting the PDF failed. Fails the request."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "ARTIFACT_ERROR", ErrorCategory.ARTIFACT,
            ErrorSeverity.CRITICAL, context, 500,
        )
