"""Domain Types: value objects passed between ingress, handler and collaborators.

Invariants:
    - IngressRequest always carries resolved strings (never None)
    - Artifact is immutable once returned by the generator
    - LogWriteResult is either ok (record_id set) or failed (error set), never both
    - resolve_* functions are PURE: no IO, no logging
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ArtifactId = NewType("ArtifactId", str)     # uuid4 hex, 32 chars
LogRecordId = NewType("LogRecordId", int)   # store-assigned


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_PLACEHOLDER_TEXT = "No Content"
UNKNOWN_ORIGIN = "unknown"
ARTIFACT_SUFFIX = ".pdf"


class ResponseStatus(str, Enum):
    """Status marker returned to the caller."""
    PDF_CREATED = "pdf_created"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class IngressRequest:
    """One inbound call, after decoding. Never persisted as-is."""
    text: str
    origin_address: str


@dataclass(frozen=True)
class Artifact:
    """A rendered PDF written once to durable storage."""
    identifier: ArtifactId
    location: str
    size_bytes: int

    @property
    def file_name(self) -> str:
        return f"{self.identifier}{ARTIFACT_SUFFIX}"


@dataclass(frozen=True)
class LogWriteResult:
    """Outcome of a best-effort log append."""
    record_id: LogRecordId | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, record_id: int) -> "LogWriteResult":
        return cls(record_id=LogRecordId(record_id))

    @classmethod
    def failure(cls, error: str) -> "LogWriteResult":
        return cls(error=error)


# ─── Pure Resolution ─────────────────────────────────────────────

def resolve_text(
    text: object, placeholder: str = DEFAULT_PLACEHOLDER_TEXT,
) -> str:
    """Return text when it is a string, the placeholder otherwise.

    An empty string is a valid string and is kept as-is.
    """
    return text if isinstance(text, str) else placeholder


def resolve_origin(host: str | None) -> str:
    """Return the transport peer host, or 'unknown' when it is unavailable."""
    return host if host else UNKNOWN_ORIGIN
