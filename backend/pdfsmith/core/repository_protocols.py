"""Boundary Protocols: contracts between the request handler and its collaborators.

Invariants:
    - RequestHandler depends only on these Protocols, never on SQLAlchemy or fpdf2
    - LogStore.append never raises; failures come back as LogWriteResult
    - DocumentGenerator.generate raises ArtifactError on any failure

Design Decisions:
    - Protocol over ABC: structural subtyping, so tests pass plain fake classes
"""

from typing import Protocol

from pdfsmith.core.domain_types import Artifact, LogWriteResult


class LogStore(Protocol):
    """Append-only sink for request log rows."""
    async def append(
        self, origin_address: str, content: str,
    ) -> LogWriteResult: ...


class DocumentGenerator(Protocol):
    """Renders text into a persisted PDF artifact."""
    async def generate(self, text: str) -> Artifact: ...
