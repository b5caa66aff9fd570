"""Request Handler: per-request orchestration (log best-effort, generate, respond).

Invariants:
    - Stages run in order: received -> logged_or_skipped -> generated -> responded
    - A failed log append is inspected and dropped HERE and nowhere else
    - ArtifactError from the generator propagates unchanged (request-fatal)
    - The artifact is generated from the same resolved text that was logged
    - No retries for either collaborator

Design Decisions:
    - Collaborators injected via constructor (LogStore, DocumentGenerator protocols)
      so tests run against fakes without a database or filesystem
"""

import logging

from pdfsmith.core.domain_types import (
    DEFAULT_PLACEHOLDER_TEXT, IngressRequest, ResponseStatus,
    resolve_origin, resolve_text,
)
from pdfsmith.core.repository_protocols import DocumentGenerator, LogStore

logger = logging.getLogger(__name__)


class RequestHandler:
    """Combines the log store and the document generator for one request."""

    def __init__(
        self,
        log_store: LogStore,
        generator: DocumentGenerator,
        placeholder_text: str = DEFAULT_PLACEHOLDER_TEXT,
    ):
        self._log_store = log_store
        self._generator = generator
        self.placeholder_text = placeholder_text

    def build_request(self, text: object, host: str | None) -> IngressRequest:
        """Resolve decoded input and transport origin into an IngressRequest."""
        return IngressRequest(
            text=resolve_text(text, self.placeholder_text),
            origin_address=resolve_origin(host),
        )

    async def handle(self, request: IngressRequest) -> dict:
        outcome = await self._log_store.append(
            request.origin_address, request.text,
        )
        if not outcome.ok:
            logger.warning(
                f"Dropped request log entry: {outcome.error}",
                extra={
                    "origin_address": request.origin_address,
                    "error_code": "LOG_STORE_ERROR",
                },
            )

        artifact = await self._generator.generate(request.text)
        logger.info(
            "Document created",
            extra={
                "artifact_id": artifact.identifier,
                "origin_address": request.origin_address,
                "record_id": outcome.record_id,
            },
        )
        return {
            "status": ResponseStatus.PDF_CREATED.value,
            "file": artifact.file_name,
        }
