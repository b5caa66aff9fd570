"""Error Handlers: global exception handlers for the pdfsmith API.

Invariants:
    - PdfsmithError → structured JSON with error code, message, severity
    - Exception (catch-all) → never leaks internal details
    - No handler ever returns a file name: a failed request has no artifact
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from pdfsmith.core.errors import PdfsmithError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register pdfsmith domain/infrastructure error handler."""

    @app.exception_handler(PdfsmithError)
    async def pdfsmith_error_handler(request: Request, exc: PdfsmithError):
        logger.error(
            f"PdfsmithError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "artifact_id": exc.context.artifact_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
