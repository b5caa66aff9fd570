"""Documents Route: the single ingress endpoint, text in and PDF reference out.

Invariants:
    - Origin comes from the transport peer, never from the body
    - Malformed bodies are not rejected; they resolve to the placeholder text
    - Handler work is shielded: a dropped client connection does not cancel
      an in-flight log write or artifact write
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request

from pdfsmith.api.dependencies import get_request_handler
from pdfsmith.schemas.document import DocumentCreated, DocumentRequest
from pdfsmith.services.request_handler import RequestHandler

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/documents", tags=["documents"])


@router.post("", response_model=DocumentCreated)
async def create_document(
    request: Request,
    handler: RequestHandler = Depends(get_request_handler),
):
    """Log the request (best-effort) and render its text into a PDF."""
    body = DocumentRequest.from_body(await request.body())
    ingress = handler.build_request(
        body.text, request.client.host if request.client else None,
    )
    return await asyncio.shield(handler.handle(ingress))
