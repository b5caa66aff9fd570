"""FastAPI Dependencies: hand process-wide objects built in the lifespan to routes.

Invariants:
    - Objects are read from app.state, never from module-level singletons
    - Tests replace these via app.dependency_overrides
"""

from fastapi import Request

from pdfsmith.infrastructure.database import ConnectionPool
from pdfsmith.services.request_handler import RequestHandler


def get_request_handler(request: Request) -> RequestHandler:
    return request.app.state.request_handler


def get_pool(request: Request) -> ConnectionPool | None:
    return getattr(request.app.state, "pool", None)
