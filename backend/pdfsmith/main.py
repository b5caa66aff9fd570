"""pdfsmith API: FastAPI application factory and lifespan.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Pool, generator and handler built ONCE per process in the lifespan and kept on app.state
    - Lifespan startup fails (and the process exits) when the log store is unreachable
    - The artifact directory exists before the first request is served
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from pdfsmith import __version__
from pdfsmith.api.error_handlers import register_error_handlers
from pdfsmith.api.routes import documents, health
from pdfsmith.config import Settings, get_settings
from pdfsmith.infrastructure.database import ConnectionPool
from pdfsmith.infrastructure.observability import setup_logging
from pdfsmith.services.document_generator import PdfDocumentGenerator
from pdfsmith.services.log_writer import RequestLogWriter
from pdfsmith.services.request_handler import RequestHandler

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the ASGI app. Settings are read lazily at startup when not given."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cfg = settings or get_settings()
        setup_logging(cfg.log_level, cfg.log_format)
        pool = await ConnectionPool.open(
            cfg.database_url,
            max_connections=cfg.database_max_connections,
            acquire_timeout_seconds=cfg.database_acquire_timeout_seconds,
            pool_recycle_seconds=cfg.database_pool_recycle_seconds,
        )
        output_dir = Path(cfg.artifact_dir)
        try:
            if cfg.database_create_schema:
                await pool.create_schema()
            output_dir.mkdir(parents=True, exist_ok=True)
        except BaseException:
            await pool.dispose()
            raise

        app.state.pool = pool
        app.state.request_handler = RequestHandler(
            RequestLogWriter(pool),
            PdfDocumentGenerator(output_dir),
            placeholder_text=cfg.placeholder_text,
        )
        logger.info("pdfsmith API started")
        yield
        logger.info("pdfsmith API shutting down")
        await pool.dispose()

    app = FastAPI(title="pdfsmith API", version=__version__, lifespan=lifespan)
    app.include_router(health.router)
    app.include_router(documents.router)
    register_error_handlers(app)
    return app
