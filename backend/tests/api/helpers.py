"""Helpers shared by API tests."""

import asyncio

from sqlalchemy import select

from pdfsmith.main import create_app
from pdfsmith.models.request_log import RequestLog
from pdfsmith.services.log_writer import RequestLogWriter
from pdfsmith.services.request_handler import RequestHandler

ORIGIN = "203.0.113.7"


def build_app(pool, generator):
    """App with state wired by hand: ASGITransport does not run the lifespan."""
    app = create_app()
    app.state.pool = pool
    app.state.request_handler = RequestHandler(RequestLogWriter(pool), generator)
    return app


async def fetch_logs(pool) -> list:
    async with pool.lease() as conn:
        result = await conn.execute(select(RequestLog).order_by(RequestLog.id))
        return result.all()


class SlowGenerator:
    """Wraps a generator, sleeping first; signals when it starts and finishes."""

    def __init__(self, inner, delay: float):
        self.inner = inner
        self.delay = delay
        self.started = asyncio.Event()
        self.finished = asyncio.Event()

    async def generate(self, text: str):
        self.started.set()
        await asyncio.sleep(self.delay)
        artifact = await self.inner.generate(text)
        self.finished.set()
        return artifact
