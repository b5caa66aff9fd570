"""Request Log Writer: best-effort append of one request_logs row per request.

Invariants:
    - append() NEVER raises for store failures; it returns LogWriteResult.failure
    - One leased connection per append, released on every exit path
    - Only INSERT is issued; id and created_at come from the store
    - No retries: a failed append is dropped
"""

import asyncio
import logging

from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError

from pdfsmith.core.domain_types import LogWriteResult
from pdfsmith.core.errors import LogStoreError
from pdfsmith.infrastructure.database import ConnectionPool
from pdfsmith.models.request_log import RequestLog

logger = logging.getLogger(__name__)


class RequestLogWriter:
    """LogStore backed by the connection pool."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    async def append(self, origin_address: str, content: str) -> LogWriteResult:
        try:
            record_id = await self._insert(origin_address, content)
        except LogStoreError as e:
            return LogWriteResult.failure(e.message)
        return LogWriteResult.success(record_id)

    async def _insert(self, origin_address: str, content: str) -> int:
        """Insert and commit; map driver failures to LogStoreError."""
        stmt = insert(RequestLog).values(
            origin_address=origin_address, content=content,
        )
        try:
            async with self._pool.lease() as conn:
                result = await conn.execute(stmt)
                await conn.commit()
                return result.inserted_primary_key[0]
        except SQLAlchemyError as e:
            # sqlalchemy.exc.TimeoutError (pool exhausted) lands here too
            raise LogStoreError(type(e).__name__, "insert") from e
        except (OSError, asyncio.TimeoutError) as e:
            raise LogStoreError(type(e).__name__, "connect") from e
