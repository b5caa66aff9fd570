"""Connection Pool: bounded, reusable async connections to the log store.

Invariants:
    - At most max_connections connections exist at once (max_overflow=0)
    - acquire() suspends the calling task, never the event loop, while the bound is exhausted
    - Every leased connection is released on every exit path of lease()
    - Stale connections detected by pool_pre_ping and recycled by the pool, not by callers
    - open() fails with StartupError when the store is unreachable

Design Decisions:
    - SQLAlchemy's AsyncAdaptedQueuePool is the bounded queue of handles;
      poolclass is explicit so SQLite URLs get the same bounded behaviour as PostgreSQL
    - Core AsyncConnection handles, not ORM sessions: the only statement is a single INSERT
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool

from pdfsmith.core.errors import StartupError
from pdfsmith.db.base import Base
import pdfsmith.models  # noqa: F401

logger = logging.getLogger(__name__)


class ConnectionPool:
    """Bounded pool of log store connections shared by concurrent requests."""

    def __init__(
        self,
        database_url: str,
        max_connections: int = 10,
        acquire_timeout_seconds: float = 30.0,
        pool_recycle_seconds: int = 3600,
    ):
        if max_connections < 1:
            raise ValueError("max_connections must be >= 1")
        self.max_connections = max_connections
        self.engine: AsyncEngine = create_async_engine(
            database_url,
            poolclass=AsyncAdaptedQueuePool,
            pool_size=max_connections,
            max_overflow=0,
            pool_timeout=acquire_timeout_seconds,
            pool_pre_ping=True,
            pool_recycle=pool_recycle_seconds,
        )

    @classmethod
    async def open(cls, database_url: str, **kwargs) -> "ConnectionPool":
        """Create the pool and prove the store is reachable."""
        pool = cls(database_url, **kwargs)
        try:
            async with pool.lease() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            await pool.dispose()
            logger.error(f"Log store unreachable at startup: {e}")
            raise StartupError(type(e).__name__) from e
        logger.info(
            "Connection pool ready",
            extra={"max_connections": pool.max_connections},
        )
        return pool

    async def acquire(self) -> AsyncConnection:
        """Lease a connection, waiting up to the acquire timeout for a free one."""
        return await self.engine.connect()

    async def release(self, conn: AsyncConnection) -> None:
        """Return a leased connection to the pool (rolls back anything uncommitted)."""
        await conn.close()

    @asynccontextmanager
    async def lease(self) -> AsyncGenerator[AsyncConnection, None]:
        """Scoped acquire/release."""
        conn = await self.acquire()
        try:
            yield conn
        finally:
            await self.release(conn)

    async def create_schema(self) -> None:
        """Create missing tables from the ORM metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check store connectivity (for readiness probes)."""
        try:
            async with self.lease() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Log store health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
