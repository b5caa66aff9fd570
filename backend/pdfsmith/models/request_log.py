"""RequestLog ORM: append-only log of inbound document requests.

Invariants:
    - id and created_at are assigned by the store, never by the service
    - Rows are never updated or deleted by this service
    - content holds the resolved text (placeholder included), unmodified

Design Decisions:
    - BIGINT identity on PostgreSQL, INTEGER on SQLite so rowid autoincrement applies
"""

from datetime import datetime

from sqlalchemy import BigInteger, Integer, String, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from pdfsmith.db.base import Base


class RequestLog(Base):
    """One row per request that reached the log store."""
    __tablename__ = "request_logs"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    origin_address: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), index=True,
    )
