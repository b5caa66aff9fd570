"""Alembic environment for the request_logs store.

Invariants:
    - DATABASE_URL wins over sqlalchemy.url, rewritten by config.asyncpg_url
      exactly as the service rewrites it
    - Migrations run on one NullPool connection: never the service's bounded pool
    - SQLite (test stores) migrates in batch mode, since it cannot ALTER in place
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from pdfsmith.config import asyncpg_url
from pdfsmith.db.base import Base
import pdfsmith.models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _store_url() -> str:
    url = os.environ.get("DATABASE_URL", "")
    return asyncpg_url(url) if url else config.get_main_option("sqlalchemy.url")


def _configure(**kwargs) -> None:
    url = kwargs.get("url")
    dialect = url.split(":", 1)[0] if url else kwargs["connection"].dialect.name
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=dialect.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL for the request_logs schema without connecting."""
    _configure(
        url=_store_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_on(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = _store_url()
    engine = async_engine_from_config(
        section, prefix="sqlalchemy.", poolclass=pool.NullPool,
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_on)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
