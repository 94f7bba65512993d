# alembic/env.py
# Runs migrations through the async engine; target metadata comes from the table modules.

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from configapi import config as app_config
from configapi.db.base import _to_asyncpg_url, metadata
import configapi.models.pages_table  # noqa: F401  (registers table)
import configapi.models.widgets_table  # noqa: F401  (registers table)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# sqlalchemy.url from alembic.ini / -x overrides wins over the app's DB_URL
url = config.get_main_option("sqlalchemy.url") or app_config.DATABASE_URL
config.set_main_option("sqlalchemy.url", _to_asyncpg_url(url))

target_metadata = metadata


def run_migrations_offline() -> None:
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
