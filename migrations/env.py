# migrations/env.py
from __future__ import annotations

import asyncio
import os
from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import pool, text
from sqlalchemy.ext.asyncio import create_async_engine

# Load .env before settings
env_path = os.path.join(os.path.dirname(__file__), "..", ".env")
load_dotenv(env_path)

from citycalc.core.config import settings  # noqa: E402
from citycalc.core.db import Base  # noqa: E402
import citycalc.db.models  # noqa: E402,F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


# ────────────────────────────────────────────
# Restrict Alembic to the configured schema
# ────────────────────────────────────────────
def include_name(name, type_, parent_names):
    if type_ == "schema":
        return name == settings.database_schema
    return True


def _configure_kwargs() -> dict:
    kwargs: dict = {
        "target_metadata": target_metadata,
        "compare_server_default": True,
        "compare_type": True,
    }
    if settings.database_schema:
        kwargs.update(
            include_name=include_name,
            include_schemas=True,
            version_table_schema=settings.database_schema,
        )
    return kwargs


# ────────────────────────────────────────────
# OFFLINE migrations
# ────────────────────────────────────────────
def run_migrations_offline() -> None:
    context.configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_kwargs(),
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(connection=connection, **_configure_kwargs())
    with context.begin_transaction():
        context.run_migrations()


# ────────────────────────────────────────────
# ONLINE migrations (async)
# ────────────────────────────────────────────
async def run_migrations_online() -> None:
    engine = create_async_engine(settings.database_url, poolclass=pool.NullPool)

    async with engine.begin() as conn:
        if settings.database_schema:
            await conn.execute(
                text(f'CREATE SCHEMA IF NOT EXISTS "{settings.database_schema}"')
            )
        await conn.run_sync(do_run_migrations)

    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
