"""Alembic environment configuration.

Reads DATABASE_URL from learning_api.core.config (same source as the
running app) and imports the table metadata for autogenerate support.
"""

from __future__ import annotations

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine import make_url

from alembic import context
from learning_api.core.config import SETTINGS
from learning_api.db.engine import Base

config = context.config

# Migrations run synchronously: swap the async driver for the sync one
# (postgresql+asyncpg -> postgresql, sqlite+aiosqlite -> sqlite).
if SETTINGS.database_url:
    url = make_url(SETTINGS.database_url)
    sync_url = url.set(drivername=url.get_backend_name())
    config.set_main_option(
        "sqlalchemy.url", sync_url.render_as_string(hide_password=False)
    )

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

import learning_api.db.tables  # noqa: E402, F401

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL without a live database."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
