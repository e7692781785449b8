"""
Alembic environment for the aqi_readings schema.

The target URL is whatever the caller set on the config (the API lifespan
and the test suite do); the alembic CLI falls back to DATABASE_URL.
"""
from logging.config import fileConfig
import os
import sys

from alembic import context
from sqlalchemy import pool

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from api.database import DATABASE_URL, STORAGE_TIMEOUT_SECONDS, make_engine
from api.models.db_models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def _target_url() -> str:
    return config.get_main_option("sqlalchemy.url") or DATABASE_URL


def run_migrations_offline() -> None:
    """Emit the migration SQL without a live connection."""
    context.configure(
        url=_target_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Migrate over an engine with the same storage timeouts as the API."""
    connectable = make_engine(_target_url(), STORAGE_TIMEOUT_SECONDS, poolclass=pool.NullPool)

    try:
        with connectable.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=target_metadata,
                compare_type=True,
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
