import os
from logging.config import fileConfig

from sqlalchemy import create_engine, pool
from sqlmodel import SQLModel

from alembic import context
from src.devlog.core.config import get_settings

# Import all table models for metadata
from src.devlog.models import DocumentRecord  # noqa: F401

config = context.config

if config.config_file_name is not None and os.path.exists(config.config_file_name):
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata

# Async drivers and the sync drivers Alembic runs with instead
_SYNC_DRIVERS = {
    "+aiosqlite": "",
    "+asyncpg": "+psycopg",
}


def get_database_url() -> str:
    """Database URL for migrations: explicit Alembic option, else settings."""
    return config.get_main_option("sqlalchemy.url") or get_settings().database_url


def get_url() -> str:
    """Get sync database URL (Alembic runs with a sync engine)."""
    url = get_database_url()
    for async_driver, sync_driver in _SYNC_DRIVERS.items():
        url = url.replace(async_driver, sync_driver)
    return url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode with sync engine."""
    connectable = create_engine(get_url(), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()

    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
