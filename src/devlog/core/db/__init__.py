"""Database utilities - engine and migrations."""

from src.devlog.core.db.engine import create_engine_for_url, dispose_engine, get_engine
from src.devlog.core.db.migrations import run_migrations_async, run_migrations_sync

__all__ = [
    "create_engine_for_url",
    "dispose_engine",
    "get_engine",
    "run_migrations_async",
    "run_migrations_sync",
]
