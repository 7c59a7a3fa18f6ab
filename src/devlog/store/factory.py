"""Build the configured document store."""

from src.devlog.core.config import Settings
from src.devlog.core.logging import get_logger
from src.devlog.store.base import DocumentStore
from src.devlog.store.memory import InMemoryDocumentStore

logger = get_logger(__name__)


def create_store(settings: Settings) -> DocumentStore:
    if settings.store_backend == "memory":
        logger.info("Using in-memory document store (not persistent)")
        return InMemoryDocumentStore()

    # Imported here: the SQL store depends on the models package
    from src.devlog.core.db import get_engine
    from src.devlog.store.sql import SQLDocumentStore

    return SQLDocumentStore(get_engine())
