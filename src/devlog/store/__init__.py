"""Document store collaborators.

The SQL implementation lives in ``src.devlog.store.sql`` and is imported
explicitly where needed.
"""

from src.devlog.store.base import (
    SERVER_TIMESTAMP,
    Document,
    DocumentStore,
    Filter,
    where,
)
from src.devlog.store.memory import InMemoryDocumentStore

__all__ = [
    "SERVER_TIMESTAMP",
    "Document",
    "DocumentStore",
    "Filter",
    "InMemoryDocumentStore",
    "where",
]
