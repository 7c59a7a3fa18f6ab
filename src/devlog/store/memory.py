"""
Async in-memory document store implementation.
"""

import copy
import operator
from collections.abc import Callable, Iterable
from typing import Any

from src.devlog.core.exceptions import ConflictError, NotFoundError
from src.devlog.store.base import (
    Document,
    DocumentStore,
    Filter,
    MonotonicClock,
    resolve_server_timestamps,
    validate_collection_path,
    validate_document_id,
)

_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}

_MISSING = object()


def _matches(data: dict[str, Any], flt: Filter) -> bool:
    value = data.get(flt.field, _MISSING)
    if value is _MISSING:
        return False
    try:
        return bool(_COMPARATORS[flt.op](value, flt.value))
    except TypeError:
        # Values of different types never match a range filter
        return False


class InMemoryDocumentStore(DocumentStore):
    """A simple in-memory document store with an async interface.

    Stores deep copies so that callers never share state with the store.
    Not persistent across application restarts.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._clock = MonotonicClock()

    def _collection(self, collection: str) -> dict[str, dict[str, Any]]:
        validate_collection_path(collection)
        return self._collections.setdefault(collection, {})

    def _write(self, collection: str, doc_id: str, data: dict[str, Any]) -> Document:
        validate_document_id(doc_id)
        stored = resolve_server_timestamps(copy.deepcopy(data), self._clock.now())
        self._collection(collection)[doc_id] = stored
        return Document(doc_id, copy.deepcopy(stored))

    async def get(self, collection: str, doc_id: str) -> Document | None:
        data = self._collection(collection).get(doc_id)
        if data is None:
            return None
        return Document(doc_id, copy.deepcopy(data))

    async def add(self, collection: str, data: dict[str, Any]) -> Document:
        return self._write(collection, self.new_id(), data)

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> Document:
        return self._write(collection, doc_id, data)

    async def create(self, collection: str, doc_id: str, data: dict[str, Any]) -> Document:
        if doc_id in self._collection(collection):
            raise ConflictError(f"Document {collection}/{doc_id} already exists")
        return self._write(collection, doc_id, data)

    async def update(self, collection: str, doc_id: str, changes: dict[str, Any]) -> Document:
        existing = self._collection(collection).get(doc_id)
        if existing is None:
            raise NotFoundError(f"Document {collection}/{doc_id} not found")
        return self._write(collection, doc_id, {**existing, **changes})

    async def delete(self, collection: str, doc_id: str) -> None:
        self._collection(collection).pop(doc_id, None)

    async def query(
        self,
        collection: str,
        filters: Iterable[Filter] = (),
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Document]:
        filters = list(filters)
        rows = [
            (doc_id, data)
            for doc_id, data in self._collection(collection).items()
            if all(_matches(data, flt) for flt in filters)
        ]
        if order_by is not None:
            rows = [row for row in rows if order_by in row[1]]
            rows.sort(key=lambda row: row[1][order_by], reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return [Document(doc_id, copy.deepcopy(data)) for doc_id, data in rows]

    async def clear(self) -> None:
        """Drop every collection."""
        self._collections.clear()
