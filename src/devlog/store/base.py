"""Document store interface.

A small document-database contract: documents are JSON-like dicts grouped in
collections addressed by slash-separated paths (``accounts/<id>/projects``).
Implementations must return fresh copies; callers may mutate what they get.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any, Final, Literal
from uuid import uuid4

FilterOp = Literal["==", "!=", "<", "<=", ">", ">="]

FILTER_OPS: Final[frozenset[str]] = frozenset({"==", "!=", "<", "<=", ">", ">="})

_SEGMENT_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[^/\s]+$")


class _ServerTimestamp:
    """Sentinel replaced by the store with its own clock at write time."""

    _instance: "_ServerTimestamp | None" = None

    def __new__(cls) -> "_ServerTimestamp":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP: Final = _ServerTimestamp()


@dataclass(frozen=True, slots=True)
class Document:
    """A stored document: its id within the collection plus its fields."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Filter:
    field: str
    op: FilterOp
    value: Any

    def __post_init__(self) -> None:
        if self.op not in FILTER_OPS:
            raise ValueError(f"Unsupported filter operator: {self.op!r}")


def where(field_name: str, op: FilterOp, value: Any) -> Filter:
    """Build a query filter, e.g. ``where("slug", "==", "my-project")``."""
    return Filter(field_name, op, value)


class MonotonicClock:
    """UTC clock that never returns the same instant twice.

    Documents created in a burst still sort deterministically by timestamp.
    """

    def __init__(self) -> None:
        self._last: datetime | None = None

    def now(self) -> datetime:
        current = datetime.now(UTC)
        if self._last is not None and current <= self._last:
            current = self._last + timedelta(microseconds=1)
        self._last = current
        return current


def validate_collection_path(collection: str) -> str:
    """Collection paths alternate collection and document segments.

    ``accounts`` and ``accounts/<id>/projects`` are valid,
    ``accounts/<id>`` is a document path and is rejected.
    """
    segments = collection.split("/")
    if len(segments) % 2 == 0 or not all(_SEGMENT_PATTERN.match(s) for s in segments):
        raise ValueError(f"Invalid collection path: {collection!r}")
    return collection


def validate_document_id(doc_id: str) -> str:
    if not _SEGMENT_PATTERN.match(doc_id):
        raise ValueError(f"Invalid document id: {doc_id!r}")
    return doc_id


def resolve_server_timestamps(data: dict[str, Any], now: datetime) -> dict[str, Any]:
    """Replace top-level SERVER_TIMESTAMP sentinels with ``now``."""
    return {key: now if value is SERVER_TIMESTAMP else value for key, value in data.items()}


class DocumentStore(ABC):
    """Abstract per-collection document CRUD with simple queries."""

    def new_id(self) -> str:
        """Generate an id for a document that has not been written yet."""
        return uuid4().hex

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Document | None:
        """Return the document, or None if it does not exist."""

    @abstractmethod
    async def add(self, collection: str, data: dict[str, Any]) -> Document:
        """Create a document with a generated id and return it as stored."""

    @abstractmethod
    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> Document:
        """Create or overwrite the document with the given id."""

    @abstractmethod
    async def create(self, collection: str, doc_id: str, data: dict[str, Any]) -> Document:
        """Create the document only if absent.

        Raises:
            ConflictError: a document with this id already exists.
        """

    @abstractmethod
    async def update(self, collection: str, doc_id: str, changes: dict[str, Any]) -> Document:
        """Merge ``changes`` into an existing document.

        Raises:
            NotFoundError: the document does not exist.
        """

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete the document. Deleting a missing document is a no-op."""

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: Iterable[Filter] = (),
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Document]:
        """Return documents matching every filter.

        Documents that lack a filtered or ordered field never match.
        """

    async def close(self) -> None:
        """Release resources held by the store."""
        return None
