"""Document store backed by a single SQL table of JSON documents.

Field filters compile to JSON path expressions, so they run in the database
on both SQLite and PostgreSQL. Timestamps are kept as fixed-width ISO-8601
strings (UTC, microseconds) so that string order equals time order, and are
read back as datetimes from top-level fields named ``...At``.
"""

import re
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Final

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import col

from src.devlog.core.exceptions import ConflictError, NotFoundError, StoreFailureError
from src.devlog.core.logging import get_logger
from src.devlog.models.document import DocumentRecord
from src.devlog.store.base import (
    Document,
    DocumentStore,
    Filter,
    MonotonicClock,
    resolve_server_timestamps,
    validate_collection_path,
    validate_document_id,
)

logger = get_logger(__name__)

_TIMESTAMP_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{6}\+00:00$"
)


def _encode_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.astimezone(UTC).isoformat(timespec="microseconds")
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _encode_value(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_encode_value(item) for item in value]
    return value


def _decode_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Restore datetimes in timestamp fields (``createdAt``, ``updatedAt``)."""
    return {
        key: datetime.fromisoformat(value)
        if key.endswith("At") and isinstance(value, str) and _TIMESTAMP_PATTERN.match(value)
        else value
        for key, value in data.items()
    }


def _field(name: str, sample: Any) -> Any:
    """Typed JSON accessor for a document field, chosen from the compared value."""
    element = col(DocumentRecord.data)[name]
    if isinstance(sample, bool):
        return element.as_boolean()
    if isinstance(sample, int | float):
        return element.as_float()
    if sample is None or isinstance(sample, str | datetime | Enum):
        return element.as_string()
    raise ValueError(f"Unsupported filter value for field {name!r}: {sample!r}")


def _condition(flt: Filter) -> Any:
    accessor = _field(flt.field, flt.value)
    value = _encode_value(flt.value)
    if value is None:
        return accessor.is_(None) if flt.op == "==" else accessor.is_not(None)
    match flt.op:
        case "==":
            return accessor == value
        case "!=":
            return accessor != value
        case "<":
            return accessor < value
        case "<=":
            return accessor <= value
        case ">":
            return accessor > value
        case ">=":
            return accessor >= value
    raise ValueError(f"Unsupported filter operator: {flt.op!r}")


def _to_document(record: DocumentRecord) -> Document:
    return Document(record.doc_id, _decode_fields(dict(record.data)))


class SQLDocumentStore(DocumentStore):
    """Data access layer mapping collections onto the ``documents`` table."""

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        self._clock = MonotonicClock()

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        """Session that commits on success and wraps driver errors."""
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except IntegrityError:
                await session.rollback()
                raise
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Document store operation failed", error=str(e))
                raise StoreFailureError(f"Document store operation failed: {e}") from e

    def _prepare(self, data: dict[str, Any]) -> dict[str, Any]:
        return _encode_value(resolve_server_timestamps(data, self._clock.now()))

    async def get(self, collection: str, doc_id: str) -> Document | None:
        validate_collection_path(collection)
        async with self._session() as session:
            record = await session.get(DocumentRecord, (collection, doc_id))
        return _to_document(record) if record is not None else None

    async def add(self, collection: str, data: dict[str, Any]) -> Document:
        return await self.create(collection, self.new_id(), data)

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> Document:
        validate_collection_path(collection)
        validate_document_id(doc_id)
        async with self._session() as session:
            record = await session.get(DocumentRecord, (collection, doc_id))
            if record is None:
                record = DocumentRecord(collection=collection, doc_id=doc_id)
                session.add(record)
            record.data = self._prepare(data)
            record.updated_at = self._clock.now()
        return _to_document(record)

    async def create(self, collection: str, doc_id: str, data: dict[str, Any]) -> Document:
        validate_collection_path(collection)
        validate_document_id(doc_id)
        record = DocumentRecord(collection=collection, doc_id=doc_id, data=self._prepare(data))
        try:
            async with self._session() as session:
                session.add(record)
        except IntegrityError as e:
            raise ConflictError(f"Document {collection}/{doc_id} already exists") from e
        return _to_document(record)

    async def update(self, collection: str, doc_id: str, changes: dict[str, Any]) -> Document:
        validate_collection_path(collection)
        async with self._session() as session:
            record = await session.get(DocumentRecord, (collection, doc_id), with_for_update=True)
            if record is None:
                raise NotFoundError(f"Document {collection}/{doc_id} not found")
            # Reassign so the JSON column is flagged dirty
            record.data = {**record.data, **self._prepare(changes)}
            record.updated_at = self._clock.now()
        return _to_document(record)

    async def delete(self, collection: str, doc_id: str) -> None:
        validate_collection_path(collection)
        async with self._session() as session:
            await session.execute(
                delete(DocumentRecord).where(
                    col(DocumentRecord.collection) == collection,
                    col(DocumentRecord.doc_id) == doc_id,
                )
            )

    async def query(
        self,
        collection: str,
        filters: Iterable[Filter] = (),
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Document]:
        validate_collection_path(collection)
        statement = select(DocumentRecord).where(col(DocumentRecord.collection) == collection)
        for flt in filters:
            statement = statement.where(_condition(flt))
        if order_by is not None:
            # Ordering compares the JSON text value: strings and timestamps only
            order_field = col(DocumentRecord.data)[order_by].as_string()
            statement = statement.where(order_field.is_not(None))
            statement = statement.order_by(order_field.desc() if descending else order_field)
        if limit is not None:
            statement = statement.limit(limit)

        async with self._session() as session:
            result = await session.execute(statement)
            records = list(result.scalars().all())
        return [_to_document(record) for record in records]

    async def close(self) -> None:
        await self._engine.dispose()
