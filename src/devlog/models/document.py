"""Document table backing the SQL document store."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel

from src.devlog.models.base import utc_now


class DocumentRecord(SQLModel, table=True):
    """One document of one collection.

    ``collection`` is the full collection path, e.g. ``accounts/<id>/projects``,
    so sub-collections need no extra tables.
    """

    __tablename__ = "documents"

    collection: str = Field(primary_key=True, max_length=512)
    doc_id: str = Field(primary_key=True, max_length=128)
    data: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False)
    )
