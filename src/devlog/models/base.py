from datetime import UTC, datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.devlog.store.base import Document


def utc_now() -> datetime:
    """Return current UTC time as an aware datetime."""
    return datetime.now(UTC)


class DocumentModel(BaseModel):
    """Pydantic model persisted as a store document.

    Attributes are snake_case in Python and camelCase in the stored document.
    The document id lives outside the document body.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_document(cls, document: Document) -> Self:
        return cls.model_validate({**document.data, "id": document.id})

    def to_document(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Serialize the stored fields, without the id."""
        return self.model_dump(mode="json", by_alias=True, exclude={"id"} | (exclude or set()))
