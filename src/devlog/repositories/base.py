"""Base repository with common document operations."""

from typing import Any, Generic, TypeVar

from src.devlog.models.base import DocumentModel
from src.devlog.store.base import DocumentStore, Filter

ModelType = TypeVar("ModelType", bound=DocumentModel)


class BaseRepository(Generic[ModelType]):
    """Base repository bound to one collection of the document store.

    Repositories handle data access only. Ownership and visibility rules
    belong to the service layer.
    """

    model: type[ModelType]

    def __init__(self, store: DocumentStore, collection: str):
        self.store = store
        self.collection = collection

    async def get_by_id(self, id: str) -> ModelType | None:
        """Get a document by its id."""
        document = await self.store.get(self.collection, id)
        if document is None:
            return None
        return self.model.from_document(document)

    async def exists(self, id: str) -> bool:
        return await self.store.get(self.collection, id) is not None

    async def find(
        self,
        *filters: Filter,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[ModelType]:
        """Query the collection and map the results onto the model."""
        documents = await self.store.query(
            self.collection,
            filters,
            order_by=order_by,
            descending=descending,
            limit=limit,
        )
        return [self.model.from_document(document) for document in documents]

    async def find_one(self, *filters: Filter) -> ModelType | None:
        results = await self.find(*filters, limit=1)
        return results[0] if results else None

    async def create(self, id: str, data: dict[str, Any]) -> ModelType:
        """Create-if-absent. Raises ConflictError if the id is taken."""
        document = await self.store.create(self.collection, id, data)
        return self.model.from_document(document)

    async def set(self, id: str, data: dict[str, Any]) -> ModelType:
        document = await self.store.set(self.collection, id, data)
        return self.model.from_document(document)

    async def update(self, id: str, changes: dict[str, Any]) -> ModelType:
        """Partial update. Raises NotFoundError if the document is missing."""
        document = await self.store.update(self.collection, id, changes)
        return self.model.from_document(document)

    async def delete(self, id: str) -> None:
        await self.store.delete(self.collection, id)
