"""Behaviour shared by every document store implementation."""

from datetime import datetime

import pytest

from src.devlog.core.exceptions import ConflictError, NotFoundError
from src.devlog.store import SERVER_TIMESTAMP, DocumentStore, where

pytestmark = pytest.mark.unit


class TestDocumentCrud:
    async def test_get_missing_returns_none(self, store: DocumentStore) -> None:
        assert await store.get("things", "nope") is None

    async def test_set_then_get(self, store: DocumentStore) -> None:
        await store.set("things", "a", {"name": "Alpha", "count": 2})

        document = await store.get("things", "a")

        assert document is not None
        assert document.id == "a"
        assert document.data == {"name": "Alpha", "count": 2}

    async def test_set_overwrites(self, store: DocumentStore) -> None:
        await store.set("things", "a", {"name": "Alpha", "count": 2})
        await store.set("things", "a", {"name": "Beta"})

        document = await store.get("things", "a")

        assert document is not None
        assert document.data == {"name": "Beta"}

    async def test_add_generates_distinct_ids(self, store: DocumentStore) -> None:
        first = await store.add("things", {"name": "one"})
        second = await store.add("things", {"name": "one"})

        assert first.id != second.id
        assert await store.get("things", first.id) is not None

    async def test_create_refuses_existing_id(self, store: DocumentStore) -> None:
        await store.create("things", "a", {"owner": "first"})

        with pytest.raises(ConflictError):
            await store.create("things", "a", {"owner": "second"})

        document = await store.get("things", "a")
        assert document is not None
        assert document.data["owner"] == "first"

    async def test_update_merges_fields(self, store: DocumentStore) -> None:
        await store.set("things", "a", {"name": "Alpha", "count": 2})

        updated = await store.update("things", "a", {"count": 3})

        assert updated.data == {"name": "Alpha", "count": 3}

    async def test_update_missing_raises_not_found(self, store: DocumentStore) -> None:
        with pytest.raises(NotFoundError):
            await store.update("things", "ghost", {"count": 1})

    async def test_delete_is_idempotent(self, store: DocumentStore) -> None:
        await store.set("things", "a", {"name": "Alpha"})

        await store.delete("things", "a")
        await store.delete("things", "a")

        assert await store.get("things", "a") is None

    async def test_returned_documents_are_copies(self, store: DocumentStore) -> None:
        await store.set("things", "a", {"tags": ["x"]})

        document = await store.get("things", "a")
        assert document is not None
        document.data["tags"].append("mutated")

        again = await store.get("things", "a")
        assert again is not None
        assert again.data["tags"] == ["x"]

    async def test_subcollections_are_isolated(self, store: DocumentStore) -> None:
        await store.set("accounts/one/projects", "p", {"name": "mine"})

        assert await store.get("accounts/two/projects", "p") is None

    @pytest.mark.parametrize("collection", ["", "accounts/one", "a//b", "with space"])
    async def test_invalid_collection_path_rejected(
        self, store: DocumentStore, collection: str
    ) -> None:
        with pytest.raises(ValueError):
            await store.get(collection, "x")

    async def test_invalid_document_id_rejected(self, store: DocumentStore) -> None:
        with pytest.raises(ValueError):
            await store.set("things", "a/b", {})


class TestServerTimestamps:
    async def test_sentinel_is_replaced(self, store: DocumentStore) -> None:
        document = await store.set("things", "a", {"createdAt": SERVER_TIMESTAMP})

        assert isinstance(document.data["createdAt"], datetime)
        assert document.data["createdAt"].tzinfo is not None

    async def test_timestamps_strictly_increase(self, store: DocumentStore) -> None:
        stamps = []
        for i in range(5):
            document = await store.set("things", str(i), {"createdAt": SERVER_TIMESTAMP})
            stamps.append(document.data["createdAt"])

        assert stamps == sorted(stamps)
        assert len(set(stamps)) == len(stamps)

    async def test_stored_timestamp_round_trips(self, store: DocumentStore) -> None:
        written = await store.set("things", "a", {"createdAt": SERVER_TIMESTAMP})

        read = await store.get("things", "a")

        assert read is not None
        assert read.data["createdAt"] == written.data["createdAt"]


class TestQuery:
    @pytest.fixture
    async def seeded(self, store: DocumentStore) -> DocumentStore:
        await store.set("things", "a", {"name": "apple", "size": 3, "public": True})
        await store.set("things", "b", {"name": "banana", "size": 1, "public": False})
        await store.set("things", "c", {"name": "cherry", "size": 2, "public": True})
        await store.set("things", "d", {"size": 5})
        return store

    async def test_equality_filter(self, seeded: DocumentStore) -> None:
        results = await seeded.query("things", [where("public", "==", True)])

        assert sorted(d.id for d in results) == ["a", "c"]

    async def test_numeric_range_filter(self, seeded: DocumentStore) -> None:
        results = await seeded.query("things", [where("size", ">=", 2), where("size", "<", 5)])

        assert sorted(d.id for d in results) == ["a", "c"]

    async def test_string_range_filter(self, seeded: DocumentStore) -> None:
        results = await seeded.query(
            "things", [where("name", ">=", "b"), where("name", "<=", "b\uffff")]
        )

        assert [d.id for d in results] == ["b"]

    async def test_missing_field_never_matches(self, seeded: DocumentStore) -> None:
        results = await seeded.query("things", [where("name", "!=", "apple")])

        assert sorted(d.id for d in results) == ["b", "c"]

    async def test_order_and_limit(self, seeded: DocumentStore) -> None:
        results = await seeded.query("things", order_by="name", descending=True, limit=2)

        assert [d.id for d in results] == ["c", "b"]

    async def test_order_skips_documents_without_field(self, seeded: DocumentStore) -> None:
        results = await seeded.query("things", order_by="name")

        assert [d.id for d in results] == ["a", "b", "c"]

    async def test_order_by_server_timestamp(self, store: DocumentStore) -> None:
        for doc_id in ("first", "second", "third"):
            await store.set("things", doc_id, {"createdAt": SERVER_TIMESTAMP})

        results = await store.query("things", order_by="createdAt", descending=True)

        assert [d.id for d in results] == ["third", "second", "first"]

    async def test_unknown_operator_rejected(self) -> None:
        with pytest.raises(ValueError):
            where("size", "~=", 1)  # type: ignore[arg-type]
