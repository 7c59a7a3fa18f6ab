"""Repositories for an account's projects and slug claims."""

from typing import Any

from src.devlog.models import Project, SlugClaim
from src.devlog.repositories.base import BaseRepository
from src.devlog.store.base import DocumentStore, where

# Upper bound of a prefix range scan
_PREFIX_END = "\uffff"


def projects_collection(owner_id: str) -> str:
    return f"accounts/{owner_id}/projects"


def slugs_collection(owner_id: str) -> str:
    return f"accounts/{owner_id}/slugs"


class ProjectRepository(BaseRepository[Project]):
    """Projects of one owner account."""

    model = Project

    def __init__(self, store: DocumentStore, owner_id: str):
        super().__init__(store, projects_collection(owner_id))
        self.owner_id = owner_id

    def new_id(self) -> str:
        return self.store.new_id()

    async def get_by_slug(self, slug: str) -> Project | None:
        return await self.find_one(where("slug", "==", slug))

    async def slug_exists(self, slug: str) -> bool:
        return await self.get_by_slug(slug) is not None

    async def slugs_with_prefix(self, prefix: str) -> list[str]:
        """Slugs in the lexicographic range ``[prefix, prefix + U+FFFF]``."""
        documents = await self.store.query(
            self.collection,
            [where("slug", ">=", prefix), where("slug", "<=", prefix + _PREFIX_END)],
        )
        return [document.data["slug"] for document in documents]

    async def list_all(self, only_public: bool = False) -> list[Project]:
        """List projects, newest first."""
        filters = [where("isPublic", "==", True)] if only_public else []
        return await self.find(*filters, order_by="createdAt", descending=True)

    async def insert(self, id: str, data: dict[str, Any]) -> Project:
        return await self.set(id, data)


class SlugClaimRepository(BaseRepository[SlugClaim]):
    """Slug reservations of one owner account, keyed by slug."""

    model = SlugClaim

    def __init__(self, store: DocumentStore, owner_id: str):
        super().__init__(store, slugs_collection(owner_id))

    async def claim(self, slug: str, project_id: str) -> SlugClaim:
        """Create-if-absent. Raises ConflictError if another claim holds the slug."""
        return await self.create(slug, {"projectId": project_id})

    async def release(self, slug: str, project_id: str) -> bool:
        """Delete the claim if it still belongs to ``project_id``."""
        claim = await self.get_by_id(slug)
        if claim is None or claim.project_id != project_id:
            return False
        await self.delete(slug)
        return True
