"""Project directory: creation, lookup, listing and ownership-checked edits.

Projects live under their owner's account. Every write that takes a slug
first reserves it with a claim document, so two concurrent writers never
end up with the same slug under one owner.
"""

from typing import Any

from src.devlog.core.exceptions import (
    ForbiddenError,
    NotFoundError,
    UnauthenticatedError,
)
from src.devlog.core.logging import get_logger
from src.devlog.core.security import normalize_username
from src.devlog.models import Account, Project, ProjectStatus, ProjectView
from src.devlog.repositories import (
    ProjectRepository,
    SlugClaimRepository,
    UsernameRepository,
)
from src.devlog.schemas.project import ProjectCreate, ProjectPatch
from src.devlog.services.access import view_for
from src.devlog.services.slug_service import claim_unique_slug
from src.devlog.store.base import SERVER_TIMESTAMP, DocumentStore

logger = get_logger(__name__)


def _sync_archive_state(changes: dict[str, Any], current: Project) -> None:
    """Keep ``status`` and ``archived`` consistent within one write."""
    if "status" in changes:
        changes["archived"] = changes["status"] == ProjectStatus.ARCHIVED.value
    elif "archived" in changes:
        if changes["archived"]:
            changes["status"] = ProjectStatus.ARCHIVED.value
        elif current.status == ProjectStatus.ARCHIVED:
            changes["status"] = ProjectStatus.ACTIVE.value
    if changes.get("archived") is False:
        changes.setdefault("archiveReason", "")


class ProjectService:
    """Service for the project directory."""

    def __init__(self, store: DocumentStore, slug_claim_attempts: int = 5):
        self.store = store
        self.slug_claim_attempts = slug_claim_attempts
        self.usernames = UsernameRepository(store)

    def _projects(self, owner_id: str) -> ProjectRepository:
        return ProjectRepository(self.store, owner_id)

    def _claims(self, owner_id: str) -> SlugClaimRepository:
        return SlugClaimRepository(self.store, owner_id)

    async def _resolve_username(self, username: str) -> str:
        entry = await self.usernames.get_by_id(normalize_username(username))
        if entry is None:
            raise NotFoundError(f"User '{username}' not found")
        return entry.account_id

    async def create(self, account: Account | None, data: ProjectCreate) -> Project:
        """Create a project owned by ``account`` with a fresh unique slug.

        Raises:
            UnauthenticatedError: no signed-in account.
            ConflictError: no slug could be reserved.
        """
        if account is None:
            raise UnauthenticatedError("Sign in to create a project")

        projects = self._projects(account.id)
        claims = self._claims(account.id)
        project_id = projects.new_id()
        slug = await claim_unique_slug(
            projects, claims, data.name, project_id, self.slug_claim_attempts
        )

        project = Project(
            id=project_id,
            slug=slug,
            owner=account.display_name_or_email,
            owner_account_id=account.id,
            archived=data.status == ProjectStatus.ARCHIVED,
            **data.model_dump(),
        )
        document = project.to_document(exclude={"created_at", "updated_at"})
        document["createdAt"] = SERVER_TIMESTAMP
        document["updatedAt"] = SERVER_TIMESTAMP

        try:
            created = await projects.insert(project_id, document)
        except Exception:
            await claims.release(slug, project_id)
            raise

        logger.info(
            "Project created",
            project_id=project_id,
            account_id=account.id,
            slug=slug,
        )
        return created

    async def get_by_id(self, owner_id: str, project_id: str) -> Project:
        """Get one of the owner's projects.

        Raises:
            NotFoundError: no such project under this owner.
        """
        project = await self._projects(owner_id).get_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        return project

    async def get_by_slug_for_owner_username(self, username: str, slug: str) -> Project:
        """Find a project by its owner's username and its slug.

        Visibility is not applied here; see :meth:`resolve_for_viewer`.

        Raises:
            NotFoundError: unknown username or no project with that slug.
        """
        owner_id = await self._resolve_username(username)
        project = await self._projects(owner_id).get_by_slug(slug)
        if project is None:
            raise NotFoundError(f"Project '{slug}' not found")
        return project

    async def resolve_for_viewer(
        self, requester: Account | None, username: str, slug: str
    ) -> ProjectView:
        project = await self.get_by_slug_for_owner_username(username, slug)
        return view_for(project, requester)

    async def get_visible(self, requester: Account | None, username: str, slug: str) -> Project:
        """Like :meth:`resolve_for_viewer` but raises when the project is hidden.

        Raises:
            NotFoundError: unknown username or slug.
            ForbiddenError: the project is private and not the requester's.
        """
        view = await self.resolve_for_viewer(requester, username, slug)
        if not view.visible:
            raise ForbiddenError("This project is private")
        return view.project

    async def list_by_owner(self, owner_id: str) -> list[Project]:
        """All of the owner's projects, newest first."""
        return await self._projects(owner_id).list_all()

    async def list_public_by_username(self, username: str) -> list[Project]:
        """Public projects of the user, newest first.

        Raises:
            NotFoundError: unknown username.
        """
        owner_id = await self._resolve_username(username)
        return await self._projects(owner_id).list_all(only_public=True)

    async def update(self, owner_id: str, project_id: str, patch: ProjectPatch) -> Project:
        """Apply a partial update to one of the owner's projects.

        A changed name always gets a freshly assigned slug. The old slug is
        released only after the project write succeeds.

        Raises:
            NotFoundError: no such project under this owner.
            ConflictError: no slug could be reserved for the new name.
        """
        current = await self.get_by_id(owner_id, project_id)
        projects = self._projects(owner_id)
        claims = self._claims(owner_id)

        changes = patch.to_changes()
        _sync_archive_state(changes, current)

        new_slug: str | None = None
        if patch.name is not None and patch.name != current.name:
            new_slug = await claim_unique_slug(
                projects, claims, patch.name, project_id, self.slug_claim_attempts
            )
            changes["slug"] = new_slug
        changes["updatedAt"] = SERVER_TIMESTAMP

        try:
            updated = await projects.update(project_id, changes)
        except Exception:
            if new_slug is not None:
                await claims.release(new_slug, project_id)
            raise

        if new_slug is not None:
            await claims.release(current.slug, project_id)

        logger.info(
            "Project updated",
            project_id=project_id,
            account_id=owner_id,
            fields=sorted(changes),
        )
        return updated

    async def delete(self, owner_id: str, project_id: str) -> None:
        """Delete one of the owner's projects and release its slug.

        Raises:
            NotFoundError: no such project under this owner.
        """
        current = await self.get_by_id(owner_id, project_id)
        await self._projects(owner_id).delete(project_id)
        await self._claims(owner_id).release(current.slug, project_id)
        logger.info("Project deleted", project_id=project_id, account_id=owner_id)

    async def archive(self, owner_id: str, project_id: str, reason: str = "") -> Project:
        await self.get_by_id(owner_id, project_id)
        project = await self._projects(owner_id).update(
            project_id,
            {
                "archived": True,
                "archiveReason": reason,
                "status": ProjectStatus.ARCHIVED.value,
                "updatedAt": SERVER_TIMESTAMP,
            },
        )
        logger.info("Project archived", project_id=project_id, account_id=owner_id)
        return project

    async def unarchive(self, owner_id: str, project_id: str) -> Project:
        await self.get_by_id(owner_id, project_id)
        project = await self._projects(owner_id).update(
            project_id,
            {
                "archived": False,
                "archiveReason": "",
                "status": ProjectStatus.ACTIVE.value,
                "updatedAt": SERVER_TIMESTAMP,
            },
        )
        logger.info("Project unarchived", project_id=project_id, account_id=owner_id)
        return project
