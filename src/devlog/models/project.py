"""Project documents, stored under ``accounts/{ownerAccountId}/projects``."""

from datetime import datetime

from pydantic import BaseModel

from src.devlog.models.base import DocumentModel
from src.devlog.models.enums import ProjectStatus


class Project(DocumentModel):
    id: str
    name: str
    slug: str
    owner: str
    owner_account_id: str
    is_public: bool = False
    details: str = ""
    estimated_time: str = ""
    available_time: str = ""
    timeline: str = ""
    status: ProjectStatus = ProjectStatus.ACTIVE
    archived: bool = False
    archive_reason: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SlugClaim(DocumentModel):
    """Reservation of one slug for one project, keyed by the slug."""

    id: str  # the slug itself
    project_id: str


class ProjectView(BaseModel):
    """A project as resolved for a particular requester."""

    project: Project
    visible: bool
