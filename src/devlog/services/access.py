"""Project visibility rules."""

from src.devlog.models import Account, Project, ProjectView


def is_visible_to(project: Project, requester: Account | None) -> bool:
    """A project is visible if it is public or the requester owns it."""
    if project.is_public:
        return True
    return requester is not None and requester.id == project.owner_account_id


def view_for(project: Project, requester: Account | None) -> ProjectView:
    return ProjectView(project=project, visible=is_visible_to(project, requester))
