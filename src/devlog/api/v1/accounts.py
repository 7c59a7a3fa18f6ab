"""Account endpoints: the signed-in profile and public profile pages."""

from fastapi import APIRouter

from src.devlog.api.dependencies import (
    AccountServiceDep,
    CurrentAccount,
    OptionalAccount,
    ProjectServiceDep,
)
from src.devlog.schemas import AccountRead, ProjectRead, PublicProfileRead

router = APIRouter(tags=["accounts"])


@router.get("/me", response_model=AccountRead)
async def read_me(account: CurrentAccount) -> AccountRead:
    """Get the signed-in account."""
    return AccountRead.model_validate(account)


@router.get(
    "/users/{username}",
    response_model=PublicProfileRead,
    responses={404: {"description": "Unknown username"}},
)
async def read_public_profile(
    username: str,
    accounts: AccountServiceDep,
    projects: ProjectServiceDep,
) -> PublicProfileRead:
    """Public profile with the user's public projects, newest first."""
    account = await accounts.get_by_username(username)
    public_projects = await projects.list_public_by_username(account.username)
    return PublicProfileRead(
        username=account.username,
        display_name=account.display_name,
        created_at=account.created_at,
        projects=[ProjectRead.model_validate(p) for p in public_projects],
    )


@router.get(
    "/users/{username}/projects/{slug}",
    response_model=ProjectRead,
    responses={
        403: {"description": "Project is private"},
        404: {"description": "Unknown username or project"},
    },
)
async def read_public_project(
    username: str,
    slug: str,
    requester: OptionalAccount,
    projects: ProjectServiceDep,
) -> ProjectRead:
    """A project page by owner username and slug.

    Private projects are only shown to their owner.
    """
    project = await projects.get_visible(requester, username, slug)
    return ProjectRead.model_validate(project)
