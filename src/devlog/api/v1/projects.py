"""Project endpoints for the signed-in owner."""

from fastapi import APIRouter, Response, status

from src.devlog.api.dependencies import CurrentAccount, ProjectServiceDep
from src.devlog.schemas import ArchiveRequest, ProjectCreate, ProjectPatch, ProjectRead

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List my projects",
    description="List all projects of the signed-in account, newest first.",
)
async def list_projects(account: CurrentAccount, service: ProjectServiceDep) -> list[ProjectRead]:
    projects = await service.list_by_owner(account.id)
    return [ProjectRead.model_validate(p) for p in projects]


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        201: {"description": "Project created with a unique slug"},
        409: {"description": "No unique slug could be reserved"},
    },
)
async def create_project(
    data: ProjectCreate, account: CurrentAccount, service: ProjectServiceDep
) -> ProjectRead:
    project = await service.create(account, data)
    return ProjectRead.model_validate(project)


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={404: {"description": "Project not found"}},
)
async def get_project(
    project_id: str, account: CurrentAccount, service: ProjectServiceDep
) -> ProjectRead:
    project = await service.get_by_id(account.id, project_id)
    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    description="Partial update. Renaming reassigns the slug.",
    responses={
        404: {"description": "Project not found"},
        422: {"description": "Unknown or invalid fields"},
    },
)
async def update_project(
    project_id: str,
    data: ProjectPatch,
    account: CurrentAccount,
    service: ProjectServiceDep,
) -> ProjectRead:
    project = await service.update(account.id, project_id, data)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    responses={404: {"description": "Project not found"}},
)
async def delete_project(
    project_id: str, account: CurrentAccount, service: ProjectServiceDep
) -> Response:
    await service.delete(account.id, project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{project_id}/archive",
    response_model=ProjectRead,
    summary="Archive project",
    responses={404: {"description": "Project not found"}},
)
async def archive_project(
    project_id: str,
    account: CurrentAccount,
    service: ProjectServiceDep,
    data: ArchiveRequest | None = None,
) -> ProjectRead:
    reason = data.reason if data is not None else ""
    project = await service.archive(account.id, project_id, reason)
    return ProjectRead.model_validate(project)


@router.post(
    "/{project_id}/unarchive",
    response_model=ProjectRead,
    summary="Unarchive project",
    responses={404: {"description": "Project not found"}},
)
async def unarchive_project(
    project_id: str, account: CurrentAccount, service: ProjectServiceDep
) -> ProjectRead:
    project = await service.unarchive(account.id, project_id)
    return ProjectRead.model_validate(project)
