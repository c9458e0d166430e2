"""Project API routes."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from flexdata.core.logging import get_logger
from flexdata.domain.services.collection_service import CollectionService
from flexdata.domain.services.project_service import ProjectService
from flexdata.infrastructure.api.schemas import (
    CollectionListResponse,
    CollectionResponse,
    CreateProjectRequest,
    ProjectListResponse,
    ProjectResponse,
    UpdateProjectRequest,
)
from flexdata.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)

router = APIRouter()


def project_not_found(project_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Not found",
            "message": f"Project with ID '{project_id}' not found",
        },
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ProjectResponse)
async def create_project(
    request: CreateProjectRequest,
    session: AsyncSession = Depends(get_db_session),
) -> ProjectResponse | JSONResponse:
    service = ProjectService(session)
    try:
        project = await service.create_project(request.name, request.description)
    except ValueError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Validation error", "message": str(e)},
        )
    await session.commit()
    return ProjectResponse.model_validate(project)


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    session: AsyncSession = Depends(get_db_session),
) -> ProjectListResponse:
    projects = await ProjectService(session).list_projects()
    return ProjectListResponse(
        items=[ProjectResponse.model_validate(p) for p in projects],
        total=len(projects),
    )


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    responses={404: {"description": "Project not found"}},
)
async def get_project(
    project_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> ProjectResponse | JSONResponse:
    project = await ProjectService(session).get_project(project_id)
    if project is None:
        return project_not_found(project_id)
    return ProjectResponse.model_validate(project)


@router.patch(
    "/{project_id}",
    response_model=ProjectResponse,
    responses={404: {"description": "Project not found"}},
)
async def update_project(
    project_id: str,
    request: UpdateProjectRequest,
    session: AsyncSession = Depends(get_db_session),
) -> ProjectResponse | JSONResponse:
    try:
        project = await ProjectService(session).update_project(
            project_id, name=request.name, description=request.description
        )
    except ValueError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Validation error", "message": str(e)},
        )
    if project is None:
        return project_not_found(project_id)
    await session.commit()
    return ProjectResponse.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"description": "Confirmation required"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: str,
    confirm: bool = Query(default=False, description="Confirm the cascading delete"),
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    """Delete a project with all of its collections, fields and rows."""
    try:
        deleted = await ProjectService(session).delete_project(project_id, confirm=confirm)
    except ValueError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Confirmation required", "message": str(e)},
        )
    if not deleted:
        return project_not_found(project_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{project_id}/collections",
    response_model=CollectionListResponse,
    responses={404: {"description": "Project not found"}},
)
async def list_project_collections(
    project_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> CollectionListResponse | JSONResponse:
    if await ProjectService(session).get_project(project_id) is None:
        return project_not_found(project_id)

    collections = await CollectionService(session).list_collections(project_id)
    return CollectionListResponse(
        items=[CollectionResponse.model_validate(c) for c in collections],
        total=len(collections),
    )
