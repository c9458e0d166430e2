"""Collections API routes.

Collections are created empty; their schema is managed through the fields
endpoints.
"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from flexdata.core.config import get_settings
from flexdata.core.logging import get_logger
from flexdata.domain.services.collection_service import CollectionService
from flexdata.domain.services.field_service import FieldService
from flexdata.infrastructure.api.schemas import (
    CollectionResponse,
    CreateCollectionRequest,
    IntegrationPromptResponse,
    UpdateCollectionRequest,
)
from flexdata.infrastructure.persistence.database import get_db_session
from flexdata.infrastructure.services import get_prompt_renderer

logger = get_logger(__name__)

router = APIRouter()


def collection_not_found(collection_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Not found",
            "message": f"Collection with ID '{collection_id}' not found",
        },
    )


@router.post(
    "/projects/{project_id}/collections",
    status_code=status.HTTP_201_CREATED,
    response_model=CollectionResponse,
    responses={400: {"description": "Validation error"}},
)
async def create_collection(
    project_id: str,
    request: CreateCollectionRequest,
    session: AsyncSession = Depends(get_db_session),
) -> CollectionResponse | JSONResponse:
    try:
        collection = await CollectionService(session).create_collection(project_id, request.name)
    except ValueError as e:
        logger.info("Collection creation failed", project_id=project_id, error=str(e))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Validation error", "message": str(e)},
        )
    await session.commit()
    return CollectionResponse.model_validate(collection)


@router.get(
    "/collections/{collection_id}",
    response_model=CollectionResponse,
    responses={404: {"description": "Collection not found"}},
)
async def get_collection(
    collection_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> CollectionResponse | JSONResponse:
    collection = await CollectionService(session).get_collection(collection_id)
    if collection is None:
        return collection_not_found(collection_id)
    return CollectionResponse.model_validate(collection)


@router.patch(
    "/collections/{collection_id}",
    response_model=CollectionResponse,
    responses={404: {"description": "Collection not found"}},
)
async def rename_collection(
    collection_id: str,
    request: UpdateCollectionRequest,
    session: AsyncSession = Depends(get_db_session),
) -> CollectionResponse | JSONResponse:
    try:
        collection = await CollectionService(session).rename_collection(
            collection_id, request.name
        )
    except ValueError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Validation error", "message": str(e)},
        )
    if collection is None:
        return collection_not_found(collection_id)
    await session.commit()
    return CollectionResponse.model_validate(collection)


@router.delete(
    "/collections/{collection_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"description": "Confirmation required"},
        404: {"description": "Collection not found"},
    },
)
async def delete_collection(
    collection_id: str,
    confirm: bool = Query(default=False, description="Confirm the cascading delete"),
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    """Delete a collection with all of its fields and rows.

    Requires ``?confirm=true``.
    """
    try:
        deleted = await CollectionService(session).delete_collection(
            collection_id, confirm=confirm
        )
    except ValueError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Confirmation required", "message": str(e)},
        )
    if not deleted:
        return collection_not_found(collection_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/collections/{collection_id}/integration-prompt",
    response_model=IntegrationPromptResponse,
    responses={404: {"description": "Collection not found"}},
)
async def get_integration_prompt(
    collection_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> IntegrationPromptResponse | JSONResponse:
    """Prompt text describing how to read this collection from a website."""
    collection = await CollectionService(session).get_collection(collection_id)
    if collection is None:
        return collection_not_found(collection_id)

    settings = get_settings()
    fields = [f.to_entity() for f in await FieldService(session).list_fields(collection_id)]
    entity = collection.to_entity()
    prompt = get_prompt_renderer().render(
        external_url=settings.external_url,
        api_prefix=settings.api_prefix,
        collection=entity,
        fields=fields,
    )
    return IntegrationPromptResponse(
        collection_id=collection_id,
        proxy_url=f"{settings.external_url}{settings.api_prefix}/{entity.project_id}/{entity.id}",
        prompt=prompt,
    )
