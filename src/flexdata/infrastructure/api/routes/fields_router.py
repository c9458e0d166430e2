"""Field API routes.

Fields are listed per collection in display order. The internal key of a
field is fixed at creation; updates may only change label, type, the
required flag and the order key.
"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from flexdata.core.logging import get_logger
from flexdata.domain.services.field_key_generator import FieldKeyExhaustedError
from flexdata.domain.services.field_service import FieldService
from flexdata.infrastructure.api.schemas import (
    CreateFieldRequest,
    FieldListResponse,
    FieldResponse,
    UpdateFieldRequest,
)
from flexdata.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)

router = APIRouter()


def field_not_found(field_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "Not found", "message": f"Field with ID '{field_id}' not found"},
    )


@router.get("", response_model=FieldListResponse)
async def list_fields(
    collection_id: str = Query(..., description="Collection whose fields to list"),
    session: AsyncSession = Depends(get_db_session),
) -> FieldListResponse:
    fields = await FieldService(session).list_fields(collection_id)
    return FieldListResponse(
        items=[FieldResponse.model_validate(f) for f in fields],
        total=len(fields),
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=FieldResponse,
    responses={400: {"description": "Validation error"}},
)
async def create_field(
    request: CreateFieldRequest,
    session: AsyncSession = Depends(get_db_session),
) -> FieldResponse | JSONResponse:
    try:
        field = await FieldService(session).create_field(
            collection_id=request.collection_id,
            field_type=request.type,
            label=request.label,
            required=request.required,
            name=request.name,
            sort_order=request.sort_order,
        )
    except (ValueError, FieldKeyExhaustedError) as e:
        logger.info(
            "Field creation failed", collection_id=request.collection_id, error=str(e)
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Validation error", "message": str(e)},
        )
    await session.commit()
    return FieldResponse.model_validate(field)


@router.get("/{field_id}", response_model=FieldResponse)
async def get_field(
    field_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> FieldResponse | JSONResponse:
    field = await FieldService(session).get_field(field_id)
    if field is None:
        return field_not_found(field_id)
    return FieldResponse.model_validate(field)


@router.patch(
    "/{field_id}",
    response_model=FieldResponse,
    responses={
        400: {"description": "Invalid change, e.g. renaming the internal key"},
        404: {"description": "Field not found"},
    },
)
async def update_field(
    field_id: str,
    request: UpdateFieldRequest,
    session: AsyncSession = Depends(get_db_session),
) -> FieldResponse | JSONResponse:
    changes = request.model_dump(exclude_unset=True)
    try:
        field = await FieldService(session).update_field(field_id, changes)
    except ValueError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Validation error", "message": str(e)},
        )
    if field is None:
        return field_not_found(field_id)
    await session.commit()
    return FieldResponse.model_validate(field)


@router.delete("/{field_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_field(
    field_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    """Delete a field. Values stored under its key stay in the rows.

    Deleting a field that no longer exists succeeds.
    """
    if await FieldService(session).delete_field(field_id):
        await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
