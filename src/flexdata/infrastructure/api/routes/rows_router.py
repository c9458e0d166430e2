"""Row API routes."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from flexdata.core.exceptions import ValidationError
from flexdata.core.logging import get_logger
from flexdata.domain.services.row_service import RowService
from flexdata.infrastructure.api.schemas import (
    CreateRowRequest,
    RowListResponse,
    RowResponse,
    UpdateRowRequest,
)
from flexdata.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)

router = APIRouter()


def row_not_found(row_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "Not found", "message": f"Row with ID '{row_id}' not found"},
    )


@router.get("", response_model=RowListResponse)
async def list_rows(
    collection_id: str = Query(..., description="Collection whose rows to list"),
    session: AsyncSession = Depends(get_db_session),
) -> RowListResponse:
    """List rows ordered by order key, then creation time."""
    rows = await RowService(session).list_rows(collection_id)
    return RowListResponse(
        items=[RowResponse.model_validate(r) for r in rows],
        total=len(rows),
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=RowResponse,
    responses={400: {"description": "Validation error"}},
)
async def create_row(
    request: CreateRowRequest,
    session: AsyncSession = Depends(get_db_session),
) -> RowResponse | JSONResponse:
    try:
        row = await RowService(session).create_row(
            collection_id=request.collection_id,
            data=request.data,
            sort_order=request.sort_order,
        )
    except ValidationError as e:
        logger.info(
            "Row validation failed",
            collection_id=request.collection_id,
            error_count=len(e.errors),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Validation error",
                "message": str(e),
                "code": "validation_failed",
                "details": [
                    {"field": err.field, "message": err.message, "code": err.code}
                    for err in e.errors
                ],
            },
        )
    except ValueError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Validation error", "message": str(e)},
        )
    await session.commit()
    return RowResponse.model_validate(row)


@router.get("/{row_id}", response_model=RowResponse)
async def get_row(
    row_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> RowResponse | JSONResponse:
    row = await RowService(session).get_row(row_id)
    if row is None:
        return row_not_found(row_id)
    return RowResponse.model_validate(row)


@router.patch(
    "/{row_id}",
    response_model=RowResponse,
    responses={404: {"description": "Row not found"}},
)
async def update_row(
    row_id: str,
    request: UpdateRowRequest,
    session: AsyncSession = Depends(get_db_session),
) -> RowResponse | JSONResponse:
    """Update a row. A ``data`` value replaces the whole stored bag."""
    row = await RowService(session).update_row(
        row_id, data=request.data, sort_order=request.sort_order
    )
    if row is None:
        return row_not_found(row_id)
    await session.commit()
    return RowResponse.model_validate(row)


@router.delete("/{row_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_row(
    row_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    """Delete a row. Deleting a row that no longer exists succeeds."""
    if await RowService(session).delete_row(row_id):
        await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
