"""Public read proxy.

``GET /{project_id}/{collection_id_or_name}`` returns the data bags of a
collection's rows in display order, wrapped as ``{count, results}``. The
second segment may be a collection id or its display name.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from flexdata.core.logging import get_logger
from flexdata.domain.services.collection_service import CollectionService
from flexdata.domain.services.row_service import RowService
from flexdata.infrastructure.api.schemas import ProxyResponse
from flexdata.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/{project_id}/{collection_ref}",
    response_model=ProxyResponse,
    responses={404: {"description": "Collection not found in project"}},
)
async def read_collection(
    project_id: str,
    collection_ref: str,
    session: AsyncSession = Depends(get_db_session),
) -> ProxyResponse | JSONResponse:
    collection = await CollectionService(session).resolve_collection(project_id, collection_ref)
    if collection is None:
        logger.info(
            "Proxy collection not resolved",
            project_id=project_id,
            collection_ref=collection_ref,
        )
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Not found",
                "message": f"Collection '{collection_ref}' not found in project '{project_id}'",
            },
        )

    results = await RowService(session).list_data(collection.id)
    logger.debug("Proxy served", collection_id=collection.id, count=len(results))
    return ProxyResponse(count=len(results), results=results)
