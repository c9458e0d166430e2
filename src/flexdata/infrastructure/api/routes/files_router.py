"""File storage API endpoints for uploading and downloading files."""

from io import BytesIO

from fastapi import APIRouter, File, HTTPException, UploadFile, status
from fastapi.responses import FileResponse

from flexdata.core.logging import get_logger
from flexdata.domain.services.file_storage_service import FileStorageService
from flexdata.domain.services.record_mapper import display_file_name
from flexdata.infrastructure.api.schemas import FileMetadataResponse, FileUploadResponse

logger = get_logger(__name__)

router = APIRouter(tags=["files"])


@router.post(
    "/upload",
    response_model=FileUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a file",
    description="Upload a file. The returned URL is the value to store in a file field.",
)
async def upload_file(
    file: UploadFile = File(..., description="File to upload"),
) -> FileUploadResponse:
    """Upload a file to storage."""
    filename = file.filename or "unnamed"
    mime_type = file.content_type or "application/octet-stream"

    content = await file.read()
    size = len(content)

    storage_service = FileStorageService()

    try:
        file_metadata = storage_service.save_file(
            file_content=BytesIO(content),
            filename=filename,
            mime_type=mime_type,
            size=size,
        )
    except ValueError as e:
        logger.warning("File upload validation failed", filename=filename, error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return FileUploadResponse(
        success=True,
        file=FileMetadataResponse(**file_metadata.to_dict()),
        message="File uploaded successfully",
    )


@router.get(
    "/{key}",
    response_class=FileResponse,
    response_model=None,
    summary="Download a file",
)
async def download_file(key: str) -> FileResponse:
    """Serve a stored file under its original name."""
    storage_service = FileStorageService()

    try:
        path = storage_service.get_file_path(key)
    except ValueError as e:
        logger.warning("File download rejected", key=key, error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except FileNotFoundError as e:
        logger.info("File not found", key=key)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return FileResponse(path=path, filename=display_file_name(key))
