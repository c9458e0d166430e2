"""Pydantic schemas for file endpoints."""

from pydantic import BaseModel


class FileMetadataResponse(BaseModel):
    """Metadata of a stored file."""

    filename: str
    key: str
    size: int
    mime_type: str
    url: str


class FileUploadResponse(BaseModel):
    """Response for a file upload.

    ``file.url`` is the value to store in a row's file field.
    """

    success: bool
    file: FileMetadataResponse
    message: str
