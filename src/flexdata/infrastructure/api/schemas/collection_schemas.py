"""Pydantic schemas for collection endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateCollectionRequest(BaseModel):
    """Request body for creating a new collection."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Display name; also usable in the read proxy URL",
    )


class UpdateCollectionRequest(BaseModel):
    """Request body for renaming a collection."""

    name: str = Field(..., min_length=1, max_length=128)


class CollectionResponse(BaseModel):
    """Response for a single collection."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    name: str
    created_at: datetime


class CollectionListResponse(BaseModel):
    """Response for listing the collections of a project."""

    items: list[CollectionResponse]
    total: int


class IntegrationPromptResponse(BaseModel):
    """Rendered integration prompt for a collection."""

    collection_id: str
    proxy_url: str
    prompt: str
