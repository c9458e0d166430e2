"""Pydantic schemas for project endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateProjectRequest(BaseModel):
    """Request body for creating a project."""

    name: str = Field(..., min_length=1, max_length=128, description="Project display name")
    description: str | None = Field(default=None, description="Optional description")


class UpdateProjectRequest(BaseModel):
    """Request body for updating a project."""

    name: str | None = Field(default=None, min_length=1, max_length=128)
    description: str | None = None


class ProjectResponse(BaseModel):
    """Response for a single project."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    created_at: datetime


class ProjectListResponse(BaseModel):
    """Response for listing projects."""

    items: list[ProjectResponse]
    total: int
