"""Pydantic schemas for row endpoints and the public read proxy."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CreateRowRequest(BaseModel):
    """Request body for creating a row."""

    collection_id: str
    data: dict[str, Any] = Field(default_factory=dict)
    sort_order: float | None = None


class UpdateRowRequest(BaseModel):
    """Request body for a row update.

    ``data`` replaces the stored bag as a whole.
    """

    data: dict[str, Any] | None = None
    sort_order: float | None = None


class RowResponse(BaseModel):
    """Response for a single row."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    collection_id: str
    data: dict[str, Any]
    sort_order: float | None = None
    created_at: datetime
    updated_at: datetime


class RowListResponse(BaseModel):
    """Rows of a collection in display order."""

    items: list[RowResponse]
    total: int


class ProxyResponse(BaseModel):
    """Public read proxy payload: the data bags in display order."""

    count: int
    results: list[dict[str, Any]]
