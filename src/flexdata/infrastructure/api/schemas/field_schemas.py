"""Pydantic schemas for field endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateFieldRequest(BaseModel):
    """Request body for adding a field to a collection."""

    collection_id: str
    name: str | None = Field(
        default=None,
        description="Internal key (fld_ + 8 lowercase alphanumerics); generated when omitted",
    )
    type: str = Field(default="text", description="text, longtext, number, boolean, date, json, file")
    label: str | None = Field(default=None, max_length=128)
    required: bool = False
    sort_order: float | None = None

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v: str) -> str:
        """Normalize field type to lowercase."""
        return v.lower()


class UpdateFieldRequest(BaseModel):
    """Request body for a partial field update.

    ``name`` may be sent but must equal the current key.
    """

    name: str | None = None
    type: str | None = None
    label: str | None = Field(default=None, max_length=128)
    required: bool | None = None
    sort_order: float | None = None


class FieldResponse(BaseModel):
    """Response for a single field."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    collection_id: str
    name: str
    type: str
    label: str | None = None
    required: bool
    sort_order: float | None = None
    created_at: datetime


class FieldListResponse(BaseModel):
    """Fields of a collection in display order."""

    items: list[FieldResponse]
    total: int
