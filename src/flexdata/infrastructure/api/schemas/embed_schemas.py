"""Pydantic schemas for the embeddable player configuration."""

from pydantic import BaseModel


class ClipResponse(BaseModel):
    name: str
    start: float
    end: float


class TrackResponse(BaseModel):
    id: str
    name: str
    url: str
    clips: list[ClipResponse]


class AudioEmbedResponse(BaseModel):
    """Everything the audio player needs to render."""

    project_id: str
    theme: str
    collection_id: str | None = None
    collection_name: str | None = None
    tracks: list[TrackResponse]
