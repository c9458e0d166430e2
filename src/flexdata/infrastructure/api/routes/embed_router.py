"""Configuration endpoint for the embeddable audio player."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from flexdata.domain.services.embed_resolver import EmbedResolver
from flexdata.infrastructure.api.schemas import AudioEmbedResponse
from flexdata.infrastructure.persistence.database import get_db_session

router = APIRouter()


@router.get("/audio/{project_id}", response_model=AudioEmbedResponse)
async def get_audio_embed(
    project_id: str,
    theme: str | None = Query(default=None, description="Theme colour, e.g. #FF5500"),
    title_field: str | None = Query(default=None, description="Data key of track titles"),
    url_field: str | None = Query(default=None, description="Data key of track URLs"),
    collection_id: str | None = Query(default=None),
    collection_name: str | None = Query(default=None),
    session: AsyncSession = Depends(get_db_session),
) -> AudioEmbedResponse:
    """Resolve the player model for a project.

    Unknown projects and unmatched collections yield an empty track list.
    """
    config = await EmbedResolver(session).resolve(
        project_id,
        theme=theme,
        title_field=title_field,
        url_field=url_field,
        collection_id=collection_id,
        collection_name=collection_name,
    )
    return AudioEmbedResponse(
        project_id=project_id,
        theme=config.theme,
        collection_id=config.collection.id if config.collection else None,
        collection_name=config.collection.name if config.collection else None,
        tracks=[track.to_dict() for track in config.tracks],
    )
