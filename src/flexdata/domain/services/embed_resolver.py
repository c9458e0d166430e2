"""Configuration resolver for the embeddable audio player.

Everything here is best effort: the embed is configured only through URL
parameters and whatever collections the project happens to contain, so
every lookup has a silent fallback.
"""

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from flexdata.core.config import get_settings
from flexdata.core.logging import get_logger
from flexdata.domain.entities import Collection, Field
from flexdata.domain.services.record_mapper import (
    SETTINGS_COLLECTION_NAMES,
    TRACK_COLLECTION_NAMES,
    RecordMapper,
)
from flexdata.infrastructure.persistence.repositories import (
    CollectionRepository,
    FieldRepository,
    RowRepository,
)

logger = get_logger(__name__)

TRACK_NAME_KEYS = ("title", "name", "track_title", "label", "track", "song_name")
TRACK_URL_KEYS = (
    "url",
    "audio_url",
    "file",
    "audio_file",
    "audio",
    "song",
    "mp3",
    "link",
    "source",
)
THEME_VALUE_KEYS = ("theme_color", "color", "brand_color", "primary_color", "hex", "value")
THEME_LABEL_KEYS = ("key", "name", "label")
UNTITLED_TRACK = "Untitled"


@dataclass
class Clip:
    name: str
    start: float
    end: float

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "start": self.start, "end": self.end}


def default_clips() -> list[Clip]:
    return [Clip(name="Full Audio", start=0, end=999999)]


@dataclass
class Track:
    """One playable entry derived from a row."""

    id: str
    name: str
    url: str
    clips: list[Clip] = field(default_factory=default_clips)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "clips": [clip.to_dict() for clip in self.clips],
        }


@dataclass
class EmbedConfig:
    """Resolved player model for one project."""

    project_id: str
    theme: str
    collection: Collection | None = None
    tracks: list[Track] = field(default_factory=list)


def labelled_view(fields: list[Field], data: dict[str, Any]) -> dict[str, Any]:
    """The data bag plus aliases keyed by normalised field labels.

    Lets conventional names like ``title`` or ``url`` match fields whose
    internal keys are opaque.
    """
    view = dict(data)
    for f in fields:
        if f.label and f.name in data:
            alias = f.label.strip().lower().replace(" ", "_")
            view.setdefault(alias, data[f.name])
    return view


def first_value(view: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = view.get(key)
        if value:
            return value
    return None


def parse_clips(value: Any) -> list[Clip]:
    """Clips from a row's ``clips`` list, or the single full-length default."""
    if not isinstance(value, list):
        return default_clips()
    clips = []
    for item in value:
        if not isinstance(item, dict):
            continue
        try:
            clips.append(
                Clip(
                    name=str(item.get("name") or "Clip"),
                    start=float(item.get("start", 0)),
                    end=float(item.get("end", 999999)),
                )
            )
        except (TypeError, ValueError):
            continue
    return clips


def theme_from_rows(rows: list[dict[str, Any]]) -> str | None:
    """Find a theme colour in settings-style rows.

    A key/value row labelled "theme color" wins outright; otherwise the last
    hex-looking colour value seen is used.
    """
    color: str | None = None
    for data in rows:
        value = first_value(data, THEME_VALUE_KEYS)
        label = str(first_value(data, THEME_LABEL_KEYS) or "").lower()
        explicit = data.get("value") or data.get("color")
        if "theme color" in label and explicit:
            return str(explicit)
        if value and str(value).startswith("#"):
            color = str(value)
    return color


class EmbedResolver:
    """Resolve theme, collection and tracks for the audio embed."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.collection_repository = CollectionRepository(session)
        self.field_repository = FieldRepository(session)
        self.row_repository = RowRepository(session)
        self.default_theme = get_settings().default_theme_color

    async def resolve(
        self,
        project_id: str,
        theme: str | None = None,
        title_field: str | None = None,
        url_field: str | None = None,
        collection_id: str | None = None,
        collection_name: str | None = None,
    ) -> EmbedConfig:
        """Build the player configuration for a project.

        Args:
            project_id: Project whose collections are searched.
            theme: Explicit theme colour; skips the settings lookup.
            title_field: Data key holding track titles.
            url_field: Data key holding track URLs.
            collection_id: Explicit collection to read tracks from.
            collection_name: Collection display name, matched case-insensitively.

        Returns:
            The resolved configuration; ``tracks`` may be empty.
        """
        collections = [
            model.to_entity()
            for model in await self.collection_repository.list_by_project(project_id)
        ]

        resolved_theme = theme or await self._theme_from_settings(collections)
        collection = self._pick_collection(collections, collection_id, collection_name)
        tracks = await self._tracks(collection, title_field, url_field) if collection else []

        logger.debug(
            "Embed resolved",
            project_id=project_id,
            collection_id=collection.id if collection else None,
            track_count=len(tracks),
        )
        return EmbedConfig(
            project_id=project_id,
            theme=resolved_theme,
            collection=collection,
            tracks=tracks,
        )

    async def _theme_from_settings(self, collections: list[Collection]) -> str:
        wanted = set(SETTINGS_COLLECTION_NAMES)
        settings_collection = next(
            (c for c in collections if c.name.lower() in wanted), None
        )
        if settings_collection is None:
            return self.default_theme

        fields = await self._fields(settings_collection.id)
        rows = [
            labelled_view(fields, data)
            for data in await self.row_repository.list_data(settings_collection.id)
        ]
        return theme_from_rows(rows) or self.default_theme

    @staticmethod
    def _pick_collection(
        collections: list[Collection],
        collection_id: str | None,
        collection_name: str | None,
    ) -> Collection | None:
        if collection_id:
            return next((c for c in collections if c.id == collection_id), None)
        if collection_name:
            wanted = collection_name.lower()
            return next((c for c in collections if c.name.lower() == wanted), None)
        return RecordMapper.collection_name_heuristic(TRACK_COLLECTION_NAMES, collections)

    async def _fields(self, collection_id: str) -> list[Field]:
        return [
            model.to_entity()
            for model in await self.field_repository.list_by_collection(collection_id)
        ]

    async def _tracks(
        self, collection: Collection, title_field: str | None, url_field: str | None
    ) -> list[Track]:
        fields = await self._fields(collection.id)
        tracks = []
        for row in await self.row_repository.list_by_collection(collection.id):
            view = labelled_view(fields, row.data or {})
            url = (view.get(url_field) if url_field else None) or first_value(
                view, TRACK_URL_KEYS
            )
            if not url:
                continue
            name = (view.get(title_field) if title_field else None) or first_value(
                view, TRACK_NAME_KEYS
            )
            tracks.append(
                Track(
                    id=row.id,
                    name=str(name or UNTITLED_TRACK),
                    url=str(url),
                    clips=parse_clips(view.get("clips")),
                )
            )
        return tracks
