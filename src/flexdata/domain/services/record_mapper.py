"""Schema-driven record mapping.

Renders and validates a row's data bag using nothing but the collection's
current field list. There is no hardcoded business schema: every decision
dispatches on the field type, and keys with no matching field (left behind
by deleted fields) still render, as raw text or compact JSON.
"""

import json
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any
from urllib.parse import unquote, urlparse

from flexdata.domain.entities import Collection, Field
from flexdata.domain.services.schema_validator import FieldType

# Best-effort preference lists for auto-configuration
TRACK_COLLECTION_NAMES = (
    "songs",
    "tracks",
    "episodes",
    "audio",
    "voice_clips",
    "clips",
    "portfolio",
    "music",
)
SETTINGS_COLLECTION_NAMES = ("settings", "config", "branding", "configuration")
TITLE_FIELD_LABELS = ("title", "name", "track", "label")
AUDIO_FIELD_LABELS = ("url", "audio", "file", "link", "mp3", "source")
COVER_FIELD_LABELS = ("image", "art", "cover", "thumbnail", "photo")

EMPTY_TEXT = "empty"


@dataclass(frozen=True)
class RenderedValue:
    """Presentation of a single data bag value.

    Attributes:
        kind: Field type used for rendering, or ``raw`` for orphaned keys.
        text: Display text.
        href: Link target for file references.
        empty: True when the value was absent and ``text`` is a placeholder.
    """

    kind: str
    text: str
    href: str | None = None
    empty: bool = False


@dataclass
class RecordValidationError:
    """A single record validation error."""

    field: str
    message: str
    code: str


def is_empty_value(value: Any) -> bool:
    """Whether a value counts as "not filled in".

    ``None``, blank strings and empty containers are empty. ``0`` and
    ``False`` are real values.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict, tuple, set)):
        return len(value) == 0
    return False


def compact_json(value: Any) -> str:
    """Serialize a value as compact JSON, falling back to ``str``."""
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return str(value)


def display_file_name(reference: str) -> str:
    """User-facing name of an uploaded file reference.

    Stored files are keyed ``{timestamp}_{original_name}``; the timestamp
    prefix is stripped for display.

    Examples:
        >>> display_file_name("http://x/files/1712345678_song_a.mp3")
        'song_a.mp3'
        >>> display_file_name("plain.png")
        'plain.png'
    """
    path = urlparse(reference).path or reference
    name = unquote(path.rstrip("/").rsplit("/", 1)[-1]) or reference
    if "_" in name:
        return name.split("_", 1)[1]
    return name


def _format_number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_date(value: Any) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
        except ValueError:
            return value
    return str(value)


class RecordMapper:
    """Render and validate data bags driven by a field list."""

    # Text shown for an absent value, per type
    EMPTY_PLACEHOLDERS: dict[FieldType, str] = {
        FieldType.TEXT: EMPTY_TEXT,
        FieldType.LONGTEXT: EMPTY_TEXT,
        FieldType.NUMBER: EMPTY_TEXT,
        FieldType.BOOLEAN: "NO",
        FieldType.DATE: EMPTY_TEXT,
        FieldType.JSON: EMPTY_TEXT,
        FieldType.FILE: "No file",
    }

    @classmethod
    def render_text(cls, value: Any) -> RenderedValue:
        if isinstance(value, (dict, list)):
            return RenderedValue(kind=FieldType.TEXT.value, text=compact_json(value))
        return RenderedValue(kind=FieldType.TEXT.value, text=str(value))

    @classmethod
    def render_longtext(cls, value: Any) -> RenderedValue:
        return RenderedValue(kind=FieldType.LONGTEXT.value, text=str(value))

    @classmethod
    def render_number(cls, value: Any) -> RenderedValue:
        return RenderedValue(kind=FieldType.NUMBER.value, text=_format_number(value))

    @classmethod
    def render_boolean(cls, value: Any) -> RenderedValue:
        return RenderedValue(kind=FieldType.BOOLEAN.value, text="YES" if value else "NO")

    @classmethod
    def render_date(cls, value: Any) -> RenderedValue:
        return RenderedValue(kind=FieldType.DATE.value, text=_format_date(value))

    @classmethod
    def render_json(cls, value: Any) -> RenderedValue:
        return RenderedValue(kind=FieldType.JSON.value, text=compact_json(value))

    @classmethod
    def render_file(cls, value: Any) -> RenderedValue:
        if not isinstance(value, str):
            return RenderedValue(kind=FieldType.FILE.value, text=compact_json(value))
        return RenderedValue(
            kind=FieldType.FILE.value,
            text=display_file_name(value),
            href=value,
        )

    @classmethod
    def render_raw(cls, value: Any) -> RenderedValue:
        """Render a value whose key has no field in the current schema."""
        if value is None:
            return RenderedValue(kind="raw", text=EMPTY_TEXT, empty=True)
        if isinstance(value, (dict, list)):
            return RenderedValue(kind="raw", text=compact_json(value))
        return RenderedValue(kind="raw", text=str(value))

    @classmethod
    def renderers(cls) -> dict[FieldType, Callable[[Any], RenderedValue]]:
        """Renderer per field type. Covers every FieldType member."""
        return {
            FieldType.TEXT: cls.render_text,
            FieldType.LONGTEXT: cls.render_longtext,
            FieldType.NUMBER: cls.render_number,
            FieldType.BOOLEAN: cls.render_boolean,
            FieldType.DATE: cls.render_date,
            FieldType.JSON: cls.render_json,
            FieldType.FILE: cls.render_file,
        }

    @classmethod
    def render_value(cls, field: Field | None, raw_value: Any) -> RenderedValue:
        """Render one value of a data bag.

        Args:
            field: The field the value belongs to, or None for orphaned keys.
            raw_value: The stored value; None when absent.

        Returns:
            The rendered value. Never raises for odd input.
        """
        if field is None:
            return cls.render_raw(raw_value)

        try:
            field_type = FieldType(field.type)
        except ValueError:
            return cls.render_raw(raw_value)

        if raw_value is None:
            return RenderedValue(
                kind=field_type.value,
                text=cls.EMPTY_PLACEHOLDERS[field_type],
                empty=True,
            )

        return cls.renderers()[field_type](raw_value)

    @classmethod
    def render_row(
        cls, fields: Sequence[Field], data: dict[str, Any]
    ) -> dict[str, RenderedValue]:
        """Render a whole data bag: schema fields in order, then orphaned keys."""
        rendered: dict[str, RenderedValue] = {}
        for field in fields:
            rendered[field.name] = cls.render_value(field, data.get(field.name))
        known = {f.name for f in fields}
        for key, value in data.items():
            if key not in known:
                rendered[key] = cls.render_value(None, value)
        return rendered

    @classmethod
    def validate_for_create(
        cls, fields: Sequence[Field], candidate: dict[str, Any]
    ) -> list[RecordValidationError]:
        """Validate a candidate data bag for a new row.

        A candidate is valid when every required field has a non-empty value
        and at least one value is filled in, which blocks blank rows when no
        field is marked required.

        Returns:
            Validation errors; an empty list means the candidate is valid.
        """
        errors: list[RecordValidationError] = []

        for field in fields:
            if field.required and is_empty_value(candidate.get(field.name)):
                errors.append(
                    RecordValidationError(
                        field=field.display_label,
                        message=f"Required field '{field.display_label}' is missing",
                        code="required_missing",
                    )
                )

        if not any(not is_empty_value(v) for v in candidate.values()):
            errors.append(
                RecordValidationError(
                    field="data",
                    message="Please fill in at least one field",
                    code="empty_submission",
                )
            )

        return errors

    @staticmethod
    def collection_name_heuristic(
        candidate_names: Iterable[str], collections: Sequence[Collection]
    ) -> Collection | None:
        """Best-effort guess of the collection an embed should read from.

        Picks the first collection whose display name matches one of the
        candidate names (case-insensitive), else the first collection.
        The result is a guess, not a contract; callers must handle None.
        """
        if not collections:
            return None
        wanted = {name.lower() for name in candidate_names}
        for collection in collections:
            if collection.name.lower() in wanted:
                return collection
        return collections[0]

    @staticmethod
    def guess_field(fields: Sequence[Field], candidate_labels: Iterable[str]) -> Field | None:
        """Best-effort guess of a field by its label (case-insensitive)."""
        wanted = {label.lower() for label in candidate_labels}
        for field in fields:
            if (field.label or "").lower() in wanted:
                return field
        return None
