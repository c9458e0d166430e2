"""Field entity: one typed column definition of a collection.

The internal key (``name``) is generated once and never changes. It is the
only way to address a value inside a row's data bag; the label is for
display only and may be renamed or duplicated freely.
"""

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from flexdata.core.clock import as_utc, utc_now


@dataclass
class Field:
    """Field entity.

    Attributes:
        id: Unique identifier.
        collection_id: Owning collection.
        name: Stable internal key (e.g. ``fld_a1b2c3d4``).
        type: One of the FieldType values.
        label: Human label, may be None.
        required: Whether rows must provide a value on create.
        sort_order: Order key within the collection's field list.
        created_at: Creation timestamp, breaks ties between equal keys.
    """

    id: str
    collection_id: str
    name: str
    type: str = "text"
    label: str | None = None
    required: bool = False
    sort_order: float | None = None
    created_at: datetime = dataclasses.field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Field key is required")
        self.type = self.type.lower()
        self.created_at = as_utc(self.created_at)

    @property
    def display_label(self) -> str:
        """The label, falling back to the internal key."""
        return self.label or self.name

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Field":
        sort_order = data.get("sort_order")
        return cls(
            id=str(data["id"]),
            collection_id=str(data["collection_id"]),
            name=str(data["name"]),
            type=str(data.get("type") or "text"),
            label=data.get("label"),
            required=bool(data.get("required", False)),
            sort_order=float(sort_order) if sort_order is not None else None,
            created_at=as_utc(data.get("created_at")),
        )

    def to_payload(self) -> dict[str, Any]:
        """Body for a remote create call."""
        return {
            "collection_id": self.collection_id,
            "name": self.name,
            "type": self.type,
            "label": self.label,
            "required": self.required,
            "sort_order": self.sort_order,
        }
