"""Row entity: one record of a collection.

The data bag maps field keys to arbitrary JSON values. It may hold keys that
no current field defines (left behind by deleted fields); those are kept.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from flexdata.core.clock import as_utc, utc_now


@dataclass
class Row:
    """Row entity.

    Attributes:
        id: Unique identifier.
        collection_id: Owning collection.
        data: Field key to value mapping.
        sort_order: Order key within the collection.
        created_at: Creation timestamp, breaks ties between equal keys.
        updated_at: Last modification timestamp.
    """

    id: str
    collection_id: str
    data: dict[str, Any] = field(default_factory=dict)
    sort_order: float | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not isinstance(self.data, dict):
            raise ValueError("Row data must be a JSON object")
        self.created_at = as_utc(self.created_at)
        self.updated_at = as_utc(self.updated_at)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Row":
        sort_order = data.get("sort_order")
        return cls(
            id=str(data["id"]),
            collection_id=str(data["collection_id"]),
            data=dict(data.get("data") or {}),
            sort_order=float(sort_order) if sort_order is not None else None,
            created_at=as_utc(data.get("created_at")),
            updated_at=as_utc(data.get("updated_at") or data.get("created_at")),
        )

    def to_payload(self) -> dict[str, Any]:
        """Body for a remote create call."""
        return {
            "collection_id": self.collection_id,
            "data": self.data,
            "sort_order": self.sort_order,
        }
