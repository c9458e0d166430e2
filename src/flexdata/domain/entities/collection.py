"""Collection entity.

A collection is a named grouping of rows inside a project. It owns an
ordered set of fields (its schema) and an ordered set of rows.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from flexdata.core.clock import as_utc, utc_now


@dataclass
class Collection:
    """Collection entity.

    Attributes:
        id: Unique identifier (UUID string).
        project_id: Owning project.
        name: Display name; also resolvable by the public read proxy.
        created_at: Timestamp when the collection was created.
    """

    id: str
    project_id: str
    name: str
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        """Validate collection data after initialization."""
        if not self.id:
            raise ValueError("Collection ID is required")
        if not self.name:
            raise ValueError("Collection name is required")
        self.created_at = as_utc(self.created_at)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Collection":
        return cls(
            id=str(data["id"]),
            project_id=str(data["project_id"]),
            name=str(data["name"]),
            created_at=as_utc(data.get("created_at")),
        )
