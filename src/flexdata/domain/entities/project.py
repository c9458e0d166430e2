"""Project entity, the root of all collections."""

from dataclasses import dataclass, field
from datetime import datetime

from flexdata.core.clock import utc_now


@dataclass
class Project:
    """A project groups collections under one display name.

    Attributes:
        id: Unique identifier (UUID string).
        name: Display name.
        description: Optional free-text description.
        created_at: Timestamp when the project was created.
    """

    id: str
    name: str
    description: str | None = None
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        """Validate project data after initialization."""
        if not self.id:
            raise ValueError("Project ID is required")
        if not self.name or not self.name.strip():
            raise ValueError("Project name is required")
