"""Persistence repositories for database operations."""

from flexdata.infrastructure.persistence.repositories.collection_repository import (
    CollectionRepository,
)
from flexdata.infrastructure.persistence.repositories.field_repository import (
    FieldRepository,
)
from flexdata.infrastructure.persistence.repositories.project_repository import (
    ProjectRepository,
)
from flexdata.infrastructure.persistence.repositories.row_repository import (
    RowRepository,
)

__all__ = [
    "CollectionRepository",
    "FieldRepository",
    "ProjectRepository",
    "RowRepository",
]
