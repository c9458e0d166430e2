"""Domain entities for FlexData.

Entities are plain dataclasses with no dependencies on infrastructure.
"""

from flexdata.domain.entities.collection import Collection
from flexdata.domain.entities.field import Field
from flexdata.domain.entities.project import Project
from flexdata.domain.entities.row import Row

__all__ = [
    "Collection",
    "Field",
    "Project",
    "Row",
]
