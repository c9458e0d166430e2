"""SQLAlchemy models for FlexData.

All models inherit from the Base class defined in database.py.
"""

from flexdata.infrastructure.persistence.models.collection import CollectionModel
from flexdata.infrastructure.persistence.models.field import FieldModel
from flexdata.infrastructure.persistence.models.project import ProjectModel
from flexdata.infrastructure.persistence.models.row import RowModel

__all__ = [
    "CollectionModel",
    "FieldModel",
    "ProjectModel",
    "RowModel",
]
