"""Collection service for business logic.

Handles collection creation, lookup by id or display name, and deletion.
"""

import re
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from flexdata.core.logging import get_logger
from flexdata.domain.services.schema_validator import SchemaValidator, format_errors
from flexdata.infrastructure.persistence.models import CollectionModel
from flexdata.infrastructure.persistence.repositories import (
    CollectionRepository,
    ProjectRepository,
)

logger = get_logger(__name__)

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


def looks_like_uuid(value: str) -> bool:
    return bool(UUID_PATTERN.match(value))


class CollectionService:
    """Service for collection business logic."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.repository = CollectionRepository(session)
        self.project_repository = ProjectRepository(session)

    async def create_collection(self, project_id: str, name: str) -> CollectionModel:
        """Create a new, empty collection.

        Args:
            project_id: Owning project.
            name: Display name; duplicates are allowed.

        Returns:
            The created collection model.

        Raises:
            ValueError: If validation fails or the project does not exist.
        """
        errors = SchemaValidator.validate_collection_name(name)
        if errors:
            raise ValueError(f"Validation failed: {format_errors(errors)}")

        if await self.project_repository.get_by_id(project_id) is None:
            raise ValueError(f"Project '{project_id}' does not exist")

        collection = CollectionModel(
            id=str(uuid.uuid4()),
            project_id=project_id,
            name=name.strip(),
        )
        await self.repository.create(collection)

        logger.info(
            "Collection created",
            collection_id=collection.id,
            collection_name=collection.name,
            project_id=project_id,
        )
        return collection

    async def get_collection(self, collection_id: str) -> CollectionModel | None:
        return await self.repository.get_by_id(collection_id)

    async def list_collections(self, project_id: str) -> list[CollectionModel]:
        return await self.repository.list_by_project(project_id)

    async def rename_collection(self, collection_id: str, name: str) -> CollectionModel | None:
        errors = SchemaValidator.validate_collection_name(name)
        if errors:
            raise ValueError(f"Validation failed: {format_errors(errors)}")

        collection = await self.repository.get_by_id(collection_id)
        if collection is None:
            return None
        collection.name = name.strip()
        return await self.repository.update(collection)

    async def resolve_collection(
        self, project_id: str, id_or_name: str
    ) -> CollectionModel | None:
        """Resolve a path segment to a collection of the project.

        UUID-looking segments are looked up by id, anything else by exact
        display name. Collections of other projects never match.
        """
        if looks_like_uuid(id_or_name):
            collection = await self.repository.get_by_id(id_or_name)
            if collection is not None and collection.project_id == project_id:
                return collection
            return None

        collection = await self.repository.get_by_name(project_id, id_or_name)
        if collection is None:
            logger.debug(
                "Collection name not resolved",
                project_id=project_id,
                collection_name=id_or_name,
            )
        return collection

    async def delete_collection(self, collection_id: str, confirm: bool = False) -> bool:
        """Delete a collection with all of its fields and rows.

        Args:
            collection_id: The collection to delete.
            confirm: Explicit confirmation of the cascading delete.

        Returns:
            False if the collection does not exist.

        Raises:
            ValueError: If ``confirm`` is not set.
        """
        if not confirm:
            raise ValueError(
                "Deleting a collection removes all of its fields and rows. "
                "Pass confirm=true to proceed."
            )

        collection = await self.repository.get_by_id(collection_id)
        if collection is None:
            return False

        row_count = await self.repository.get_row_count(collection_id)
        field_count = await self.repository.get_field_count(collection_id)
        await self.repository.delete(collection)

        logger.info(
            "Collection deleted",
            collection_id=collection_id,
            collection_name=collection.name,
            rows_deleted=row_count,
            fields_deleted=field_count,
        )
        return True
