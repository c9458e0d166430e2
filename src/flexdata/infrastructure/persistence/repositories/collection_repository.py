"""Repository for collection operations."""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from flexdata.infrastructure.persistence.models import CollectionModel, FieldModel, RowModel


class CollectionRepository:
    """Repository for collection database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, collection: CollectionModel) -> CollectionModel:
        """Create a new collection.

        Args:
            collection: The collection model to create.

        Returns:
            The created collection model.
        """
        self.session.add(collection)
        await self.session.flush()
        return collection

    async def get_by_id(self, collection_id: str) -> CollectionModel | None:
        result = await self.session.execute(
            select(CollectionModel).where(CollectionModel.id == collection_id)
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, project_id: str, name: str) -> CollectionModel | None:
        """Get the oldest collection of a project with this exact display name.

        Display names are not unique; the earliest one wins.
        """
        result = await self.session.execute(
            select(CollectionModel)
            .where(
                CollectionModel.project_id == project_id,
                CollectionModel.name == name,
            )
            .order_by(CollectionModel.created_at.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_by_project(self, project_id: str) -> list[CollectionModel]:
        result = await self.session.execute(
            select(CollectionModel)
            .where(CollectionModel.project_id == project_id)
            .order_by(CollectionModel.created_at.asc())
        )
        return list(result.scalars().all())

    async def update(self, collection: CollectionModel) -> CollectionModel:
        await self.session.flush()
        return collection

    async def delete(self, collection: CollectionModel) -> None:
        """Delete a collection together with all of its fields and rows."""
        await self.session.execute(
            delete(RowModel).where(RowModel.collection_id == collection.id)
        )
        await self.session.execute(
            delete(FieldModel).where(FieldModel.collection_id == collection.id)
        )
        await self.session.delete(collection)
        await self.session.flush()

    async def get_row_count(self, collection_id: str) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(RowModel).where(RowModel.collection_id == collection_id)
        )
        return result.scalar_one()

    async def get_field_count(self, collection_id: str) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(FieldModel)
            .where(FieldModel.collection_id == collection_id)
        )
        return result.scalar_one()
