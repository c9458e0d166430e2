"""Repository for project operations."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from flexdata.infrastructure.persistence.models import (
    CollectionModel,
    FieldModel,
    ProjectModel,
    RowModel,
)


class ProjectRepository:
    """Repository for project database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, project: ProjectModel) -> ProjectModel:
        self.session.add(project)
        await self.session.flush()
        return project

    async def get_by_id(self, project_id: str) -> ProjectModel | None:
        result = await self.session.execute(
            select(ProjectModel).where(ProjectModel.id == project_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[ProjectModel]:
        result = await self.session.execute(
            select(ProjectModel).order_by(ProjectModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def update(self, project: ProjectModel) -> ProjectModel:
        await self.session.flush()
        return project

    async def delete(self, project: ProjectModel) -> None:
        """Delete a project together with its collections, fields and rows."""
        collection_ids = select(CollectionModel.id).where(
            CollectionModel.project_id == project.id
        )
        await self.session.execute(
            delete(RowModel).where(RowModel.collection_id.in_(collection_ids))
        )
        await self.session.execute(
            delete(FieldModel).where(FieldModel.collection_id.in_(collection_ids))
        )
        await self.session.execute(
            delete(CollectionModel).where(CollectionModel.project_id == project.id)
        )
        await self.session.delete(project)
        await self.session.flush()
