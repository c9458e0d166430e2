"""Project service for business logic."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from flexdata.core.logging import get_logger
from flexdata.infrastructure.persistence.models import ProjectModel
from flexdata.infrastructure.persistence.repositories import ProjectRepository

logger = get_logger(__name__)


class ProjectService:
    """Service for project business logic."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repository = ProjectRepository(session)

    async def create_project(self, name: str, description: str | None = None) -> ProjectModel:
        """Create a project.

        Raises:
            ValueError: If the name is blank.
        """
        if not name or not name.strip():
            raise ValueError("Project name is required")

        project = ProjectModel(
            id=str(uuid.uuid4()),
            name=name.strip(),
            description=description,
        )
        await self.repository.create(project)
        logger.info("Project created", project_id=project.id, project_name=project.name)
        return project

    async def get_project(self, project_id: str) -> ProjectModel | None:
        return await self.repository.get_by_id(project_id)

    async def list_projects(self) -> list[ProjectModel]:
        return await self.repository.list_all()

    async def update_project(
        self, project_id: str, name: str | None = None, description: str | None = None
    ) -> ProjectModel | None:
        project = await self.repository.get_by_id(project_id)
        if project is None:
            return None
        if name is not None:
            if not name.strip():
                raise ValueError("Project name is required")
            project.name = name.strip()
        if description is not None:
            project.description = description
        return await self.repository.update(project)

    async def delete_project(self, project_id: str, confirm: bool = False) -> bool:
        """Delete a project and everything in it.

        Returns:
            False if the project does not exist.

        Raises:
            ValueError: If ``confirm`` is not set.
        """
        if not confirm:
            raise ValueError(
                "Deleting a project removes all of its collections, fields and rows. "
                "Pass confirm=true to proceed."
            )
        project = await self.repository.get_by_id(project_id)
        if project is None:
            return False
        await self.repository.delete(project)
        logger.info("Project deleted", project_id=project_id)
        return True
