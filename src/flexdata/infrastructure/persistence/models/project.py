"""SQLAlchemy model for the projects table."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from flexdata.core.clock import utc_now
from flexdata.infrastructure.persistence.database import Base


class ProjectModel(Base):
    """SQLAlchemy model for the projects table.

    Attributes:
        id: Primary key (UUID string).
        name: Display name.
        description: Optional description.
        created_at: Timestamp when the project was created.
    """

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Project ID (UUID)")
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name={self.name})>"
