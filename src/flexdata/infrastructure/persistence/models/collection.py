"""SQLAlchemy model for the collections table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from flexdata.core.clock import utc_now
from flexdata.domain.entities import Collection
from flexdata.infrastructure.persistence.database import Base


class CollectionModel(Base):
    """SQLAlchemy model for the collections table.

    A collection's schema lives in the fields table and its records in the
    rows table; both are removed with the collection.

    Attributes:
        id: Primary key (UUID string).
        project_id: Owning project.
        name: Display name, resolvable by the public read proxy.
        created_at: Timestamp when the collection was created.
    """

    __tablename__ = "collections"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Collection ID (UUID)")
    project_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        index=True,
        comment="Display name (not unique)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<Collection(id={self.id}, name={self.name})>"

    def to_entity(self) -> Collection:
        return Collection(
            id=self.id,
            project_id=self.project_id,
            name=self.name,
            created_at=self.created_at,
        )
