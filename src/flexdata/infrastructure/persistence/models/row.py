"""SQLAlchemy model for the rows table."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from flexdata.core.clock import utc_now
from flexdata.domain.entities import Row
from flexdata.infrastructure.persistence.database import Base


class RowModel(Base):
    """SQLAlchemy model for the rows table.

    ``data`` is stored as a single JSON value and always replaced as a whole.

    Attributes:
        id: Primary key (UUID string).
        collection_id: Owning collection.
        data: Field key to value mapping.
        sort_order: Order key within the collection.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "rows"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Row ID (UUID)")
    collection_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("collections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    sort_order: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

    def __repr__(self) -> str:
        return f"<Row(id={self.id}, collection_id={self.collection_id})>"

    def to_entity(self) -> Row:
        return Row(
            id=self.id,
            collection_id=self.collection_id,
            data=dict(self.data or {}),
            sort_order=self.sort_order,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
