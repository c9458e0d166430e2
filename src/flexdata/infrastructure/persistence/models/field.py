"""SQLAlchemy model for the fields table."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from flexdata.core.clock import utc_now
from flexdata.domain.entities import Field
from flexdata.infrastructure.persistence.database import Base


class FieldModel(Base):
    """SQLAlchemy model for the fields table.

    Attributes:
        id: Primary key (UUID string).
        collection_id: Owning collection.
        name: Internal key used inside row data bags; immutable.
        type: Field type (text, longtext, number, boolean, date, json, file).
        label: Display label.
        required: Whether new rows must provide a value.
        sort_order: Order key within the collection.
        created_at: Creation timestamp.
    """

    __tablename__ = "fields"
    __table_args__ = (
        UniqueConstraint("collection_id", "name", name="uq_fields_collection_name"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Field ID (UUID)")
    collection_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("collections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(32), nullable=False, comment="Internal key")
    type: Mapped[str] = mapped_column(String(16), nullable=False, default="text")
    label: Mapped[str | None] = mapped_column(String(128), nullable=True)
    required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sort_order: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<Field(id={self.id}, name={self.name}, type={self.type})>"

    def to_entity(self) -> Field:
        return Field(
            id=self.id,
            collection_id=self.collection_id,
            name=self.name,
            type=self.type,
            label=self.label,
            required=self.required,
            sort_order=self.sort_order,
            created_at=self.created_at,
        )
