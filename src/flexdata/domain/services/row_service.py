"""Row service for business logic."""

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from flexdata.core.config import get_settings
from flexdata.core.exceptions import ValidationError
from flexdata.core.logging import get_logger
from flexdata.domain.services.record_mapper import RecordMapper
from flexdata.domain.services.sort_key_allocator import append_key
from flexdata.infrastructure.persistence.models import RowModel
from flexdata.infrastructure.persistence.repositories import (
    CollectionRepository,
    FieldRepository,
    RowRepository,
)

logger = get_logger(__name__)


class RowService:
    """Service for row business logic."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.repository = RowRepository(session)
        self.field_repository = FieldRepository(session)
        self.collection_repository = CollectionRepository(session)
        self.step = get_settings().order_key_step

    async def list_rows(self, collection_id: str) -> list[RowModel]:
        return await self.repository.list_by_collection(collection_id)

    async def list_data(self, collection_id: str) -> list[dict[str, Any]]:
        return await self.repository.list_data(collection_id)

    async def get_row(self, row_id: str) -> RowModel | None:
        return await self.repository.get_by_id(row_id)

    async def create_row(
        self,
        collection_id: str,
        data: dict[str, Any],
        sort_order: float | None = None,
    ) -> RowModel:
        """Create a row after validating it against the collection's fields.

        Args:
            collection_id: Owning collection.
            data: The row's data bag.
            sort_order: Order key; defaults to max existing key + step.

        Returns:
            The created row model.

        Raises:
            ValueError: If the collection does not exist.
            ValidationError: If required fields are empty or nothing is filled in.
        """
        if await self.collection_repository.get_by_id(collection_id) is None:
            raise ValueError(f"Collection '{collection_id}' does not exist")

        fields = [
            model.to_entity()
            for model in await self.field_repository.list_by_collection(collection_id)
        ]
        errors = RecordMapper.validate_for_create(fields, data)
        if errors:
            raise ValidationError(errors)

        if sort_order is None:
            sort_order = append_key(
                [await self.repository.get_max_sort_order(collection_id)], self.step
            )

        row = RowModel(
            id=str(uuid.uuid4()),
            collection_id=collection_id,
            data=dict(data),
            sort_order=sort_order,
        )
        await self.repository.create(row)

        logger.info("Row created", row_id=row.id, collection_id=collection_id)
        return row

    async def update_row(
        self,
        row_id: str,
        data: dict[str, Any] | None = None,
        sort_order: float | None = None,
    ) -> RowModel | None:
        """Replace a row's data bag and/or order key.

        The data bag is replaced as a whole; callers send the merged bag.

        Returns:
            The updated row, or None if it does not exist.
        """
        row = await self.repository.get_by_id(row_id)
        if row is None:
            return None

        if data is not None:
            row.data = dict(data)
        if sort_order is not None:
            row.sort_order = sort_order

        await self.repository.update(row)
        logger.debug(
            "Row updated",
            row_id=row_id,
            data_replaced=data is not None,
            sort_order=sort_order,
        )
        return row

    async def delete_row(self, row_id: str) -> bool:
        """Delete a row. Returns False if it did not exist."""
        row = await self.repository.get_by_id(row_id)
        if row is None:
            return False
        await self.repository.delete(row)
        logger.info("Row deleted", row_id=row_id, collection_id=row.collection_id)
        return True
