"""Repository for row operations.

Rows keep their values in one JSON data bag per row. Updates replace the
bag as a whole; there is no per-key patching at this level.
"""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from flexdata.core.logging import get_logger
from flexdata.infrastructure.persistence.models import RowModel

logger = get_logger(__name__)


class RowRepository:
    """Repository for row database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, row: RowModel) -> RowModel:
        self.session.add(row)
        await self.session.flush()
        logger.debug("Row inserted", row_id=row.id, collection_id=row.collection_id)
        return row

    async def get_by_id(self, row_id: str) -> RowModel | None:
        result = await self.session.execute(select(RowModel).where(RowModel.id == row_id))
        return result.scalar_one_or_none()

    async def list_by_collection(self, collection_id: str) -> list[RowModel]:
        """Rows in display order: key ascending, missing keys last, then creation time."""
        result = await self.session.execute(
            select(RowModel)
            .where(RowModel.collection_id == collection_id)
            .order_by(
                RowModel.sort_order.is_(None),
                RowModel.sort_order.asc(),
                RowModel.created_at.asc(),
            )
        )
        return list(result.scalars().all())

    async def list_data(self, collection_id: str) -> list[dict[str, Any]]:
        """Only the data bags, in display order."""
        return [row.data for row in await self.list_by_collection(collection_id)]

    async def get_max_sort_order(self, collection_id: str) -> float | None:
        result = await self.session.execute(
            select(func.max(RowModel.sort_order)).where(RowModel.collection_id == collection_id)
        )
        return result.scalar_one_or_none()

    async def list_used_keys(self, collection_id: str) -> set[str]:
        """Every key present in any data bag of the collection."""
        result = await self.session.execute(
            select(RowModel.data).where(RowModel.collection_id == collection_id)
        )
        keys: set[str] = set()
        for data in result.scalars().all():
            if isinstance(data, dict):
                keys.update(data.keys())
        return keys

    async def update(self, row: RowModel) -> RowModel:
        await self.session.flush()
        return row

    async def delete(self, row: RowModel) -> None:
        await self.session.delete(row)
        await self.session.flush()
