"""Repository for field operations."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from flexdata.infrastructure.persistence.models import FieldModel


class FieldRepository:
    """Repository for field database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, field: FieldModel) -> FieldModel:
        self.session.add(field)
        await self.session.flush()
        return field

    async def get_by_id(self, field_id: str) -> FieldModel | None:
        result = await self.session.execute(select(FieldModel).where(FieldModel.id == field_id))
        return result.scalar_one_or_none()

    async def list_by_collection(self, collection_id: str) -> list[FieldModel]:
        """Fields in display order: key ascending, missing keys last, then creation time."""
        result = await self.session.execute(
            select(FieldModel)
            .where(FieldModel.collection_id == collection_id)
            .order_by(
                FieldModel.sort_order.is_(None),
                FieldModel.sort_order.asc(),
                FieldModel.created_at.asc(),
            )
        )
        return list(result.scalars().all())

    async def get_max_sort_order(self, collection_id: str) -> float | None:
        result = await self.session.execute(
            select(func.max(FieldModel.sort_order)).where(
                FieldModel.collection_id == collection_id
            )
        )
        return result.scalar_one_or_none()

    async def list_keys(self, collection_id: str) -> set[str]:
        result = await self.session.execute(
            select(FieldModel.name).where(FieldModel.collection_id == collection_id)
        )
        return set(result.scalars().all())

    async def update(self, field: FieldModel) -> FieldModel:
        await self.session.flush()
        return field

    async def delete(self, field: FieldModel) -> None:
        """Delete a field. Row data bags keep the field's values."""
        await self.session.delete(field)
        await self.session.flush()
