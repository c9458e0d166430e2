"""Field service for business logic.

Fields are the schema of a collection. Adding or removing a field never
touches existing rows: a new field simply has no value yet, and a deleted
field's values stay in the row data bags as orphaned keys.
"""

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from flexdata.core.config import get_settings
from flexdata.core.logging import get_logger
from flexdata.domain.services.field_key_generator import FieldKeyGenerator
from flexdata.domain.services.schema_validator import (
    DEFAULT_FIELD_LABEL,
    SchemaValidator,
    format_errors,
)
from flexdata.domain.services.sort_key_allocator import append_key
from flexdata.infrastructure.persistence.models import FieldModel
from flexdata.infrastructure.persistence.repositories import (
    CollectionRepository,
    FieldRepository,
    RowRepository,
)

logger = get_logger(__name__)

EDITABLE_FIELD_ATTRIBUTES = frozenset({"label", "type", "required", "sort_order"})


class FieldService:
    """Service for field business logic."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repository = FieldRepository(session)
        self.collection_repository = CollectionRepository(session)
        self.row_repository = RowRepository(session)
        self.step = get_settings().order_key_step

    async def list_fields(self, collection_id: str) -> list[FieldModel]:
        return await self.repository.list_by_collection(collection_id)

    async def get_field(self, field_id: str) -> FieldModel | None:
        return await self.repository.get_by_id(field_id)

    async def taken_keys(self, collection_id: str) -> set[str]:
        """Keys a new field must not use: current fields plus keys left in rows."""
        return await self.repository.list_keys(collection_id) | (
            await self.row_repository.list_used_keys(collection_id)
        )

    async def create_field(
        self,
        collection_id: str,
        field_type: str = "text",
        label: str | None = None,
        required: bool = False,
        name: str | None = None,
        sort_order: float | None = None,
    ) -> FieldModel:
        """Add a field to a collection.

        Args:
            collection_id: Owning collection.
            field_type: One of the supported field types.
            label: Display label; defaults to "Untitled Field".
            required: Whether new rows must fill this field.
            name: Client-generated internal key. Generated here when omitted.
            sort_order: Order key; defaults to max existing key + step.

        Returns:
            The created field model.

        Raises:
            ValueError: If validation fails, the collection does not exist,
                or the key is already used in this collection.
        """
        errors = SchemaValidator.validate_field(field_type, label, name)
        if errors:
            raise ValueError(f"Validation failed: {format_errors(errors)}")

        if await self.collection_repository.get_by_id(collection_id) is None:
            raise ValueError(f"Collection '{collection_id}' does not exist")

        taken = await self.taken_keys(collection_id)
        if name is None:
            name = FieldKeyGenerator.generate_unique(taken)
        elif name in taken:
            raise ValueError(f"Field key '{name}' is already used in this collection")

        if sort_order is None:
            sort_order = append_key(
                [await self.repository.get_max_sort_order(collection_id)], self.step
            )

        field = FieldModel(
            id=str(uuid.uuid4()),
            collection_id=collection_id,
            name=name,
            type=field_type.lower(),
            label=(label or "").strip() or DEFAULT_FIELD_LABEL,
            required=required,
            sort_order=sort_order,
        )
        await self.repository.create(field)

        logger.info(
            "Field created",
            field_id=field.id,
            field_key=field.name,
            field_type=field.type,
            collection_id=collection_id,
        )
        return field

    async def update_field(self, field_id: str, changes: dict[str, Any]) -> FieldModel | None:
        """Update a field's label, type, required flag or order key.

        Returns:
            The updated field, or None if it does not exist.

        Raises:
            ValueError: If the internal key would change or a value is invalid.
        """
        field = await self.repository.get_by_id(field_id)
        if field is None:
            return None

        if "name" in changes and changes["name"] != field.name:
            raise ValueError("The internal key of a field cannot be changed")

        unknown = set(changes) - EDITABLE_FIELD_ATTRIBUTES - {"name", "collection_id"}
        if unknown:
            raise ValueError(f"Unknown field attributes: {', '.join(sorted(unknown))}")

        if "collection_id" in changes and changes["collection_id"] != field.collection_id:
            raise ValueError("A field cannot be moved to another collection")

        if "type" in changes:
            errors = SchemaValidator.validate_field_type(changes["type"])
            if errors:
                raise ValueError(f"Validation failed: {format_errors(errors)}")
            field.type = changes["type"].lower()
        if "label" in changes:
            errors = SchemaValidator.validate_field_label(changes["label"])
            if errors:
                raise ValueError(f"Validation failed: {format_errors(errors)}")
            field.label = changes["label"]
        if "required" in changes:
            field.required = bool(changes["required"])
        if "sort_order" in changes:
            field.sort_order = changes["sort_order"]

        await self.repository.update(field)
        logger.debug("Field updated", field_id=field_id, changes=sorted(changes))
        return field

    async def delete_field(self, field_id: str) -> bool:
        """Delete a field. Row data is left untouched.

        Returns:
            False if the field did not exist.
        """
        field = await self.repository.get_by_id(field_id)
        if field is None:
            return False
        await self.repository.delete(field)
        logger.info(
            "Field deleted",
            field_id=field_id,
            field_key=field.name,
            collection_id=field.collection_id,
        )
        return True
