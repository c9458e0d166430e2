"""Session-scoped editing state for one collection.

The workspace is what an admin session holds while working on a
collection: an ordered store of fields, an ordered store of rows, and the
notifications raised by failed remote writes. All edits are optimistic;
nothing here waits for the remote store except inserts.
"""

from collections.abc import Callable
from typing import Any

from flexdata.core.config import get_settings
from flexdata.core.exceptions import RemoteReadError, RemoteWriteError, ValidationError
from flexdata.core.logging import get_logger
from flexdata.domain.entities import Field, Row
from flexdata.domain.services.field_key_generator import FieldKeyGenerator
from flexdata.domain.services.ordered_list_store import OrderedListStore
from flexdata.domain.services.record_mapper import RecordMapper, RenderedValue
from flexdata.domain.services.schema_validator import (
    DEFAULT_FIELD_LABEL,
    SchemaValidator,
    format_errors,
)
from flexdata.infrastructure.remote.base import RemoteSyncAdapter
from flexdata.infrastructure.remote.collection_client import CollectionClient

logger = get_logger(__name__)


class CollectionWorkspace:
    """Fields and rows of one collection plus pending user notifications."""

    def __init__(
        self,
        collection_id: str,
        field_adapter: RemoteSyncAdapter[Field],
        row_adapter: RemoteSyncAdapter[Row],
        collection_client: CollectionClient | None = None,
        notify: Callable[[str], None] | None = None,
        step: float | None = None,
    ) -> None:
        """Initialize the workspace.

        Args:
            collection_id: The collection being edited.
            field_adapter: Remote store for fields.
            row_adapter: Remote store for rows.
            collection_client: Client used for deleting the collection.
            notify: Extra sink for user-facing messages.
            step: Order key gap; defaults to the configured step.
        """
        self.collection_id = collection_id
        self.collection_client = collection_client
        self.notifications: list[str] = []
        self._notify = notify
        step = step if step is not None else get_settings().order_key_step
        self.fields: OrderedListStore[Field] = OrderedListStore(
            field_adapter, on_error=self._on_write_error, step=step
        )
        self.rows: OrderedListStore[Row] = OrderedListStore(
            row_adapter, on_error=self._on_write_error, step=step
        )

    def _message(self, text: str) -> None:
        self.notifications.append(text)
        if self._notify is not None:
            self._notify(text)

    def _on_write_error(self, action: str, error: RemoteWriteError) -> None:
        self._message(f"Could not {action}: {error.message}")

    async def reload(self) -> None:
        """Load fields and rows from the remote store.

        A failed read leaves the affected list empty and adds a notification.
        """
        for store in (self.fields, self.rows):
            try:
                items = await store.adapter.fetch_ordered(self.collection_id)
            except RemoteReadError as e:
                logger.warning(
                    "Loading failed, showing empty list",
                    collection_id=self.collection_id,
                    error=e.message,
                )
                self._message(f"Could not load data: {e.message}")
                items = []
            store.load(items)

    def taken_field_keys(self) -> set[str]:
        """Keys of current fields plus every key present in a row's data."""
        taken = {f.name for f in self.fields}
        for row in self.rows:
            taken.update(row.data.keys())
        return taken

    async def add_field(
        self, field_type: str = "text", label: str | None = None, required: bool = False
    ) -> Field | None:
        """Append a new field with a freshly generated internal key.

        Raises:
            ValueError: If the type or label is invalid.
        """
        errors = SchemaValidator.validate_field(field_type, label)
        if errors:
            raise ValueError(f"Validation failed: {format_errors(errors)}")

        field = Field(
            id="",
            collection_id=self.collection_id,
            name=FieldKeyGenerator.generate_unique(self.taken_field_keys()),
            type=field_type,
            label=(label or "").strip() or DEFAULT_FIELD_LABEL,
            required=required,
        )
        return await self.fields.insert(field)

    def update_field(self, field_id: str, **changes: Any) -> Field:
        if "type" in changes:
            errors = SchemaValidator.validate_field_type(changes["type"])
            if errors:
                raise ValueError(f"Validation failed: {format_errors(errors)}")
            changes["type"] = changes["type"].lower()
        return self.fields.update_item(field_id, **changes)

    def move_field(self, field_id: str, target_index: int) -> float | None:
        return self.fields.move_item(field_id, target_index)

    def delete_field(self, field_id: str) -> Field:
        """Remove a field from the schema; row data keeps its values."""
        return self.fields.remove(field_id)

    async def add_row(self, data: dict[str, Any]) -> Row | None:
        """Validate and append a new row.

        Raises:
            ValidationError: Before any network call, if required fields are
                empty or nothing was filled in.
        """
        errors = RecordMapper.validate_for_create(self.fields.items, data)
        if errors:
            raise ValidationError(errors)
        row = Row(id="", collection_id=self.collection_id, data=dict(data))
        return await self.rows.insert(row)

    def set_value(self, row_id: str, field_key: str, value: Any) -> dict[str, Any]:
        return self.rows.patch_item_data(row_id, field_key, value)

    def move_row(self, row_id: str, target_index: int) -> float | None:
        return self.rows.move_item(row_id, target_index)

    def delete_row(self, row_id: str) -> Row:
        return self.rows.remove(row_id)

    def render_rows(self) -> list[dict[str, RenderedValue]]:
        """Every row rendered against the current field list."""
        fields = self.fields.items
        return [RecordMapper.render_row(fields, row.data) for row in self.rows]

    async def delete_collection(self, confirm: bool = False) -> None:
        """Delete the whole collection remotely.

        Raises:
            ValueError: If ``confirm`` is not set or no client is configured.
            RemoteWriteError: If the remote store rejects the delete.
        """
        if not confirm:
            raise ValueError("Deleting a collection removes all of its fields and rows")
        if self.collection_client is None:
            raise ValueError("No collection client configured")

        await self.flush()
        await self.collection_client.delete_collection(self.collection_id)
        self.fields.load([])
        self.rows.load([])
        logger.info("Collection deleted from workspace", collection_id=self.collection_id)

    async def flush(self) -> None:
        """Wait for all outstanding field and row writes."""
        await self.fields.flush()
        await self.rows.flush()
