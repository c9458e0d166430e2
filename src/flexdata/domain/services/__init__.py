"""Domain services for FlexData.

The ordering, mapping and validation services are pure. The services that
manage persisted projects, collections, fields and rows work through the
repositories of the persistence layer.
"""

from flexdata.domain.services.field_key_generator import (
    FieldKeyExhaustedError,
    FieldKeyGenerator,
)
from flexdata.domain.services.ordered_list_store import OrderedListStore
from flexdata.domain.services.record_mapper import (
    RecordMapper,
    RecordValidationError,
    RenderedValue,
)
from flexdata.domain.services.schema_validator import (
    FieldType,
    SchemaValidationError,
    SchemaValidator,
)
from flexdata.domain.services.sort_key_allocator import (
    allocate_key,
    append_key,
    needs_rebalance,
    rebalance_keys,
)

__all__ = [
    "FieldKeyExhaustedError",
    "FieldKeyGenerator",
    "FieldType",
    "OrderedListStore",
    "RecordMapper",
    "RecordValidationError",
    "RenderedValue",
    "SchemaValidationError",
    "SchemaValidator",
    "allocate_key",
    "append_key",
    "needs_rebalance",
    "rebalance_keys",
]
