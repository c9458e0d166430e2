"""Schema validation for collections and field definitions.

Supported field types: text, longtext, number, boolean, date, json, file.
"""

import re
from dataclasses import dataclass
from enum import Enum


class FieldType(str, Enum):
    """Supported field types for collection schemas."""

    TEXT = "text"
    LONGTEXT = "longtext"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    JSON = "json"
    FILE = "file"


# Internal field keys look like fld_ followed by lowercase alphanumerics
FIELD_KEY_PATTERN = re.compile(r"^fld_[a-z0-9]{8}$")

DEFAULT_FIELD_LABEL = "Untitled Field"


@dataclass
class SchemaValidationError:
    """A single schema validation error."""

    field: str
    message: str
    code: str


class SchemaValidator:
    """Validator for collection names and field definitions."""

    MAX_NAME_LENGTH = 128
    MAX_LABEL_LENGTH = 128

    @classmethod
    def validate_collection_name(cls, name: str | None) -> list[SchemaValidationError]:
        """Validate a collection display name.

        Display names are free text; they only need to be present and short
        enough to render.
        """
        errors = []

        if not name or not name.strip():
            errors.append(
                SchemaValidationError(
                    field="name",
                    message="Collection name is required",
                    code="name_required",
                )
            )
            return errors

        if len(name) > cls.MAX_NAME_LENGTH:
            errors.append(
                SchemaValidationError(
                    field="name",
                    message=f"Collection name must be at most {cls.MAX_NAME_LENGTH} characters",
                    code="name_too_long",
                )
            )

        return errors

    @classmethod
    def validate_field_type(cls, field_type: str | None) -> list[SchemaValidationError]:
        """Validate a field type against FieldType."""
        if not field_type:
            return [
                SchemaValidationError(
                    field="type",
                    message="Field type is required",
                    code="field_type_required",
                )
            ]

        valid_types = [t.value for t in FieldType]
        if field_type.lower() not in valid_types:
            return [
                SchemaValidationError(
                    field="type",
                    message=f"Invalid field type '{field_type}'. Valid types: {', '.join(valid_types)}",
                    code="field_type_invalid",
                )
            ]
        return []

    @classmethod
    def validate_field_label(cls, label: str | None) -> list[SchemaValidationError]:
        """Validate a field label. Empty labels are allowed and defaulted."""
        if label and len(label) > cls.MAX_LABEL_LENGTH:
            return [
                SchemaValidationError(
                    field="label",
                    message=f"Field label must be at most {cls.MAX_LABEL_LENGTH} characters",
                    code="field_label_too_long",
                )
            ]
        return []

    @classmethod
    def validate_field_key(cls, key: str) -> list[SchemaValidationError]:
        """Validate an internal field key supplied by a client."""
        if not FIELD_KEY_PATTERN.match(key or ""):
            return [
                SchemaValidationError(
                    field="name",
                    message="Field key must look like 'fld_' followed by 8 lowercase letters or digits",
                    code="field_key_invalid_format",
                )
            ]
        return []

    @classmethod
    def validate_field(
        cls, field_type: str | None, label: str | None, key: str | None = None
    ) -> list[SchemaValidationError]:
        """Validate a complete field definition."""
        errors = []
        errors.extend(cls.validate_field_type(field_type))
        errors.extend(cls.validate_field_label(label))
        if key is not None:
            errors.extend(cls.validate_field_key(key))
        return errors


def format_errors(errors: list[SchemaValidationError]) -> str:
    """Join validation errors into one message."""
    return "; ".join(f"{e.field}: {e.message}" for e in errors)
