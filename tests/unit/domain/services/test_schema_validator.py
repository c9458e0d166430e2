"""Unit tests for collection and field validation."""

from flexdata.domain.services.schema_validator import SchemaValidator, format_errors


class TestCollectionName:

    def test_valid(self):
        assert SchemaValidator.validate_collection_name("My Songs") == []

    def test_blank(self):
        errors = SchemaValidator.validate_collection_name("  ")
        assert errors[0].code == "name_required"

    def test_too_long(self):
        errors = SchemaValidator.validate_collection_name("x" * 129)
        assert errors[0].code == "name_too_long"


class TestField:

    def test_valid_types_case_insensitive(self):
        for field_type in ["text", "LongText", "number", "boolean", "date", "json", "FILE"]:
            assert SchemaValidator.validate_field_type(field_type) == []

    def test_invalid_type(self):
        errors = SchemaValidator.validate_field_type("reference")
        assert errors[0].code == "field_type_invalid"

    def test_missing_type(self):
        assert SchemaValidator.validate_field_type(None)[0].code == "field_type_required"

    def test_key_format(self):
        assert SchemaValidator.validate_field_key("fld_a1b2c3d4") == []
        assert SchemaValidator.validate_field_key("title")[0].code == "field_key_invalid_format"
        assert SchemaValidator.validate_field_key("fld_A1B2C3D4") != []

    def test_validate_field_collects_all_errors(self):
        errors = SchemaValidator.validate_field("color", "x" * 200, "bad")
        assert {e.field for e in errors} == {"type", "label", "name"}
        assert "type:" in format_errors(errors)

    def test_empty_label_is_allowed(self):
        assert SchemaValidator.validate_field("text", None) == []
