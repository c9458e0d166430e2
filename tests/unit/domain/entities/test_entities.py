"""Unit tests for domain entities."""

from datetime import datetime, timezone

import pytest

from flexdata.domain.entities import Collection, Field, Project, Row


class TestField:

    def test_type_is_lowercased(self):
        field = Field(id="f1", collection_id="c1", name="fld_aaaaaaaa", type="TEXT")
        assert field.type == "text"

    def test_key_is_required(self):
        with pytest.raises(ValueError):
            Field(id="f1", collection_id="c1", name="")

    def test_display_label_falls_back_to_key(self):
        assert Field(id="f1", collection_id="c1", name="fld_x").display_label == "fld_x"
        assert Field(id="f1", collection_id="c1", name="fld_x", label="Title").display_label == "Title"

    def test_from_dict(self):
        field = Field.from_dict(
            {
                "id": "f1",
                "collection_id": "c1",
                "name": "fld_aaaaaaaa",
                "type": "file",
                "label": "Cover",
                "required": True,
                "sort_order": 2000,
                "created_at": "2024-05-01T12:00:00Z",
            }
        )
        assert field.sort_order == 2000.0
        assert field.required is True
        assert field.created_at == datetime(2024, 5, 1, 12, tzinfo=timezone.utc)

    def test_payload_excludes_identity(self):
        payload = Field(id="tmp_1", collection_id="c1", name="fld_x").to_payload()
        assert "id" not in payload
        assert payload["name"] == "fld_x"


class TestRow:

    def test_data_must_be_a_mapping(self):
        with pytest.raises(ValueError):
            Row(id="r1", collection_id="c1", data=["a"])

    def test_naive_timestamps_become_utc(self):
        row = Row(id="r1", collection_id="c1", created_at=datetime(2024, 1, 1))
        assert row.created_at.tzinfo is timezone.utc

    def test_from_dict_without_sort_order(self):
        row = Row.from_dict({"id": "r1", "collection_id": "c1", "data": {"a": 1}})
        assert row.sort_order is None
        assert row.data == {"a": 1}


class TestCollectionAndProject:

    def test_collection_requires_name(self):
        with pytest.raises(ValueError):
            Collection(id="c1", project_id="p1", name="")

    def test_project_requires_name(self):
        with pytest.raises(ValueError):
            Project(id="p1", name="   ")
