"""Unit tests for schema-driven rendering and validation."""

from datetime import date

import pytest

from flexdata.domain.entities import Collection
from flexdata.domain.services.record_mapper import (
    TRACK_COLLECTION_NAMES,
    RecordMapper,
    compact_json,
    display_file_name,
    is_empty_value,
)
from flexdata.domain.services.schema_validator import FieldType
from tests.fakes import make_field


class TestRenderValue:

    def test_every_field_type_has_a_renderer(self):
        assert set(RecordMapper.renderers()) == set(FieldType)
        assert set(RecordMapper.EMPTY_PLACEHOLDERS) == set(FieldType)

    def test_text(self):
        rendered = RecordMapper.render_value(make_field("fld_t"), "Hello")
        assert rendered.kind == "text"
        assert rendered.text == "Hello"
        assert rendered.empty is False

    def test_number_drops_trailing_zero(self):
        assert RecordMapper.render_value(make_field("n", field_type="number"), 3.0).text == "3"
        assert RecordMapper.render_value(make_field("n", field_type="number"), 2.5).text == "2.5"

    def test_boolean(self):
        field = make_field("b", field_type="boolean")
        assert RecordMapper.render_value(field, True).text == "YES"
        assert RecordMapper.render_value(field, False).text == "NO"

    def test_date(self):
        field = make_field("d", field_type="date")
        assert RecordMapper.render_value(field, "2024-03-01T10:00:00Z").text == "2024-03-01"
        assert RecordMapper.render_value(field, date(2024, 3, 1)).text == "2024-03-01"
        assert RecordMapper.render_value(field, "soon").text == "soon"

    def test_json_is_compact(self):
        rendered = RecordMapper.render_value(make_field("j", field_type="json"), {"a": [1, 2]})
        assert rendered.text == '{"a":[1,2]}'

    def test_file_shows_name_and_links_url(self):
        url = "http://x/files/1712345678000_cover_art.png"
        rendered = RecordMapper.render_value(make_field("f", field_type="file"), url)
        assert rendered.text == "cover_art.png"
        assert rendered.href == url

    @pytest.mark.parametrize(
        "field_type,placeholder",
        [("text", "empty"), ("boolean", "NO"), ("file", "No file"), ("json", "empty")],
    )
    def test_absent_value_uses_placeholder(self, field_type, placeholder):
        rendered = RecordMapper.render_value(make_field("k", field_type=field_type), None)
        assert rendered.empty is True
        assert rendered.text == placeholder

    def test_orphaned_key_renders_raw(self):
        assert RecordMapper.render_value(None, "left over").text == "left over"
        assert RecordMapper.render_value(None, {"x": 1}).text == '{"x":1}'
        assert RecordMapper.render_value(None, None).empty is True

    def test_unknown_type_falls_back_to_raw(self):
        field = make_field("k")
        field.type = "color"
        assert RecordMapper.render_value(field, "#fff").kind == "raw"


class TestRenderRow:

    def test_schema_fields_first_then_orphans(self):
        fields = [make_field("fld_b", "B"), make_field("fld_a", "A")]
        rendered = RecordMapper.render_row(
            fields, {"fld_a": "a", "fld_gone": [1, 2], "fld_b": "b"}
        )

        assert list(rendered) == ["fld_b", "fld_a", "fld_gone"]
        assert rendered["fld_gone"].kind == "raw"
        assert rendered["fld_gone"].text == "[1,2]"

    def test_missing_values_render_empty(self):
        rendered = RecordMapper.render_row([make_field("fld_a")], {})
        assert rendered["fld_a"].empty is True


class TestValidateForCreate:

    def test_missing_required_field_is_reported(self):
        errors = RecordMapper.validate_for_create([make_field("title", required=True)], {})

        codes = {e.code for e in errors}
        assert "required_missing" in codes
        assert any(e.field == "title" for e in errors)

    def test_filled_required_field_passes(self):
        assert RecordMapper.validate_for_create(
            [make_field("title", required=True)], {"title": "x"}
        ) == []

    def test_reports_label_when_present(self):
        errors = RecordMapper.validate_for_create(
            [make_field("fld_k", label="Song Title", required=True)], {"other": "x"}
        )
        assert [e.field for e in errors] == ["Song Title"]

    def test_required_text_and_optional_file(self):
        fields = [
            make_field("t", field_type="text", required=True),
            make_field("u", field_type="file"),
        ]

        errors = RecordMapper.validate_for_create(fields, {"u": "http://x/file.png"})
        assert [(e.field, e.code) for e in errors] == [("t", "required_missing")]

        assert RecordMapper.validate_for_create(fields, {"t": "Hello"}) == []

    def test_blank_submission_is_rejected_without_required_fields(self):
        errors = RecordMapper.validate_for_create([make_field("a")], {"a": "   "})
        assert [e.code for e in errors] == ["empty_submission"]

    def test_zero_and_false_count_as_values(self):
        fields = [make_field("n", field_type="number", required=True)]
        assert RecordMapper.validate_for_create(fields, {"n": 0}) == []
        assert RecordMapper.validate_for_create([make_field("b")], {"b": False}) == []


class TestHeuristics:

    def _collections(self, *names):
        return [Collection(id=f"c{i}", project_id="p", name=n) for i, n in enumerate(names)]

    def test_collection_name_match_is_case_insensitive(self):
        collections = self._collections("Settings", "Tracks", "Songs")
        found = RecordMapper.collection_name_heuristic(TRACK_COLLECTION_NAMES, collections)
        assert found.name == "Tracks"

    def test_falls_back_to_first_collection(self):
        collections = self._collections("Blog", "Team")
        assert RecordMapper.collection_name_heuristic(["songs"], collections).name == "Blog"

    def test_no_collections(self):
        assert RecordMapper.collection_name_heuristic(["songs"], []) is None

    def test_guess_field_by_label(self):
        fields = [make_field("fld_1", "Cover"), make_field("fld_2", "Title")]
        assert RecordMapper.guess_field(fields, ["title", "name"]).name == "fld_2"
        assert RecordMapper.guess_field(fields, ["audio"]) is None


class TestHelpers:

    @pytest.mark.parametrize("value", [None, "", "  ", [], {}])
    def test_empty_values(self, value):
        assert is_empty_value(value) is True

    @pytest.mark.parametrize("value", [0, False, "x", [0]])
    def test_non_empty_values(self, value):
        assert is_empty_value(value) is False

    def test_display_file_name(self):
        assert display_file_name("http://host/files/1712345678_song_a.mp3") == "song_a.mp3"
        assert display_file_name("plain.png") == "plain.png"
        assert display_file_name("http://host/files/17_My%20Song.mp3") == "My Song.mp3"

    def test_compact_json_handles_unserializable(self):
        assert compact_json({"when": date(2024, 1, 2)}) == '{"when":"2024-01-02"}'
