"""Unit tests for the session-scoped collection workspace."""

from unittest.mock import AsyncMock

import pytest

from flexdata.core.exceptions import ValidationError
from flexdata.application.services import CollectionWorkspace
from flexdata.domain.services.schema_validator import FIELD_KEY_PATTERN
from tests.fakes import make_field, make_row


@pytest.fixture
def workspace(field_adapter, row_adapter):
    field_adapter.seed(
        make_field("t", "Title", "text", required=True, sort_order=1000.0),
        make_field("u", "Audio", "file", sort_order=2000.0),
    )
    row_adapter.seed(make_row("r1", 1000.0, t="Intro", fld_old="legacy"))
    return CollectionWorkspace("col-1", field_adapter, row_adapter, step=1000.0)


@pytest.mark.asyncio
async def test_reload_loads_both_lists(workspace):
    await workspace.reload()

    assert [f.name for f in workspace.fields] == ["t", "u"]
    assert workspace.rows.ids == ["r1"]


@pytest.mark.asyncio
async def test_reload_failure_degrades_to_empty(workspace, row_adapter):
    row_adapter.fail_actions.add("fetch")

    await workspace.reload()

    assert len(workspace.rows) == 0
    assert len(workspace.fields) == 2
    assert workspace.notifications == ["Could not load data: backend unavailable"]


@pytest.mark.asyncio
async def test_add_row_validates_before_any_network_call(workspace, row_adapter):
    await workspace.reload()

    with pytest.raises(ValidationError) as exc_info:
        await workspace.add_row({"u": "http://x/file.png"})

    assert exc_info.value.missing_labels == ["Title"]
    assert row_adapter.writes("create") == []


@pytest.mark.asyncio
async def test_add_row_appends_last(workspace):
    await workspace.reload()

    row = await workspace.add_row({"t": "Hello"})

    assert workspace.rows.ids[-1] == row.id
    assert row.sort_order == 2000.0


@pytest.mark.asyncio
async def test_add_field_never_reuses_orphaned_keys(workspace):
    await workspace.reload()
    taken = workspace.taken_field_keys()

    field = await workspace.add_field("number", label="")

    assert "fld_old" in taken
    assert field.name not in taken
    assert FIELD_KEY_PATTERN.match(field.name)
    assert field.label == "Untitled Field"
    assert field.sort_order == 3000.0


@pytest.mark.asyncio
async def test_add_field_rejects_unknown_type(workspace, field_adapter):
    await workspace.reload()

    with pytest.raises(ValueError):
        await workspace.add_field("reference")
    assert field_adapter.writes("create") == []


@pytest.mark.asyncio
async def test_delete_field_keeps_row_data(workspace, row_adapter):
    await workspace.reload()

    workspace.delete_field("id-u")
    await workspace.flush()

    assert row_adapter.writes("update") == []
    rendered = workspace.render_rows()[0]
    assert rendered["fld_old"].text == "legacy"
    assert "u" not in rendered


@pytest.mark.asyncio
async def test_failed_write_becomes_notification(workspace, row_adapter):
    notified = []
    workspace._notify = notified.append
    await workspace.reload()
    row_adapter.fail_actions.add("update")

    workspace.set_value("r1", "t", "Renamed")
    await workspace.flush()

    assert workspace.rows.get("r1").data["t"] == "Renamed"
    assert notified == ["Could not update: update rejected"]


@pytest.mark.asyncio
async def test_delete_collection_requires_confirmation(field_adapter, row_adapter):
    client = AsyncMock()
    workspace = CollectionWorkspace("col-1", field_adapter, row_adapter, collection_client=client)

    with pytest.raises(ValueError):
        await workspace.delete_collection()
    client.delete_collection.assert_not_called()

    await workspace.delete_collection(confirm=True)
    client.delete_collection.assert_awaited_once_with("col-1")
