"""End-to-end tests: the collection workspace against the real admin API.

Each remote write is flushed before the next edit because all requests
share one database session.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from flexdata.application.services import CollectionWorkspace
from flexdata.core.exceptions import ValidationError
from flexdata.infrastructure.api.app import app
from flexdata.infrastructure.remote import CollectionClient, FieldSyncAdapter, RowSyncAdapter


@pytest_asyncio.fixture
async def admin_http(client):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test/admin/v1"
    ) as http:
        yield http


def new_workspace(admin_http, collection_id: str) -> CollectionWorkspace:
    return CollectionWorkspace(
        collection_id,
        FieldSyncAdapter(admin_http),
        RowSyncAdapter(admin_http),
        collection_client=CollectionClient(admin_http),
        step=1000.0,
    )


@pytest.mark.asyncio
async def test_edits_reach_the_read_proxy(client, admin_http, project, collection):
    workspace = new_workspace(admin_http, collection["id"])
    await workspace.reload()

    title = await workspace.add_field("text", "Title", required=True)
    audio = await workspace.add_field("file", "Audio")
    intro = await workspace.add_row({title.name: "Intro", audio.name: "http://x/files/1_a.mp3"})
    outro = await workspace.add_row({title.name: "Outro"})
    assert (intro.sort_order, outro.sort_order) == (1000.0, 2000.0)

    assert workspace.move_row(outro.id, 0) == 500.0
    await workspace.flush()
    workspace.set_value(intro.id, title.name, "Intro v2")
    await workspace.flush()

    response = await client.get(f"/api/v1/{project['id']}/songs")
    assert response.json() == {
        "count": 2,
        "results": [
            {title.name: "Outro"},
            {title.name: "Intro v2", audio.name: "http://x/files/1_a.mp3"},
        ],
    }

    workspace.delete_field(audio.id)
    await workspace.flush()

    fresh = new_workspace(admin_http, collection["id"])
    await fresh.reload()
    assert [f.name for f in fresh.fields] == [title.name]
    assert fresh.rows.ids == [outro.id, intro.id]
    rendered = fresh.render_rows()[1]
    assert rendered[audio.name].text == "http://x/files/1_a.mp3"
    assert fresh.notifications == []


@pytest.mark.asyncio
async def test_new_field_avoids_keys_left_in_rows(client, admin_http, collection):
    workspace = new_workspace(admin_http, collection["id"])
    await workspace.reload()
    old = await workspace.add_field("text", "Old")
    await workspace.add_row({old.name: "kept"})
    workspace.delete_field(old.id)
    await workspace.flush()

    await workspace.reload()
    replacement = await workspace.add_field("text", "Old")

    assert replacement.name != old.name
    assert old.name in workspace.taken_field_keys()


@pytest.mark.asyncio
async def test_required_field_blocks_row_before_request(client, admin_http, collection):
    workspace = new_workspace(admin_http, collection["id"])
    await workspace.reload()
    await workspace.add_field("text", "Title", required=True)

    with pytest.raises(ValidationError):
        await workspace.add_row({})

    response = await client.get("/admin/v1/rows", params={"collection_id": collection["id"]})
    assert response.json()["total"] == 0


@pytest.mark.asyncio
async def test_rejected_create_is_rolled_back(client, admin_http, collection):
    workspace = new_workspace(admin_http, "missing-collection")
    await workspace.reload()

    result = await workspace.add_row({"anything": "value"})

    assert result is None
    assert len(workspace.rows) == 0
    assert workspace.notifications == [
        "Could not insert: Collection 'missing-collection' does not exist"
    ]


@pytest.mark.asyncio
async def test_delete_collection_through_workspace(client, admin_http, project, collection):
    workspace = new_workspace(admin_http, collection["id"])
    await workspace.reload()
    await workspace.add_row({"k": "v"})

    await workspace.delete_collection(confirm=True)

    assert len(workspace.rows) == 0
    listing = await CollectionClient(admin_http).list_collections(project["id"])
    assert listing == []
