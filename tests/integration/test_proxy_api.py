"""Integration tests for the public read proxy."""

import pytest
from httpx import AsyncClient


async def seed_rows(client: AsyncClient, collection_id: str) -> None:
    for title, order in (("Second", 2000.0), ("First", 1000.0), ("Third", 3000.0)):
        response = await client.post(
            "/admin/v1/rows",
            json={"collection_id": collection_id, "data": {"title": title}, "sort_order": order},
        )
        assert response.status_code == 201


@pytest.mark.asyncio
async def test_read_by_collection_id(client: AsyncClient, project, collection):
    await seed_rows(client, collection["id"])

    response = await client.get(f"/api/v1/{project['id']}/{collection['id']}")

    assert response.status_code == 200
    assert response.json() == {
        "count": 3,
        "results": [{"title": "First"}, {"title": "Second"}, {"title": "Third"}],
    }


@pytest.mark.asyncio
async def test_read_by_collection_name(client: AsyncClient, project, collection):
    await seed_rows(client, collection["id"])

    response = await client.get(f"/api/v1/{project['id']}/songs")

    assert response.status_code == 200
    assert response.json()["count"] == 3


@pytest.mark.asyncio
async def test_read_empty_collection(client: AsyncClient, project, collection):
    response = await client.get(f"/api/v1/{project['id']}/{collection['id']}")

    assert response.json() == {"count": 0, "results": []}


@pytest.mark.asyncio
async def test_unknown_name_returns_404(client: AsyncClient, project, collection):
    response = await client.get(f"/api/v1/{project['id']}/videos")

    assert response.status_code == 404
    assert response.json()["error"] == "Not found"


@pytest.mark.asyncio
async def test_collection_of_another_project_is_not_served(client: AsyncClient, collection):
    other = (await client.post("/admin/v1/projects", json={"name": "Other"})).json()

    by_id = await client.get(f"/api/v1/{other['id']}/{collection['id']}")
    by_name = await client.get(f"/api/v1/{other['id']}/songs")

    assert by_id.status_code == 404
    assert by_name.status_code == 404


@pytest.mark.asyncio
async def test_api_root_is_not_shadowed(client: AsyncClient):
    response = await client.get("/api/v1")

    assert response.status_code == 200
    assert response.json()["api_version"] == "v1"
