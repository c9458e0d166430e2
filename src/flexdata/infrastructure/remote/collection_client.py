"""Client for collection-level operations on the admin API."""

from typing import Any

import httpx

from flexdata.core.config import get_settings
from flexdata.core.exceptions import RemoteReadError, RemoteWriteError
from flexdata.core.logging import get_logger
from flexdata.domain.entities import Collection, Row
from flexdata.infrastructure.remote.http_sync_adapter import RowSyncAdapter, error_details

logger = get_logger(__name__)


class CollectionClient:
    """List and delete collections of a project over HTTP.

    Also reads and appends rows of a collection addressed by its name, for
    scripts that know a project and a collection name but no ids.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client
        self.rows = RowSyncAdapter(client)

    @classmethod
    def from_settings(cls) -> "CollectionClient":
        settings = get_settings()
        return cls(
            httpx.AsyncClient(
                base_url=settings.remote_base_url,
                timeout=settings.remote_timeout_seconds,
            )
        )

    async def list_collections(self, project_id: str) -> list[Collection]:
        try:
            response = await self.client.get(f"/projects/{project_id}/collections")
        except httpx.HTTPError as e:
            raise RemoteReadError(f"Failed to fetch collections: {e}") from e

        if response.status_code != 200:
            message, code = error_details(response)
            raise RemoteReadError(message, code)
        try:
            return [Collection.from_dict(item) for item in response.json()["items"]]
        except (ValueError, KeyError, TypeError) as e:
            raise RemoteReadError(
                f"Malformed response listing collections: {e}", "invalid_response"
            ) from e

    async def find_collection(self, project_id: str, name: str) -> Collection | None:
        """Return the project's collection with exactly this name.

        When several collections share the name, the oldest one wins.
        """
        matches = [c for c in await self.list_collections(project_id) if c.name == name]
        if not matches:
            return None
        return min(matches, key=lambda c: c.created_at)

    async def get_rows(self, project_id: str, name: str) -> list[dict[str, Any]]:
        """Return the data bags of a named collection's rows in display order.

        Raises:
            RemoteReadError: If the collection does not exist or a read fails.
        """
        collection = await self.find_collection(project_id, name)
        if collection is None:
            raise RemoteReadError(f"Collection '{name}' not found", "collection_not_found")
        return [row.data for row in await self.rows.fetch_ordered(collection.id)]

    async def add_row(self, project_id: str, name: str, data: dict[str, Any]) -> Row:
        """Append a row to a named collection.

        Raises:
            RemoteWriteError: If the collection cannot be resolved or the
                server rejects the row.
        """
        try:
            collection = await self.find_collection(project_id, name)
        except RemoteReadError as e:
            raise RemoteWriteError(e.message, e.code) from e
        if collection is None:
            raise RemoteWriteError(f"Collection '{name}' not found", "collection_not_found")

        row = await self.rows.create_item({"collection_id": collection.id, "data": dict(data)})
        logger.info("Row added", collection_id=collection.id, row_id=row.id)
        return row

    async def delete_collection(self, collection_id: str) -> None:
        """Delete a collection and, server side, all of its fields and rows."""
        try:
            response = await self.client.delete(
                f"/collections/{collection_id}", params={"confirm": "true"}
            )
        except httpx.HTTPError as e:
            raise RemoteWriteError(f"Failed to delete collection: {e}", "network_error") from e

        if response.status_code >= 400:
            message, code = error_details(response)
            logger.warning(
                "Collection delete rejected",
                collection_id=collection_id,
                status_code=response.status_code,
            )
            raise RemoteWriteError(message, code)

    async def aclose(self) -> None:
        await self.client.aclose()
