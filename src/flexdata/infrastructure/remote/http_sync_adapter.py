"""Remote sync adapter over the admin REST API.

Talks to the ``/admin/v1`` endpoints of a FlexData server with an
``httpx.AsyncClient``. Transport failures and non-2xx answers are turned
into ``RemoteWriteError`` / ``RemoteReadError`` so callers only deal with
the adapter contract.
"""

from typing import Any, Generic, TypeVar

import httpx

from flexdata.core.config import get_settings
from flexdata.core.exceptions import RemoteReadError, RemoteWriteError
from flexdata.core.logging import get_logger
from flexdata.domain.entities import Field, Row
from flexdata.infrastructure.remote.base import RemoteSyncAdapter

logger = get_logger(__name__)

ItemT = TypeVar("ItemT", Field, Row)

# Answers to a DELETE that mean the item is already gone
MISSING_STATUSES = frozenset({404, 410})


def error_details(response: httpx.Response) -> tuple[str, str]:
    """Extract (message, code) from an error response."""
    code = f"http_{response.status_code}"
    message = f"HTTP {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return message, code

    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, dict):
            body = detail
        elif isinstance(detail, str):
            message = detail
        message = body.get("message") or body.get("error") or message
        code = body.get("code") or code
    return str(message), str(code)


class HttpSyncAdapter(RemoteSyncAdapter[ItemT], Generic[ItemT]):
    """Adapter for one admin resource (``fields`` or ``rows``)."""

    resource: str = ""
    entity: type[ItemT]

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize the adapter.

        Args:
            client: HTTP client whose base URL points at the admin API root.
        """
        self.client = client

    @classmethod
    def from_settings(cls) -> "HttpSyncAdapter[ItemT]":
        """Build an adapter with a client configured from settings."""
        settings = get_settings()
        client = httpx.AsyncClient(
            base_url=settings.remote_base_url,
            timeout=settings.remote_timeout_seconds,
        )
        return cls(client)

    async def fetch_ordered(self, scope_id: str) -> list[ItemT]:
        try:
            response = await self.client.get(
                f"/{self.resource}", params={"collection_id": scope_id}
            )
        except httpx.HTTPError as e:
            raise RemoteReadError(f"Failed to fetch {self.resource}: {e}") from e

        if response.status_code != 200:
            message, code = error_details(response)
            raise RemoteReadError(message, code)

        try:
            return [self.entity.from_dict(item) for item in response.json()["items"]]
        except (ValueError, KeyError, TypeError) as e:
            raise RemoteReadError(
                f"Malformed response listing {self.resource}: {e}", "invalid_response"
            ) from e

    async def create_item(self, payload: dict[str, Any]) -> ItemT:
        response = await self._send("POST", f"/{self.resource}", payload)
        try:
            return self.entity.from_dict(response.json())
        except (ValueError, KeyError, TypeError) as e:
            raise RemoteWriteError(
                f"Malformed response creating {self.resource}: {e}", "invalid_response"
            ) from e

    async def update_item(self, item_id: str, payload: dict[str, Any]) -> None:
        await self._send("PATCH", f"/{self.resource}/{item_id}", payload)

    async def delete_item(self, item_id: str) -> None:
        """Delete an item; an item that is already gone counts as deleted."""
        await self._send("DELETE", f"/{self.resource}/{item_id}", allow_missing=True)

    async def _send(
        self,
        method: str,
        url: str,
        payload: dict[str, Any] | None = None,
        allow_missing: bool = False,
    ) -> httpx.Response:
        try:
            response = await self.client.request(method, url, json=payload)
        except httpx.HTTPError as e:
            raise RemoteWriteError(f"Request to {url} failed: {e}", "network_error") from e

        if allow_missing and response.status_code in MISSING_STATUSES:
            logger.debug("Item already gone", method=method, url=url)
            return response
        if response.status_code >= 400:
            message, code = error_details(response)
            logger.warning(
                "Remote write rejected",
                method=method,
                url=url,
                status_code=response.status_code,
                error=message,
            )
            raise RemoteWriteError(message, code)
        return response

    async def aclose(self) -> None:
        await self.client.aclose()


class FieldSyncAdapter(HttpSyncAdapter[Field]):
    """Persists fields through ``/fields``."""

    resource = "fields"
    entity = Field


class RowSyncAdapter(HttpSyncAdapter[Row]):
    """Persists rows through ``/rows``."""

    resource = "rows"
    entity = Row
