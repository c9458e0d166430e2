"""Base abstraction for the remote store the client engine persists to."""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

ItemT = TypeVar("ItemT")


class RemoteSyncAdapter(ABC, Generic[ItemT]):
    """Contract the ordered list store consumes from the backing store.

    Implementations perform no local caching. Write methods raise
    ``RemoteWriteError``; ``fetch_ordered`` raises ``RemoteReadError``.
    """

    @abstractmethod
    async def fetch_ordered(self, scope_id: str) -> list[ItemT]:
        """Fetch all items of a scope, ordered by key then creation time."""
        ...

    @abstractmethod
    async def create_item(self, payload: dict[str, Any]) -> ItemT:
        """Create an item and return it with its server-assigned identity."""
        ...

    @abstractmethod
    async def update_item(self, item_id: str, payload: dict[str, Any]) -> None:
        """Apply a partial or full update to an item."""
        ...

    @abstractmethod
    async def delete_item(self, item_id: str) -> None:
        """Delete an item. Deleting a missing id is not an error."""
        ...
