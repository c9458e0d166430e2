"""In-memory ordered list with optimistic, fire-and-forget persistence.

The store is the single source of truth for rendering and reordering a
collection's rows or fields. Every mutation commits to local state first
and then schedules an independent remote write task; the two are never
awaited together. Failed writes are logged and reported through the
``on_error`` callback but do not revert local state, except for inserts,
which are rolled back because the item never got a server identity.

Local state and the remote store may diverge until the next ``load``.
Concurrent sessions are not coordinated: the last write wins, and row data
is always sent as the whole merged bag.
"""

import asyncio
import uuid
from collections.abc import Callable, Coroutine, Iterator, Sequence
from datetime import datetime
from typing import Any, Generic, Protocol, TypeVar

from flexdata.core.exceptions import RemoteWriteError
from flexdata.core.logging import get_logger
from flexdata.domain.services.sort_key_allocator import (
    DEFAULT_STEP,
    allocate_key,
    append_key,
    needs_rebalance,
    rebalance_keys,
)
from flexdata.infrastructure.remote.base import RemoteSyncAdapter

logger = get_logger(__name__)

TEMP_ID_PREFIX = "tmp_"

# Attributes that identify an item and can never be edited in place
IMMUTABLE_ATTRIBUTES = frozenset({"id", "name", "collection_id", "created_at"})


class OrderedItem(Protocol):
    """What the store needs from a row or field."""

    id: str
    sort_order: float | None
    created_at: datetime


ItemT = TypeVar("ItemT", bound=OrderedItem)

ErrorNotifier = Callable[[str, RemoteWriteError], None]


def order_sort_key(item: OrderedItem) -> tuple[bool, float, datetime]:
    """Ascending by key, absent keys last, ties by creation time."""
    return (item.sort_order is None, item.sort_order or 0.0, item.created_at)


def is_temp_id(item_id: str) -> bool:
    return item_id.startswith(TEMP_ID_PREFIX)


def new_temp_id() -> str:
    return f"{TEMP_ID_PREFIX}{uuid.uuid4().hex}"


def _neighbour_key(item: OrderedItem | None) -> float | None:
    return item.sort_order if item is not None else None


def _is_keyless(item: OrderedItem | None) -> bool:
    return item is not None and item.sort_order is None


class OrderedListStore(Generic[ItemT]):
    """Ordered sequence of items plus their pending remote writes."""

    def __init__(
        self,
        adapter: RemoteSyncAdapter[ItemT],
        on_error: ErrorNotifier | None = None,
        step: float = DEFAULT_STEP,
    ) -> None:
        """Initialize the store.

        Args:
            adapter: Remote store the writes are sent to.
            on_error: Called with (action, error) when a remote write fails.
            step: Key gap used for appends.
        """
        self.adapter = adapter
        self.step = step
        self._on_error = on_error
        self._items: list[ItemT] = []
        self._pending: set[asyncio.Task[None]] = set()
        # Changes made to items whose create call is still in flight
        self._deferred: dict[str, dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ItemT]:
        return iter(list(self._items))

    @property
    def items(self) -> list[ItemT]:
        """Snapshot of the items in display order."""
        return list(self._items)

    @property
    def ids(self) -> list[str]:
        return [item.id for item in self._items]

    @property
    def keys(self) -> list[float | None]:
        return [item.sort_order for item in self._items]

    @property
    def pending_writes(self) -> int:
        """Number of remote writes still in flight."""
        return len(self._pending)

    def index_of(self, item_id: str) -> int:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        raise KeyError(item_id)

    def get(self, item_id: str) -> ItemT:
        return self._items[self.index_of(item_id)]

    def load(self, items: Sequence[ItemT]) -> None:
        """Replace the whole sequence, sorted by key then creation time."""
        self._items = sorted(items, key=order_sort_key)
        logger.debug("Ordered list loaded", count=len(self._items))

    def move_item(self, item_id: str, target_index: int) -> float | None:
        """Move an item to ``target_index`` and persist its new key.

        Call once per completed drop; intermediate drag positions must not
        reach the store. Exactly one remote write is scheduled, unless the
        key space between the neighbours is exhausted or a neighbour has no
        key, in which case the whole list is renumbered.

        Args:
            item_id: The item being moved.
            target_index: Destination index, clamped to the list bounds.

        Returns:
            The item's new key, or None when the move was a no-op.

        Raises:
            KeyError: If the item is not in the list.
        """
        current = self.index_of(item_id)
        target = max(0, min(target_index, len(self._items) - 1))
        if target == current:
            return None

        item = self._items.pop(current)
        self._items.insert(target, item)

        left = self._items[target - 1] if target > 0 else None
        right = self._items[target + 1] if target + 1 < len(self._items) else None
        if _is_keyless(left) or _is_keyless(right):
            # Keyless items sort last, so no key next to one survives a reload
            logger.info("Keyless neighbour, renumbering list", item_id=item_id)
            self._rebalance()
            return item.sort_order

        left_key = _neighbour_key(left)
        right_key = _neighbour_key(right)

        new_key = allocate_key(left_key, right_key, self.step)
        if needs_rebalance(left_key, new_key, right_key):
            logger.warning(
                "Order key space exhausted, renumbering list",
                item_id=item_id,
                left=left_key,
                right=right_key,
            )
            self._rebalance()
            return item.sort_order

        item.sort_order = new_key
        self._persist(item.id, {"sort_order": new_key})
        logger.debug("Item moved", item_id=item_id, index=target, sort_order=new_key)
        return new_key

    async def insert(self, item: ItemT) -> ItemT | None:
        """Append an item optimistically and create it remotely.

        The item is shown under a temporary id with key max + step until the
        remote store answers. On success the local entry is replaced by the
        authoritative item; edits made meanwhile are sent on top of it. On
        failure the entry is removed and the error reported.

        Returns:
            The created item, or None if the remote store rejected it.
        """
        item.sort_order = append_key(self.keys, self.step)
        item.id = new_temp_id()
        temp_id = item.id
        self._items.append(item)

        try:
            created = await self.adapter.create_item(item.to_payload())
        except RemoteWriteError as e:
            self._deferred.pop(temp_id, None)
            try:
                self._items.pop(self.index_of(temp_id))
            except KeyError:
                pass
            logger.error("Remote create failed, insert rolled back", error=str(e))
            self._report("insert", e)
            return None

        deferred = self._deferred.pop(temp_id, {})
        try:
            index = self.index_of(temp_id)
        except KeyError:
            # Removed locally while the create was in flight
            self._schedule(self.adapter.delete_item(created.id), "delete", created.id)
            return created

        changes = dict(deferred)
        if created.sort_order != item.sort_order:
            changes["sort_order"] = item.sort_order
        local_data = getattr(item, "data", None)
        if local_data is not None and getattr(created, "data", None) != local_data:
            changes["data"] = dict(local_data)
        for attribute, value in changes.items():
            setattr(created, attribute, dict(value) if isinstance(value, dict) else value)

        self._items[index] = created
        if changes:
            self._persist(created.id, changes)

        logger.info("Item inserted", item_id=created.id, sort_order=created.sort_order)
        return created

    def remove(self, item_id: str) -> ItemT:
        """Remove an item locally and schedule the remote delete.

        A failed delete is reported but the item is not restored.

        Raises:
            KeyError: If the item is not in the list.
        """
        item = self._items.pop(self.index_of(item_id))
        if not is_temp_id(item_id):
            self._schedule(self.adapter.delete_item(item_id), "delete", item_id)
        return item

    def patch_item_data(self, item_id: str, key: str, value: Any) -> dict[str, Any]:
        """Set one key of a row's data bag and persist the whole merged bag.

        The backing store replaces structured values wholesale, so the full
        bag is sent. Two sessions editing different keys of the same row
        can therefore overwrite each other; the last write wins.

        Returns:
            The merged data bag.

        Raises:
            KeyError: If the item is not in the list.
            TypeError: If the item has no data bag.
        """
        item = self.get(item_id)
        if not isinstance(getattr(item, "data", None), dict):
            raise TypeError("patch_item_data only applies to rows")

        merged = {**item.data, key: value}
        item.data = merged
        self._persist(item_id, {"data": dict(merged)})
        return merged

    def update_item(self, item_id: str, **changes: Any) -> ItemT:
        """Apply attribute changes locally and persist them.

        Raises:
            KeyError: If the item is not in the list.
            ValueError: If an identity attribute such as the field key is changed.
        """
        forbidden = IMMUTABLE_ATTRIBUTES.intersection(changes)
        if forbidden:
            raise ValueError(f"Cannot change {', '.join(sorted(forbidden))}")

        item = self.get(item_id)
        for attribute, value in changes.items():
            setattr(item, attribute, value)
        if changes:
            self._persist(item_id, dict(changes))
        return item

    async def flush(self) -> None:
        """Wait for every outstanding remote write to settle."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def _rebalance(self) -> None:
        for item, key in zip(self._items, rebalance_keys(len(self._items), self.step)):
            if item.sort_order != key:
                item.sort_order = key
                self._persist(item.id, {"sort_order": key})

    def _persist(self, item_id: str, payload: dict[str, Any]) -> None:
        # Items still waiting for their create call are reconciled by insert()
        if is_temp_id(item_id):
            self._deferred.setdefault(item_id, {}).update(payload)
            return
        self._schedule(self.adapter.update_item(item_id, payload), "update", item_id)

    def _schedule(
        self, write: Coroutine[Any, Any, None], action: str, item_id: str
    ) -> None:
        task = asyncio.create_task(self._run_write(write, action, item_id))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _run_write(
        self, write: Coroutine[Any, Any, None], action: str, item_id: str
    ) -> None:
        try:
            await write
        except RemoteWriteError as e:
            logger.error(
                "Remote write failed, keeping local state",
                action=action,
                item_id=item_id,
                error=e.message,
                code=e.code,
            )
            self._report(action, e)
        except Exception as e:
            # Adapters should only raise RemoteWriteError; anything else is a bug there
            logger.exception(
                "Remote write crashed, keeping local state",
                action=action,
                item_id=item_id,
            )
            message = str(e) or type(e).__name__
            self._report(action, RemoteWriteError(message, "unexpected_error"))

    def _report(self, action: str, error: RemoteWriteError) -> None:
        if self._on_error is not None:
            self._on_error(action, error)
