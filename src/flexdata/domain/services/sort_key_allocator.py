"""Order key allocation for drag-and-drop reordering.

A moved item gets a key strictly between its new neighbours so that no
other item has to be renumbered:

* no neighbours: ``DEFAULT_STEP``
* first position: half of the right neighbour
* last position: left neighbour plus ``DEFAULT_STEP``
* between two items: the midpoint

Repeated midpoints between the same two neighbours eventually run out of
float precision. ``needs_rebalance`` detects that, and ``rebalance_keys``
provides a fresh evenly spaced sequence for a full renumbering.
"""

from collections.abc import Iterator

DEFAULT_STEP = 1000.0


def allocate_key(
    left: float | None,
    right: float | None,
    step: float = DEFAULT_STEP,
) -> float:
    """Compute an order key for an item placed between two neighbours.

    Args:
        left: Key of the item before the target position, if any.
        right: Key of the item after the target position, if any.
        step: Gap used when appending or placing the only item.

    Returns:
        The new key.
    """
    if left is None and right is None:
        return step
    if left is None:
        return right / 2
    if right is None:
        return left + step
    return (left + right) / 2


def append_key(keys: list[float | None], step: float = DEFAULT_STEP) -> float:
    """Key for an item appended after ``keys``: max + step, or step if empty."""
    present = [k for k in keys if k is not None]
    if not present:
        return step
    return max(present) + step


def needs_rebalance(left: float | None, key: float, right: float | None) -> bool:
    """Whether ``key`` fails to sit strictly between its neighbours."""
    if left is not None and not key > left:
        return True
    if right is not None and not key < right:
        return True
    return False


def rebalance_keys(count: int, step: float = DEFAULT_STEP) -> Iterator[float]:
    """Evenly spaced keys ``step, 2*step, ...`` for ``count`` items."""
    for index in range(count):
        yield step * (index + 1)
