"""OrderedQueue: a FIFO queue or LIFO stack chosen at construction."""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

T = TypeVar("T")


class QueueOrder(str, Enum):
    """Dispatch policy of an :class:`OrderedQueue`."""

    FIFO = "fifo"
    LIFO = "lifo"


class OrderedQueue(Generic[T]):
    """Sequence whose ``pop`` end depends on a fixed :class:`QueueOrder`.

    * ``FIFO`` behaves as a queue: ``pop`` returns the oldest item.
    * ``LIFO`` behaves as a stack: ``pop`` returns the newest item.

    Items are always stored, indexed and iterated in insertion order, so
    index-based helpers mean the same thing for both policies. Lookups of
    absent items return ``None`` (``find_index`` returns ``-1``).
    """

    def __init__(self, order: QueueOrder | str = QueueOrder.FIFO) -> None:
        self._order = QueueOrder(order)
        self._items: deque[T] = deque()

    @property
    def order(self) -> QueueOrder:
        return self._order

    # ── Mutation ─────────────────────────────────────────────────

    def push(self, *items: T) -> None:
        """Append *items* in the given order."""
        self._items.extend(items)

    def pop(self) -> T | None:
        """Remove and return the next item to dispatch."""
        if not self._items:
            return None
        if self._order is QueueOrder.FIFO:
            return self._items.popleft()
        return self._items.pop()

    def delete_by_index(self, index: int) -> T | None:
        """Remove the item at insertion *index* and return it."""
        if not 0 <= index < len(self._items):
            return None
        item = self._items[index]
        del self._items[index]
        return item

    def clear(self) -> None:
        self._items.clear()

    # ── Inspection ───────────────────────────────────────────────

    def peek(self) -> T | None:
        """Return what ``pop`` would return, without removing it."""
        if not self._items:
            return None
        return self._items[0] if self._order is QueueOrder.FIFO else self._items[-1]

    def get_by_index(self, index: int) -> T | None:
        if not 0 <= index < len(self._items):
            return None
        return self._items[index]

    def find(self, predicate: Callable[[T, int], bool]) -> T | None:
        for index, item in enumerate(self._items):
            if predicate(item, index):
                return item
        return None

    def find_many(self, predicate: Callable[[T, int], bool]) -> list[T]:
        return [item for index, item in enumerate(self._items) if predicate(item, index)]

    def find_index(self, predicate: Callable[[T, int], bool]) -> int:
        for index, item in enumerate(self._items):
            if predicate(item, index):
                return index
        return -1

    def size(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def enumerate(self) -> list[tuple[int, T]]:
        return list(enumerate(self._items))

    def to_list(self) -> list[T]:
        """Copy of the items in insertion order."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"OrderedQueue(order={self._order.value!r}, size={len(self._items)})"
