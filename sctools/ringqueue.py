"""Double-ended queue backed by a power-of-two ring buffer.

The buffer starts with eight slots and doubles whenever it fills up. One
slot always stays free, so a buffer of ``n`` slots holds at most ``n - 1``
elements.
"""

from __future__ import annotations

import operator
import sys
from typing import Any, Iterator, List

__all__ = ["RingQueue"]

_INITIAL_CAPACITY = 8


class RingQueue:
    """A deque with O(1) operations at both ends and O(1) indexing.

    ``max_capacity`` bounds the size of the underlying buffer: a buffer
    larger than half of it is never doubled again, and an insertion that
    would need that raises ``MemoryError`` and leaves the queue unchanged.
    """

    def __init__(self, max_capacity: int = sys.maxsize) -> None:
        self._max_capacity = operator.index(max_capacity)
        self._elems: List[Any] = [None] * _INITIAL_CAPACITY
        self._first = 0
        self._last = 0

    @property
    def capacity(self) -> int:
        """Number of slots in the underlying buffer."""
        return len(self._elems)

    @property
    def _mask(self) -> int:
        return len(self._elems) - 1

    def _expand(self) -> None:
        cap = len(self._elems)
        if ((self._last + 1) & (cap - 1)) != self._first:
            return
        if cap > self._max_capacity // 2:
            raise MemoryError(
                f"queue cannot grow beyond {self._max_capacity} slots"
            )
        elems = self._elems[self._first:] + self._elems[:self._first]
        elems.extend([None] * cap)
        self._elems = elems
        self._first = 0
        self._last = cap - 1

    def add_last(self, elem: Any) -> None:
        """Append ``elem`` at the tail."""
        self._expand()
        self._elems[self._last] = elem
        self._last = (self._last + 1) & self._mask

    def add_first(self, elem: Any) -> None:
        """Insert ``elem`` at the head."""
        self._expand()
        self._first = (self._first - 1) & self._mask
        self._elems[self._first] = elem

    def _require_items(self, operation: str) -> None:
        if self._first == self._last:
            raise IndexError(f"{operation} from an empty queue")

    def del_last(self) -> Any:
        """Remove and return the tail element."""
        self._require_items("del_last")
        self._last = (self._last - 1) & self._mask
        value = self._elems[self._last]
        self._elems[self._last] = None
        return value

    def del_first(self) -> Any:
        """Remove and return the head element."""
        self._require_items("del_first")
        value = self._elems[self._first]
        self._elems[self._first] = None
        self._first = (self._first + 1) & self._mask
        return value

    def peek_first(self) -> Any:
        """Return the head element without removing it."""
        self._require_items("peek_first")
        return self._elems[self._first]

    def peek_last(self) -> Any:
        """Return the tail element without removing it."""
        self._require_items("peek_last")
        return self._elems[(self._last - 1) & self._mask]

    def clear(self) -> None:
        """Remove every element, keeping the allocated buffer."""
        self._elems = [None] * len(self._elems)
        self._first = 0
        self._last = 0

    def __len__(self) -> int:
        return (self._last - self._first) & self._mask

    def __bool__(self) -> bool:
        return self._first != self._last

    def __iter__(self) -> Iterator[Any]:
        pos = self._first
        while pos != self._last:
            yield self._elems[pos]
            pos = (pos + 1) & self._mask

    def __getitem__(self, index: int) -> Any:
        i = operator.index(index)
        size = len(self)
        if i < 0:
            i += size
        if not 0 <= i < size:
            raise IndexError("queue index out of range")
        return self._elems[(self._first + i) & self._mask]

    def __repr__(self) -> str:
        return f"{type(self).__name__}([{', '.join(repr(e) for e in self)}])"