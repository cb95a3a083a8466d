"""Open-addressing hash map with linear probing and backward-shift deletion.

The table size is always a power of two. ``None`` is a valid key and is
kept in a slot of its own, outside the probed table. Iteration visits the
``None`` key first (if present), then the table in slot order.
"""

from __future__ import annotations

import operator
from typing import Any, Callable, Iterator, Optional, Tuple

from .hashing import hash_64, murmurhash

__all__ = ["HashMap"]

_MASK32 = 0xFFFFFFFF
_DEFAULT_MAX_CAPACITY = 0xFFFFFFFF
_DEFAULT_LOAD_FACTOR = 75
_MIN_LOAD_FACTOR = 25
_MAX_LOAD_FACTOR = 95

_MISSING = object()

# A table slot is either None (empty) or a tuple of (hash, key, value).
_Entry = Tuple[int, Any, Any]


def _default_hash(key: Any) -> int:
    if isinstance(key, (str, bytes, bytearray, memoryview)):
        return murmurhash(key)
    return hash_64(key)


class HashMap:
    """A mapping backed by a power-of-two open-addressing table.

    ``capacity`` is the initial capacity (0 defers allocation until the
    first insertion). ``load_factor`` is a percentage between 25 and 95;
    0 selects the default of 75. ``hasher`` maps a key to a 32-bit hash;
    by default strings and bytes use MurmurHash and integers are folded
    to 32 bits. Growing beyond ``max_capacity`` raises ``MemoryError``.
    """

    def __init__(
        self,
        capacity: int = 0,
        load_factor: int = 0,
        hasher: Optional[Callable[[Any], int]] = None,
        max_capacity: int = _DEFAULT_MAX_CAPACITY,
    ) -> None:
        capacity = operator.index(capacity)
        load_factor = operator.index(load_factor)
        factor = _DEFAULT_LOAD_FACTOR if load_factor == 0 else load_factor
        if not _MIN_LOAD_FACTOR <= factor <= _MAX_LOAD_FACTOR:
            raise ValueError(
                f"load factor must be between {_MIN_LOAD_FACTOR} and "
                f"{_MAX_LOAD_FACTOR}, got {load_factor}"
            )
        if capacity < 0:
            raise ValueError(f"capacity must not be negative, got {capacity}")

        self._hasher = hasher if hasher is not None else _default_hash
        self._max_capacity = operator.index(max_capacity)
        self._load_factor = factor
        self._size = 0
        self._null_used = False
        self._null_value: Any = None

        if capacity == 0:
            self._slots: list[Optional[_Entry]] = [None]
            self._remap = 0
        else:
            cap = self._table_size(capacity, 1)
            self._slots = [None] * cap
            self._remap = self._threshold(cap)

    @property
    def capacity(self) -> int:
        """Number of slots in the probed table."""
        return len(self._slots)

    @property
    def load_factor(self) -> int:
        """Load factor as a percentage."""
        return self._load_factor

    def _table_size(self, cap: int, factor: int) -> int:
        if cap > self._max_capacity // factor:
            raise MemoryError(
                f"hash map cannot grow beyond {self._max_capacity} slots"
            )
        wanted = 8 if cap < 8 else cap * factor
        return 1 << (wanted - 1).bit_length()

    def _threshold(self, cap: int) -> int:
        return int(cap * (self._load_factor / 100))

    def _hash(self, key: Any) -> int:
        return self._hasher(key) & _MASK32

    def _grow(self) -> None:
        if self._size < self._remap:
            return
        cap = self._table_size(len(self._slots), 2)
        mod = cap - 1
        table: list[Optional[_Entry]] = [None] * cap
        for entry in self._slots:
            if entry is None:
                continue
            pos = entry[0] & mod
            while table[pos] is not None:
                pos = (pos + 1) & mod
            table[pos] = entry
        self._slots = table
        self._remap = self._threshold(cap)

    def _find(self, key: Any) -> Tuple[int, int]:
        """Return the slot holding ``key``, or the empty slot ending its probe."""
        h = self._hash(key)
        slots = self._slots
        mod = len(slots) - 1
        pos = h & mod
        while True:
            entry = slots[pos]
            if entry is None or (entry[0] == h and entry[1] == key):
                return pos, h
            pos = (pos + 1) & mod

    def put(self, key: Any, value: Any) -> Any:
        """Store ``value`` under ``key``; return the previous value or None."""
        self._grow()

        if key is None:
            previous = self._null_value if self._null_used else None
            if not self._null_used:
                self._size += 1
            self._null_used = True
            self._null_value = value
            return previous

        pos, h = self._find(key)
        entry = self._slots[pos]
        if entry is None:
            self._size += 1
            previous = None
        else:
            previous = entry[2]
        self._slots[pos] = (h, key, value)
        return previous

    def get(self, key: Any, default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` if it is absent."""
        if key is None:
            return self._null_value if self._null_used else default
        pos, _ = self._find(key)
        entry = self._slots[pos]
        return default if entry is None else entry[2]

    def _remove(self, key: Any) -> Any:
        if key is None:
            if not self._null_used:
                return _MISSING
            value = self._null_value
            self._null_used = False
            self._null_value = None
            self._size -= 1
            return value

        pos, _ = self._find(key)
        slots = self._slots
        entry = slots[pos]
        if entry is None:
            return _MISSING

        self._size -= 1
        slots[pos] = None
        mod = len(slots) - 1
        prev = pos
        it = pos
        while True:
            it = (it + 1) & mod
            moving = slots[it]
            if moving is None:
                break
            home = moving[0] & mod
            if (home > it and (home <= prev or it >= prev)) or (
                home <= prev and it >= prev
            ):
                slots[prev] = moving
                slots[it] = None
                prev = it
        return entry[2]

    def pop(self, key: Any, *args: Any) -> Any:
        """Remove ``key`` and return its value.

        With a default given, return it when the key is absent; otherwise
        raise ``KeyError``.
        """
        if len(args) > 1:
            raise TypeError(f"pop expected at most 2 arguments, got {1 + len(args)}")
        value = self._remove(key)
        if value is _MISSING:
            if args:
                return args[0]
            raise KeyError(key)
        return value

    def clear(self) -> None:
        """Remove every entry, keeping the allocated table."""
        if self._size > 0:
            self._slots = [None] * len(self._slots)
            self._null_used = False
            self._null_value = None
            self._size = 0

    def _entries(self) -> Iterator[Tuple[Any, Any]]:
        if self._null_used:
            yield None, self._null_value
        for entry in self._slots:
            if entry is not None:
                yield entry[1], entry[2]

    def keys(self) -> Iterator[Any]:
        """Iterate over the keys."""
        for key, _ in self._entries():
            yield key

    def values(self) -> Iterator[Any]:
        """Iterate over the values."""
        for _, value in self._entries():
            yield value

    def items(self) -> Iterator[Tuple[Any, Any]]:
        """Iterate over ``(key, value)`` pairs."""
        yield from self._entries()

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        return self.keys()

    def __contains__(self, key: Any) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def __getitem__(self, key: Any) -> Any:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __setitem__(self, key: Any, value: Any) -> None:
        self.put(key, value)

    def __delitem__(self, key: Any) -> None:
        if self._remove(key) is _MISSING:
            raise KeyError(key)

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self._entries())
        return f"{type(self).__name__}({{{body}}})"