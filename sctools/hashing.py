"""Hash functions used by the open-addressing hash map.

Integer keys are hashed by folding them to 32 bits; string keys use a
64-bit MurmurHash variant truncated to 32 bits.
"""

from __future__ import annotations

import operator

__all__ = ["murmurhash", "hash_32", "hash_64"]

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF
_M = 0xC6A4A7935BD1E995
_R = 47


def _key_bytes(key: str | bytes | bytearray | memoryview) -> bytes:
    if isinstance(key, str):
        data = key.encode("utf-8")
    elif isinstance(key, (bytes, bytearray, memoryview)):
        data = bytes(key)
    else:
        raise TypeError(f"murmurhash() expects str or bytes, not {type(key).__name__}")
    # Keys are NUL-terminated strings: anything after the first NUL is ignored.
    end = data.find(b"\0")
    return data if end < 0 else data[:end]


def murmurhash(key: str | bytes | bytearray | memoryview) -> int:
    """Return the 32-bit MurmurHash64A-style hash of a string key.

    A ``str`` is hashed as its UTF-8 encoding. The key is treated as a
    NUL-terminated string, so bytes after an embedded NUL do not count.
    """
    data = _key_bytes(key)
    length = len(data)
    h = (length * _M) & _MASK64

    full = length & ~0x7
    for start in range(0, full, 8):
        k = int.from_bytes(data[start:start + 8], "little")
        k = (k * _M) & _MASK64
        k ^= k >> _R
        k = (k * _M) & _MASK64
        h ^= k
        h = (h * _M) & _MASK64

    tail = data[full:]
    if tail:
        h ^= int.from_bytes(tail, "little")
        h = (h * _M) & _MASK64

    h ^= h >> _R
    h = (h * _M) & _MASK64
    h ^= h >> _R
    return h & _MASK32


def hash_32(value: int) -> int:
    """Hash an integer key as an unsigned 32-bit value (identity)."""
    return operator.index(value) & _MASK32


def hash_64(value: int) -> int:
    """Hash an integer key by XOR-folding its unsigned 64-bit form to 32 bits."""
    a = operator.index(value) & _MASK64
    return ((a & _MASK32) ^ (a >> 32)) & _MASK32