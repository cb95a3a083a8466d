"""Memory-mapped files.

A file is opened with ``os.open`` flags and mapped into memory. When the
mapping is writable, the file is first extended so that it covers
``offset + length`` bytes.
"""

from __future__ import annotations

import errno
import mmap
import os
import sys
from types import TracebackType
from typing import Optional, Type, Union

__all__ = [
    "MemoryMap",
    "MemoryMapError",
    "PROT_READ",
    "PROT_WRITE",
    "MAP_SHARED",
    "MAP_PRIVATE",
]

PROT_READ: int = getattr(mmap, "PROT_READ", 1)
PROT_WRITE: int = getattr(mmap, "PROT_WRITE", 2)
MAP_SHARED: int = getattr(mmap, "MAP_SHARED", 1)
MAP_PRIVATE: int = getattr(mmap, "MAP_PRIVATE", 2)

_FILE_MODE = 0o644
_WINDOWS = sys.platform == "win32"


class MemoryMapError(OSError):
    """Raised when a file cannot be opened, extended, mapped or synced."""


def _wrap(exc: BaseException, path: Optional[str] = None) -> MemoryMapError:
    if isinstance(exc, OSError) and exc.errno is not None:
        if path is None:
            return MemoryMapError(exc.errno, exc.strerror)
        return MemoryMapError(exc.errno, exc.strerror, path)
    return MemoryMapError(errno.EINVAL, str(exc))


class MemoryMap:
    """A file mapped into memory.

    ``file_flags`` are ``os.open`` flags, ``prot`` is a combination of
    ``PROT_READ`` and ``PROT_WRITE``, ``map_flags`` is ``MAP_SHARED`` or
    ``MAP_PRIVATE``. A ``length`` of 0 maps the file from ``offset`` to its
    end. Failures raise ``MemoryMapError``.
    """

    def __init__(
        self,
        path: Union[str, "os.PathLike[str]"],
        file_flags: int = os.O_RDWR | os.O_CREAT,
        prot: int = PROT_READ | PROT_WRITE,
        map_flags: int = MAP_SHARED,
        offset: int = 0,
        length: int = 0,
    ) -> None:
        if offset < 0 or length < 0:
            raise ValueError("offset and length must not be negative")

        self.path = os.fspath(path)
        self.page_size = mmap.PAGESIZE
        self._map: Optional[mmap.mmap] = None

        flags = file_flags | getattr(os, "O_BINARY", 0)
        try:
            fd = os.open(self.path, flags, _FILE_MODE)
        except OSError as exc:
            raise _wrap(exc, self.path) from exc

        try:
            size = os.fstat(fd).st_size
            if length == 0:
                length = size - offset
                if length <= 0:
                    raise MemoryMapError(
                        errno.EINVAL,
                        f"nothing to map: file is {size} bytes, offset is {offset}",
                        self.path,
                    )
            if prot & PROT_WRITE:
                self._extend(fd, size, offset, length)
            self._map = self._create(fd, prot, map_flags, offset, length)
        except MemoryMapError:
            raise
        except (OSError, ValueError, OverflowError) as exc:
            raise _wrap(exc, self.path) from exc
        finally:
            os.close(fd)

    @staticmethod
    def _extend(fd: int, size: int, offset: int, length: int) -> None:
        fallocate = getattr(os, "posix_fallocate", None)
        if fallocate is None:
            if size < offset + length:
                os.ftruncate(fd, offset + length)
            return
        while True:
            try:
                fallocate(fd, offset, length)
                return
            except InterruptedError:
                continue

    @staticmethod
    def _create(
        fd: int, prot: int, map_flags: int, offset: int, length: int
    ) -> mmap.mmap:
        if _WINDOWS:
            access = mmap.ACCESS_WRITE if prot & PROT_WRITE else mmap.ACCESS_READ
            return mmap.mmap(fd, length, access=access, offset=offset)
        return mmap.mmap(fd, length, flags=map_flags, prot=prot, offset=offset)

    @property
    def closed(self) -> bool:
        """True once the mapping has been released."""
        return self._map is None

    def _mapping(self) -> mmap.mmap:
        if self._map is None:
            raise ValueError("memory map is closed")
        return self._map

    def sync(self, offset: int = 0, length: Optional[int] = None) -> None:
        """Flush ``length`` bytes starting at ``offset`` to disk.

        ``offset`` is rounded down to a page boundary; the range is clipped
        to the end of the mapping.
        """
        mapping = self._mapping()
        start = offset & ~(self.page_size - 1)
        available = len(mapping) - start
        size = available if length is None else min(length, available)
        try:
            mapping.flush(start, max(size, 0))
        except (OSError, ValueError) as exc:
            raise _wrap(exc) from exc

    def close(self) -> None:
        """Release the mapping. Closing twice does nothing."""
        if self._map is None:
            return
        mapping, self._map = self._map, None
        try:
            mapping.close()
        except OSError as exc:
            raise _wrap(exc) from exc

    def __len__(self) -> int:
        return 0 if self._map is None else len(self._map)

    def __getitem__(self, index):
        return self._mapping()[index]

    def __setitem__(self, index, value) -> None:
        self._mapping()[index] = value

    def __enter__(self) -> "MemoryMap":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"length={len(self)}"
        return f"{type(self).__name__}({self.path!r}, {state})"