"""A non-recursive mutual-exclusion lock."""

from __future__ import annotations

import threading
from types import TracebackType
from typing import Optional, Type

__all__ = ["Mutex"]


class Mutex:
    """A plain, non-recursive lock that can also be used with ``with``.

    Unlocking a mutex that is not locked raises ``RuntimeError``, as does
    using it after ``close()`` or closing it while it is held.
    """

    def __init__(self) -> None:
        self._lock: Optional[threading.Lock] = threading.Lock()

    def _require_open(self) -> threading.Lock:
        if self._lock is None:
            raise RuntimeError("mutex is closed")
        return self._lock

    @property
    def locked(self) -> bool:
        """True while some thread holds the mutex."""
        return self._lock is not None and self._lock.locked()

    @property
    def closed(self) -> bool:
        """True once the mutex has been closed."""
        return self._lock is None

    def lock(self) -> None:
        """Block until the mutex is acquired."""
        self._require_open().acquire()

    def unlock(self) -> None:
        """Release the mutex."""
        self._require_open().release()

    def close(self) -> None:
        """Destroy the mutex. Closing twice does nothing."""
        if self._lock is None:
            return
        if self._lock.locked():
            raise RuntimeError("cannot close a locked mutex")
        self._lock = None

    def __enter__(self) -> "Mutex":
        self.lock()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.unlock()