"""BufferPool: reusable fixed-size accumulators for object digests.

Object digests are built by XOR-ing one member hash at a time into a
zero-initialised buffer.  Wide or deeply nested documents open many objects,
so the buffers are pooled instead of allocated per object.

Buffers are numpy ``uint8`` arrays keyed by their length (the digest size of
the hash in use).  ``acquire`` is a context manager: the buffer is zeroed on
the way in and returned to the pool on every exit path, including errors.
The pool is guarded by a lock and may be shared by concurrent traversals; a
buffer belongs to exactly one ``acquire`` block at a time.

Example::

    pool = BufferPool()
    with pool.acquire(20) as buf:
        np.bitwise_xor(buf, member, out=buf)
        digest = buf.tobytes()
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

import numpy as np

__all__ = ["BufferPool", "default_pool"]


class BufferPool:
    """Thread-safe pool of zeroed numpy ``uint8`` buffers keyed by size.

    Args:
        max_idle: Maximum number of idle buffers kept per size.  Buffers
            released beyond this are dropped.  Defaults to 64.
    """

    def __init__(self, max_idle: int = 64) -> None:
        if max_idle < 0:
            msg = f"max_idle must be >= 0, got {max_idle}"
            raise ValueError(msg)
        self._max_idle = max_idle
        self._lock = threading.Lock()
        self._free: dict[int, list[np.ndarray]] = {}
        self._allocated = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def allocated(self) -> int:
        """Total number of buffers this pool has ever allocated."""
        with self._lock:
            return self._allocated

    def idle(self, size: int) -> int:
        """Number of idle buffers of ``size`` bytes currently pooled."""
        with self._lock:
            return len(self._free.get(size, ()))

    # ------------------------------------------------------------------
    # Acquire / release
    # ------------------------------------------------------------------

    @contextmanager
    def acquire(self, size: int) -> Iterator[np.ndarray]:
        """Borrow a zeroed buffer of ``size`` bytes for the duration of a block."""
        buf = self._take(size)
        buf.fill(0)
        try:
            yield buf
        finally:
            self._release(buf)

    def _take(self, size: int) -> np.ndarray:
        with self._lock:
            free = self._free.get(size)
            if free:
                return free.pop()
            self._allocated += 1
        return np.zeros(size, dtype=np.uint8)

    def _release(self, buf: np.ndarray) -> None:
        with self._lock:
            free = self._free.setdefault(buf.size, [])
            if len(free) < self._max_idle:
                free.append(buf)


# Process-wide pool shared by every engine that is not given its own.
_default_pool = BufferPool()


def default_pool() -> BufferPool:
    """Return the process-wide ``BufferPool``."""
    return _default_pool
