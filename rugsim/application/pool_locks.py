from __future__ import annotations

from threading import Lock


class PoolLocks:
    """One lock per pool id; mutations of a single pool never interleave."""

    def __init__(self):
        self._guard = Lock()
        self._locks: dict[str, Lock] = {}

    def for_pool(self, pool_id: str) -> Lock:
        with self._guard:
            lock = self._locks.get(pool_id)
            if lock is None:
                lock = Lock()
                self._locks[pool_id] = lock
            return lock
