from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator


class KeyedLock:
    """One mutex per key, created on demand and dropped when unused.

    Holders of different keys never block each other.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, threading.Lock] = {}
        self._waiters: Dict[Hashable, int] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            self._waiters[key] = self._waiters.get(key, 0) + 1

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                self._waiters[key] -= 1
                if self._waiters[key] == 0:
                    del self._waiters[key]
                    del self._locks[key]

    def active_keys(self) -> int:
        with self._guard:
            return len(self._locks)
