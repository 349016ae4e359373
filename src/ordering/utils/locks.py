"""Per-key mutual exclusion for in-process shared state."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLock:
    """A registry of locks, one per key.

    Holding the lock for one key never blocks callers working on a
    different key. A key's lock exists only while some caller holds or
    waits for it, so the registry stays as small as the set of keys in
    use.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        # key -> [lock, number of callers holding or waiting]
        self._locks: dict[str, list] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def _acquire_entry(self, key: str) -> threading.Lock:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1
            return entry[0]

    def _release_entry(self, key: str) -> None:
        with self._guard:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, key) -> Iterator[None]:
        key = str(key)
        lock = self._acquire_entry(key)
        try:
            with lock:
                yield
        finally:
            self._release_entry(key)
