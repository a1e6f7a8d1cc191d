"""Per-item locks so one item's remote call and local write are not interleaved."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ItemLocks:
    """
    Registry of process-local locks keyed by remote item ID.

    Locks are created on first use and kept for the life of the process;
    the key space is the menu, so it stays small.
    """

    def __init__(self) -> None:
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def get(self, key: str) -> threading.Lock:
        with self._registry_lock:
            if key not in self._locks:
                self._locks[key] = threading.Lock()
            return self._locks[key]

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        """Hold the lock for ``key`` for the duration of the block."""
        with self.get(key):
            yield

    def __len__(self) -> int:
        return len(self._locks)
