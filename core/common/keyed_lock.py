"""
core/common/keyed_lock.py
=========================

Registry of per-key locks, e.g. one lock per document id so that a single
document is never mutated by two operations at once while different
documents proceed in parallel.

Entries live only while someone holds or waits for the key; the last
holder removes it again.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator, List


class KeyedLock:
    """Thread-safe map ``key -> [threading.Lock, users]``."""

    def __init__(self) -> None:
        self._registry_lock = threading.Lock()
        self._locks: Dict[Hashable, List] = {}

    def _acquire_entry(self, key: Hashable) -> threading.Lock:
        with self._registry_lock:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1
            return entry[0]

    def _release_entry(self, key: Hashable) -> None:
        with self._registry_lock:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        """Hold the lock for *key* for the duration of the ``with`` block."""
        lock = self._acquire_entry(key)
        try:
            with lock:
                yield
        finally:
            self._release_entry(key)

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._locks)
