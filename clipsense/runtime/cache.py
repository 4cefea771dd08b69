# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
Bounded LRU cache for extraction results.

Read-through: get_or_compute() runs the computation on a miss and stores
the result. Concurrent misses for the same key share one computation;
the other callers wait for its result instead of recomputing.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from concurrent.futures import Future
from typing import Callable, Generic, Hashable, Optional, TypeVar

LOGGER = logging.getLogger(__name__)

V = TypeVar("V")

DEFAULT_CAPACITY = 100


class ResultCache(Generic[V]):
    """
    Thread-safe LRU map with per-key in-flight coalescing.

    Args:
        capacity: Maximum number of stored entries. The least recently
            used entry is evicted once the bound is exceeded.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError(f"Capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._entries: OrderedDict[Hashable, V] = OrderedDict()
        self._in_flight: dict[Hashable, Future] = {}
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, key: Hashable) -> Optional[V]:
        """Stored value for key (marking it most recently used), or None."""
        with self._lock:
            if key not in self._entries:
                return None
            self._entries.move_to_end(key)
            return self._entries[key]

    def put(self, key: Hashable, value: V) -> None:
        """Store a value, evicting the least recently used entry if full."""
        with self._lock:
            self._store(key, value)

    def get_or_compute(self, key: Hashable, compute: Callable[[], V]) -> V:
        """
        Return the cached value for key, computing it on a miss.

        If another thread is already computing the same key, wait for
        and return its result. A failing computation is not cached; its
        exception propagates to the caller and to every waiter.
        """
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                LOGGER.debug("Cache hit for %r", key)
                return self._entries[key]

            pending = self._in_flight.get(key)
            owner = pending is None
            if owner:
                pending = Future()
                self._in_flight[key] = pending

        if not owner:
            LOGGER.debug("Waiting on in-flight computation for %r", key)
            return pending.result()

        LOGGER.debug("Cache miss for %r", key)
        try:
            value = compute()
        except BaseException as exc:
            with self._lock:
                del self._in_flight[key]
            pending.set_exception(exc)
            raise

        with self._lock:
            self._store(key, value)
            del self._in_flight[key]
        pending.set_result(value)
        return value

    def clear(self) -> None:
        """Drop every stored entry. In-flight computations still complete."""
        with self._lock:
            self._entries.clear()

    def _store(self, key: Hashable, value: V) -> None:
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self._capacity:
            evicted, _ = self._entries.popitem(last=False)
            LOGGER.debug("Evicted %r", evicted)
