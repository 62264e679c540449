"""
Runtime cache - process-wide, compute-once memoization.

The first caller for a key runs the computation; concurrent callers for
the same key wait on that key's lock and then reuse the stored value.
Values are only published once fully computed, so nobody observes a
half-built result. There is no invalidation: a restart resets it.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RuntimeCache:
    """Single-flight memoization table."""

    def __init__(self) -> None:
        self._values: dict[Hashable, Any] = {}
        self._locks: dict[Hashable, threading.Lock] = {}
        self._table_lock = threading.Lock()

    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        """
        Return the cached value for `key`, computing it at most once.

        Args:
            key: Cache key
            compute: Zero-argument callable producing the value

        Returns:
            The stored value

        A compute that raises stores nothing; the error propagates and a
        later call tries again.
        """
        if key in self._values:
            return self._values[key]

        with self._table_lock:
            key_lock = self._locks.setdefault(key, threading.Lock())

        with key_lock:
            if key in self._values:
                return self._values[key]
            logger.debug(f"Computing cache entry {key!r}")
            value = compute()
            self._values[key] = value
            return value

    def __contains__(self, key: Hashable) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)
