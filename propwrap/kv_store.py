"""
In-Memory Key-Value Store
=========================

Reference implementation of the KeyValueStore capability used by
store-backed policies. It stands in for a real settings service in tests
and as the default process-wide settings store.

With ``max_entries`` set, entries live in a cachetools LRUCache and the
least recently used key is evicted once the limit is reached.
"""

import logging
import threading
from typing import Any, Dict, List, MutableMapping, Optional

from cachetools import LRUCache

from .exceptions import ExternalCollaboratorFailure, InvalidConfiguration

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore:
    """
    Thread-safe key-value store held in process memory.

    Features:
    - O(1) get, set, delete operations
    - Optional LRU bound on the number of entries
    - Absent keys read as ``None``
    - Every operation after ``close()`` raises ExternalCollaboratorFailure

    Usage:
        store = InMemoryKeyValueStore()
        store.set("FOO_FEATURE_ENABLED", True)
        store.get("FOO_FEATURE_ENABLED")   # True
        store.get("missing")               # None
        store.delete("FOO_FEATURE_ENABLED")
    """

    def __init__(self, max_entries: Optional[int] = None, initial: Optional[Dict[str, Any]] = None):
        """
        Initialize the store.

        Args:
            max_entries: Maximum number of entries before LRU eviction; None for unbounded
            initial: Optional entries to seed the store with
        """
        if max_entries is not None and max_entries <= 0:
            raise InvalidConfiguration(f"max_entries must be positive, got {max_entries}")

        self._data: MutableMapping[str, Any] = (
            LRUCache(maxsize=max_entries) if max_entries is not None else {}
        )
        self._max_entries = max_entries
        self._lock = threading.RLock()
        self._closed = False

        if initial:
            for key, value in initial.items():
                self.set(key, value)

    def _check_open(self) -> None:
        if self._closed:
            raise ExternalCollaboratorFailure("Key-value store is closed")

    def get(self, key: str) -> Optional[Any]:
        """
        Get value for key.

        Returns:
            The value associated with key, or None if not found
        """
        with self._lock:
            self._check_open()
            return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        """Set key to value."""
        with self._lock:
            self._check_open()
            self._data[key] = value

    def delete(self, key: str) -> bool:
        """
        Delete key from store.

        Returns:
            True if key was deleted, False if key didn't exist
        """
        with self._lock:
            self._check_open()
            if key not in self._data:
                return False
            del self._data[key]
            return True

    def keys(self) -> List[str]:
        with self._lock:
            self._check_open()
            return list(self._data.keys())

    def clear(self) -> None:
        with self._lock:
            self._check_open()
            self._data.clear()

    def close(self) -> None:
        """Release the entries; later operations fail."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._data.clear()
        logger.debug("In-memory key-value store closed")

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def max_entries(self) -> Optional[int]:
        return self._max_entries

    def __len__(self) -> int:
        with self._lock:
            self._check_open()
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            self._check_open()
            return key in self._data

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"{len(self._data)} entries"
        return f"InMemoryKeyValueStore({state})"
