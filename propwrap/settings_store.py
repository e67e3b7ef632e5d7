"""
Process-Wide Settings Store - singleton KeyValueStore for settings wrappers.

Store-backed wrappers created without an explicit store share one
process-wide KeyValueStore. Applications install their own store once at
startup with configure_settings_store(); otherwise an InMemoryKeyValueStore
is created on first use.

Implementation:
    - get_settings_store(): lazy singleton pattern
    - configure_settings_store(): one-time installation of a store
    - _reset_settings_store(): clears the singleton for tests

Thread Safety:
    Creation and installation are guarded by a module-level lock.
"""

import logging
import threading
from typing import Optional

from .exceptions import InvalidConfiguration
from .kv_store import InMemoryKeyValueStore
from .types import KeyValueStore

logger = logging.getLogger(__name__)

_settings_store: Optional[KeyValueStore] = None
_settings_store_lock = threading.Lock()


def get_settings_store() -> KeyValueStore:
    """
    Get or create the process-wide settings store.

    Lazy singleton pattern: creates an InMemoryKeyValueStore on first access
    when none was configured, and reuses it thereafter.
    """
    global _settings_store
    with _settings_store_lock:
        if _settings_store is None:
            _settings_store = InMemoryKeyValueStore()
            logger.debug("Created default in-memory settings store")
        return _settings_store


def configure_settings_store(store: KeyValueStore) -> KeyValueStore:
    """
    Install the process-wide settings store.

    Meant to be called once at process start. Installing the same store again
    is a no-op.

    Raises:
        InvalidConfiguration: If a different store is already installed, or
            ``store`` does not provide ``get`` and ``set``.
    """
    global _settings_store
    if not isinstance(store, KeyValueStore):
        raise InvalidConfiguration(f"{store!r} does not implement get(key) and set(key, value)")
    with _settings_store_lock:
        if _settings_store is not None and _settings_store is not store:
            raise InvalidConfiguration("Settings store is already configured")
        _settings_store = store
    logger.debug(f"Settings store configured: {store!r}")
    return store


def _reset_settings_store() -> None:
    """
    Reset the settings store for testing purposes.

    Clears singleton to enable fresh state in tests. Not for production use.
    """
    global _settings_store
    with _settings_store_lock:
        _settings_store = None
