"""
Shared pytest fixtures and configuration for propwrap tests.
"""

import pytest

from propwrap import InMemoryKeyValueStore
from propwrap.settings_store import _reset_settings_store


@pytest.fixture(autouse=True)
def reset_settings_store():
    """Reset the process-wide settings store before each test to prevent state leakage."""
    _reset_settings_store()
    yield
    _reset_settings_store()


@pytest.fixture
def kv_store():
    """Provide a fresh InMemoryKeyValueStore for tests that need it."""
    store = InMemoryKeyValueStore()
    yield store
    store.close()
