"""
Feature settings backed by the settings store.

Each flag is a store-backed ValueWrapper held as a field of FeatureSettings;
the store, not the wrapper, is the source of truth.
"""

from typing import Optional

from .types import KeyValueStore
from .wrapper import ValueWrapper, stored_setting

FOO_FEATURE_ENABLED = "FOO_FEATURE_ENABLED"
BAR_FEATURE_ENABLED = "BAR_FEATURE_ENABLED"


class FeatureSettings:
    """
    Boolean feature flags persisted in a KeyValueStore.

    Both flags default to False when the store has no entry (or a non-bool
    entry) for their key. Without an explicit ``store`` the process-wide
    settings store is used.
    """

    def __init__(self, store: Optional[KeyValueStore] = None) -> None:
        self._foo: ValueWrapper = stored_setting(FOO_FEATURE_ENABLED, False, store=store, value_type=bool)
        self._bar: ValueWrapper = stored_setting(BAR_FEATURE_ENABLED, False, store=store, value_type=bool)

    @property
    def is_foo_feature_enabled(self) -> bool:
        return self._foo.value

    @is_foo_feature_enabled.setter
    def is_foo_feature_enabled(self, enabled: bool) -> None:
        self._foo.value = enabled

    @property
    def is_bar_feature_enabled(self) -> bool:
        return self._bar.value

    @is_bar_feature_enabled.setter
    def is_bar_feature_enabled(self, enabled: bool) -> None:
        self._bar.value = enabled

    def __repr__(self) -> str:
        return (
            f"FeatureSettings(foo={self.is_foo_feature_enabled}, "
            f"bar={self.is_bar_feature_enabled})"
        )
