"""
PropWrap Policies - Accessor Transforms
=======================================

Access policies decide what a ValueWrapper returns on read and what it stores
on write. A policy is fixed when the wrapper is constructed; only the stored
value changes afterwards.

Built-in policies:

- **IdentityPolicy**: reads and writes pass through unchanged (the default).
- **ClampingPolicy**: clamps on read, stores the raw value on write. The stored
  value may therefore sit outside the range while every read is inside it.
- **ExternalStorePolicy**: delegates to a KeyValueStore and ignores the
  wrapper's own slot except as a record of the last write.

Example:
    ```python
    from propwrap import ClampRange, ClampingPolicy, ValueWrapper

    score = ValueWrapper(0, ClampingPolicy(ClampRange(0, 100)))
    score.set(120)
    score.get()       # 100
    score.raw_value   # 120
    ```
"""

import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, Type

from .exceptions import InvalidConfiguration
from .types import KeyValueStore, T

logger = logging.getLogger(__name__)


class IdentityPolicy(Generic[T]):
    """Policy that returns stored values unchanged and stores writes as given."""

    def read(self, stored: T) -> T:
        return stored

    def write(self, new_value: T, stored: T) -> T:
        return new_value

    def __repr__(self) -> str:
        return "IdentityPolicy()"


@dataclass(frozen=True)
class ClampRange:
    """
    Closed interval ``[lower, upper]`` used by clamping policies and projections.

    Raises:
        InvalidConfiguration: If ``lower`` is greater than ``upper``.
    """

    lower: Any
    upper: Any

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise InvalidConfiguration(
                f"Invalid range: lower bound {self.lower!r} exceeds upper bound {self.upper!r}"
            )

    def clamp(self, value: Any) -> Any:
        return min(max(self.lower, value), self.upper)

    def __contains__(self, value: Any) -> bool:
        return self.lower <= value <= self.upper

    def __str__(self) -> str:
        return f"[{self.lower}, {self.upper}]"


class ClampingPolicy(Generic[T]):
    """
    Read-time clamp.

    ``read`` returns ``min(max(lower, stored), upper)``; ``write`` stores the
    incoming value untouched. Projections that inspect the raw stored value
    depend on writes not being clamped.
    """

    def __init__(self, range: ClampRange) -> None:
        self._range = range

    @property
    def range(self) -> ClampRange:
        return self._range

    def read(self, stored: T) -> T:
        return self._range.clamp(stored)

    def write(self, new_value: T, stored: T) -> T:
        return new_value

    def __repr__(self) -> str:
        return f"ClampingPolicy(range={self._range})"


class ExternalStorePolicy(Generic[T]):
    """
    Policy backed by an external KeyValueStore.

    Reads come from ``store.get(key)``; an absent entry (``None``) yields the
    configured default. When ``value_type`` is given, entries of any other type
    also yield the default. Writes go to ``store.set(key, value)`` and the
    written value is returned so the wrapper's own slot mirrors the last write.

    Exceptions raised by the store propagate unchanged.

    Args:
        store: The collaborator holding the real state.
        key: Key the value lives under.
        default: Value returned when the store has no usable entry.
        value_type: Optional type the stored entry must be an instance of.

    Example:
        ```python
        store = InMemoryKeyValueStore()
        flag = ValueWrapper(False, ExternalStorePolicy(store, "FOO_FEATURE_ENABLED", False))
        flag.get()          # False, store is empty
        flag.set(True)
        store.get("FOO_FEATURE_ENABLED")  # True
        ```
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        default: T,
        *,
        value_type: Optional[Type[Any]] = None,
    ) -> None:
        if not key:
            raise InvalidConfiguration("Store-backed policy requires a non-empty key")
        self._store = store
        self._key = key
        self._default = default
        self._value_type = value_type

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @property
    def key(self) -> str:
        return self._key

    @property
    def default(self) -> T:
        return self._default

    def read(self, stored: T) -> T:
        try:
            value = self._store.get(self._key)
        except Exception as e:
            logger.debug(f"Store read failed for '{self._key}': {e}")
            raise
        if value is None:
            logger.debug(f"No entry for '{self._key}', using default {self._default!r}")
            return self._default
        if self._value_type is not None and not isinstance(value, self._value_type):
            logger.debug(
                f"Entry for '{self._key}' is {type(value).__name__}, "
                f"expected {self._value_type.__name__}; using default"
            )
            return self._default
        return value

    def write(self, new_value: T, stored: T) -> T:
        try:
            self._store.set(self._key, new_value)
        except Exception as e:
            logger.debug(f"Store write failed for '{self._key}': {e}")
            raise
        return new_value

    def __repr__(self) -> str:
        return f"ExternalStorePolicy(key={self._key!r}, default={self._default!r})"
