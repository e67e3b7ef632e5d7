"""
PropWrap ValueWrapper - Accessor-Mediated Value Container
=========================================================

ValueWrapper owns a single stored value and routes every read and write
through an access policy. It can also expose a projected value, a read-only
value derived from the raw stored state on each access.

Owners hold wrappers as plain instance fields and expose them through
ordinary properties:

```python
from propwrap import clamping

class Scores:
    def __init__(self):
        self._math = clamping(80, 0, 150, projected=True)
        self._history = clamping(80, 0, 100, projected=True)

    @property
    def math_score(self):
        return self._math.value

    @math_score.setter
    def math_score(self, value):
        self._math.value = value

scores = Scores()
scores.math_score                # 80
scores._math.projected_value     # False, threshold is 90
scores._history.projected_value  # True, threshold is 60
```

Wrappers are built directly, through ``create()`` (which validates that the
policy and projection agree), through ``WrapperBuilder``, or with the
``clamping()`` and ``stored_setting()`` factories.

Thread Safety:
    Each wrapper holds an RLock around policy and projection calls. The
    ``on_change`` callback runs after the lock is released.
"""

import logging
import threading
from typing import Any, Generic, Optional

from .exceptions import InvalidConfiguration, NoProjectionConfigured
from .policies import ClampingPolicy, ClampRange, ExternalStorePolicy, IdentityPolicy
from .projections import over_threshold
from .types import AccessPolicy, ChangeCallback, KeyValueStore, P, ProjectionFunction, T

logger = logging.getLogger(__name__)


class ValueWrapper(Generic[T, P]):
    """
    Generic container that mediates all access to a stored value.

    Args:
        initial: Initial stored value. It is stored as given; policies that
            constrain reads apply on the first read, not here.
        policy: Access policy; defaults to IdentityPolicy.
        projection: Optional pure function of the stored value.
        on_change: Optional callback receiving ``(old_stored, new_stored)``
            after a write that changed the stored value.
        name: Optional label used in logs and ``repr``.
    """

    def __init__(
        self,
        initial: T,
        policy: Optional[AccessPolicy[T]] = None,
        projection: Optional[ProjectionFunction] = None,
        *,
        on_change: Optional[ChangeCallback] = None,
        name: Optional[str] = None,
    ) -> None:
        self._stored_value = initial
        self._policy: AccessPolicy[T] = policy if policy is not None else IdentityPolicy()
        self._projection = projection
        self._on_change = on_change
        self._name = name
        self._lock = threading.RLock()

    # ------------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------------

    def get(self) -> T:
        """Return the stored value as seen through the policy."""
        with self._lock:
            return self._policy.read(self._stored_value)

    def set(self, new_value: T) -> None:
        """
        Pass ``new_value`` through the policy and store the result.

        Exceptions raised by the policy (including store failures) propagate
        and leave the stored value unchanged.
        """
        with self._lock:
            old_value = self._stored_value
            self._stored_value = self._policy.write(new_value, old_value)
            stored = self._stored_value
        logger.debug(f"{self._label()} set: {old_value!r} -> {stored!r}")

        if self._on_change is not None and old_value != stored:
            self._on_change(old_value, stored)

    def get_projected(self) -> P:
        """
        Compute the projected value from the raw stored value.

        Raises:
            NoProjectionConfigured: If the wrapper was built without a projection.
        """
        if self._projection is None:
            raise NoProjectionConfigured(f"{self._label()} has no projection configured")
        with self._lock:
            return self._projection(self._stored_value)

    @property
    def value(self) -> T:
        return self.get()

    @value.setter
    def value(self, new_value: T) -> None:
        self.set(new_value)

    @property
    def projected_value(self) -> P:
        return self.get_projected()

    # ------------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------------

    @property
    def raw_value(self) -> T:
        """The stored value without the policy applied."""
        with self._lock:
            return self._stored_value

    @property
    def policy(self) -> AccessPolicy[T]:
        return self._policy

    @property
    def projection(self) -> Optional[ProjectionFunction]:
        return self._projection

    @property
    def has_projection(self) -> bool:
        return self._projection is not None

    @property
    def name(self) -> Optional[str]:
        return self._name

    def _label(self) -> str:
        return f"ValueWrapper({self._name})" if self._name else "ValueWrapper"

    def __repr__(self) -> str:
        name = f"name={self._name!r}, " if self._name else ""
        return f"ValueWrapper({name}raw={self._stored_value!r}, policy={self._policy!r})"


# ============================================================================
# CONSTRUCTION HELPERS
# ============================================================================


def _check_consistency(policy: Optional[AccessPolicy[Any]], projection: Optional[ProjectionFunction]) -> None:
    policy_range = getattr(policy, "range", None)
    projection_range = getattr(projection, "range", None)
    if policy_range is not None and projection_range is not None and policy_range != projection_range:
        raise InvalidConfiguration(
            f"Projection range {projection_range} does not match policy range {policy_range}"
        )


def create(
    initial: T,
    policy: Optional[AccessPolicy[T]] = None,
    projection: Optional[ProjectionFunction] = None,
    *,
    on_change: Optional[ChangeCallback] = None,
    name: Optional[str] = None,
) -> ValueWrapper:
    """
    Create a ValueWrapper after checking that policy and projection agree.

    Raises:
        InvalidConfiguration: If the policy and projection both declare a
            ``range`` and the ranges differ.
    """
    _check_consistency(policy, projection)
    return ValueWrapper(initial, policy, projection, on_change=on_change, name=name)


_UNSET = object()


class WrapperBuilder:
    """
    Fluent builder for ValueWrapper instances.

    Example:
        ```python
        score = (
            WrapperBuilder()
            .initial(80)
            .clamped(0, 150)
            .over_threshold()
            .named("math_score")
            .build()
        )
        score.get_projected()  # False
        ```
    """

    def __init__(self) -> None:
        self._initial: Any = _UNSET
        self._policy: Optional[AccessPolicy[Any]] = None
        self._range: Optional[ClampRange] = None
        self._projection: Optional[ProjectionFunction] = None
        self._on_change: Optional[ChangeCallback] = None
        self._name: Optional[str] = None

    def initial(self, value: Any) -> "WrapperBuilder":
        self._initial = value
        return self

    def policy(self, policy: AccessPolicy[Any]) -> "WrapperBuilder":
        self._policy = policy
        self._range = getattr(policy, "range", None)
        return self

    def clamped(self, lower: Any, upper: Any) -> "WrapperBuilder":
        return self.policy(ClampingPolicy(ClampRange(lower, upper)))

    def backed_by(self, store: KeyValueStore, key: str, default: Any) -> "WrapperBuilder":
        return self.policy(ExternalStorePolicy(store, key, default))

    def projection(self, projection: ProjectionFunction) -> "WrapperBuilder":
        self._projection = projection
        return self

    def over_threshold(self) -> "WrapperBuilder":
        if self._range is None:
            raise InvalidConfiguration("over_threshold() requires a clamped range")
        return self.projection(over_threshold(self._range))

    def on_change(self, callback: ChangeCallback) -> "WrapperBuilder":
        self._on_change = callback
        return self

    def named(self, name: str) -> "WrapperBuilder":
        self._name = name
        return self

    def build(self) -> ValueWrapper:
        initial = self._initial
        if initial is _UNSET:
            # Store-backed wrappers start from the policy default.
            initial = getattr(self._policy, "default", None)
        return create(
            initial,
            self._policy,
            self._projection,
            on_change=self._on_change,
            name=self._name,
        )


# ============================================================================
# FACTORIES
# ============================================================================


def clamping(initial: Any, lower: Any, upper: Any, *, projected: bool = False, name: Optional[str] = None) -> ValueWrapper:
    """
    Create a read-time clamping wrapper over ``[lower, upper]``.

    With ``projected=True`` the wrapper also exposes the over-threshold flag.
    """
    builder = WrapperBuilder().initial(initial).clamped(lower, upper)
    if projected:
        builder.over_threshold()
    if name:
        builder.named(name)
    return builder.build()


def stored_setting(
    key: str,
    default: Any,
    *,
    store: Optional[KeyValueStore] = None,
    value_type: Optional[type] = None,
) -> ValueWrapper:
    """
    Create a wrapper whose value lives in a key-value store.

    When ``store`` is omitted the process-wide settings store is used.
    """
    if store is None:
        from .settings_store import get_settings_store

        store = get_settings_store()
    policy = ExternalStorePolicy(store, key, default, value_type=value_type)
    return ValueWrapper(default, policy, name=key)
