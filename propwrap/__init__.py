"""
PropWrap - Policy-Driven Value Wrappers

A small library for intercepting reads and writes of a stored value with
reusable access policies (range clamping, key-value-store backing) and
exposing derived projected values alongside.
"""

import logging

from .exceptions import (
    ExternalCollaboratorFailure,
    InvalidConfiguration,
    NoProjectionConfigured,
    PropWrapError,
)
from .kv_store import InMemoryKeyValueStore
from .policies import ClampingPolicy, ClampRange, ExternalStorePolicy, IdentityPolicy
from .projections import OverThresholdProjection, over_threshold, truncating_div
from .settings import FeatureSettings
from .settings_store import (
    _reset_settings_store,
    configure_settings_store,
    get_settings_store,
)
from .types import AccessPolicy, KeyValueStore
from .wrapper import ValueWrapper, WrapperBuilder, clamping, create, stored_setting

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core wrapper
    "ValueWrapper",
    "WrapperBuilder",
    "create",
    "clamping",
    "stored_setting",
    # Policies
    "AccessPolicy",
    "IdentityPolicy",
    "ClampRange",
    "ClampingPolicy",
    "ExternalStorePolicy",
    # Projections
    "OverThresholdProjection",
    "over_threshold",
    "truncating_div",
    # Stores
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "get_settings_store",
    "configure_settings_store",
    "FeatureSettings",
    # Exceptions
    "PropWrapError",
    "NoProjectionConfigured",
    "InvalidConfiguration",
    "ExternalCollaboratorFailure",
    # Testing utilities (internal use)
    "_reset_settings_store",
]
