"""
PropWrap Common Types - Shared Type Definitions
===============================================

Type variables and structural protocols shared by wrappers, policies and stores.
Keeping them in one module avoids circular imports between the policy and
wrapper modules.
"""

from typing import Any, Callable, Optional, Protocol, TypeVar, runtime_checkable

# ============================================================================
# TYPE VARIABLES
# ============================================================================

T = TypeVar("T")
P = TypeVar("P")

# ============================================================================
# CAPABILITIES
# ============================================================================


@runtime_checkable
class AccessPolicy(Protocol[T]):
    """
    Read/write transforms applied around every access to a stored value.

    ``read`` receives the stored value and returns what callers see.
    ``write`` receives the incoming value and the current stored value and
    returns the value that replaces the stored one.
    """

    def read(self, stored: T) -> T: ...

    def write(self, new_value: T, stored: T) -> T: ...


@runtime_checkable
class KeyValueStore(Protocol):
    """
    External key-value collaborator used by store-backed policies.

    ``get`` returns ``None`` when the key is absent. Implementations may raise
    ExternalCollaboratorFailure (or anything else); callers propagate it.
    """

    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...


# ============================================================================
# FUNCTION TYPES
# ============================================================================

ProjectionFunction = Callable[[Any], Any]
ChangeCallback = Callable[[Any, Any], None]
