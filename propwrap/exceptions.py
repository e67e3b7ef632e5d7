"""
PropWrap Exceptions
===================

Error types raised by value wrappers, policies and key-value stores.
"""


class PropWrapError(Exception):
    """Base class for all propwrap errors."""

    pass


class NoProjectionConfigured(PropWrapError):
    """Raised when a projected value is requested from a wrapper without a projection."""

    pass


class InvalidConfiguration(PropWrapError):
    """Raised when a wrapper, policy or store is configured inconsistently."""

    pass


class ExternalCollaboratorFailure(PropWrapError):
    """
    Raised by external collaborators such as key-value stores.

    ValueWrapper never raises this itself and never wraps other exceptions in it;
    whatever a collaborator raises reaches the caller unchanged.
    """

    pass
