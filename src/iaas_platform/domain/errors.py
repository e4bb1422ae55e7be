"""Error taxonomy for the provisioning core.

Every failure surfaced by the application layer is one of the four
kinds below. Messages are safe to show to API clients: they never
contain storage locations or other internal details.
"""

from __future__ import annotations


class IaaSError(Exception):
    """Base class for all expected, caller-recoverable failures."""


class ValidationError(IaaSError):
    """Raised when input is malformed (empty name, non-positive size)."""


class NotFoundError(IaaSError):
    """Raised when a referenced server does not exist."""


class ConflictError(IaaSError):
    """Raised when an operation is not permitted in the current state."""


class PersistenceError(IaaSError):
    """Raised when the store is unreadable, corrupt or unwritable."""
