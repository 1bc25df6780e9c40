"""Domain error kinds raised by stores and services.

Routers do not translate these; ``register_error_handlers`` maps each kind
to its HTTP status.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """Caller input failed a precondition. Raised before any store write."""


class NotFoundError(LookupError):
    """A referenced league does not exist."""


class StoreUnavailableError(RuntimeError):
    """The backing store failed for infrastructure reasons."""
