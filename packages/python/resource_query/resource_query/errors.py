"""Errors raised by the resource query engine.

Callers branch on the exception type, never on the message text.
"""


class ResourceQueryError(Exception):
    """Base class for query engine failures."""


class ClientInputError(ResourceQueryError):
    """Raised for malformed identifiers, missing fields or bad pagination input."""


class NotFoundError(ResourceQueryError):
    """Raised when a targeted id or key does not resolve to a record."""


class StoreUnavailableError(ResourceQueryError):
    """Raised when MongoDB cannot be reached or the operation timed out."""
