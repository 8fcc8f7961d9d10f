"""Errors raised at the storefront's boundaries.

Field-level input problems use ``protean.exceptions.ValidationError``; the
classes below cover access control and the remote persistence boundary.
"""


class AuthorizationError(Exception):
    """The acting user lacks the capability required for an operation."""

    def __init__(self, reason: str, capability: str | None = None):
        super().__init__(reason)
        self.reason = reason
        self.capability = capability


class PersistenceError(Exception):
    """A create, update or list call against the order records failed."""

    def __init__(self, operation: str, detail: str | None = None):
        message = f"{operation} failed" if not detail else f"{operation} failed: {detail}"
        super().__init__(message)
        self.operation = operation
        self.detail = detail
