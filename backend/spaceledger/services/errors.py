"""
Error kinds raised by the booking and lifecycle services.

Each kind is a recoverable signal for the caller; the request boundary
maps them to HTTP status codes.
"""


class LedgerError(Exception):
    """Base class for all service-level errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(LedgerError):
    """A referenced entity does not exist."""


class DuplicateKey(LedgerError):
    """A uniqueness invariant would be violated."""


class Conflict(LedgerError):
    """Entities are valid but the operation's precondition does not hold."""


class InvalidArgument(LedgerError):
    """Malformed input."""


class InvalidTransition(LedgerError):
    """Illegal lifecycle move."""


class Unauthenticated(LedgerError):
    """Credentials did not resolve to a known user."""
