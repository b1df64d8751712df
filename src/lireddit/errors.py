from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class ConflictError(UserError):
    """Raised when a write collides with a uniqueness constraint."""


class InfrastructureError(Exception):
    """Raised when a backing service (database, key/value store, mail transport) fails.

    Not a UserError: the message is logged but never shown to the caller.
    """
