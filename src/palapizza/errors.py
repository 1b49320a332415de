from abc import ABC
from typing import Any


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when the caller is not an authenticated staff member."""

    def __init__(self, message: str = "Non autorizzato") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class ConfigurationError(UserError):
    """Raised when a required setting is missing on the server.

    Kept apart from AuthenticationError: a missing password is a 500, a wrong one is a 401.
    """


class UpstreamError(UserError):
    """Raised when the order store or the chat provider fails or answers garbage."""

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.details = details
