"""Typed service errors shared by all apps.

Each error carries the HTTP status it maps to, so views and
``ServiceErrorMiddleware`` never have to translate them by hand.
"""

from typing import ClassVar


class ServiceError(Exception):
    """Base class for errors raised by the business logic layer."""

    status_code: ClassVar[int] = 500

    def __init__(self, message: str = 'Internal server error') -> None:
        """Initialize ServiceError.

        Args:
            message: Human readable message returned to the client.
        """
        self.message = message
        super().__init__(message)


class InvalidArgumentError(ServiceError):
    """Raised for malformed or out-of-range input."""

    status_code = 400


class UnauthenticatedError(ServiceError):
    """Raised for missing, invalid or expired credentials."""

    status_code = 401


class NotFoundError(ServiceError):
    """Raised when a resource is missing or not owned by the caller.

    Both cases share this error so callers cannot probe for existence.
    """

    status_code = 404


class ConflictError(ServiceError):
    """Raised when a write collides with an existing record or object."""

    status_code = 409
