"""
Application error types.

Each error carries the HTTP status it maps to; the Flask app turns any
JoblyError into a ``{"detail": message}`` response with that status.
"""
from __future__ import annotations


class JoblyError(Exception):
    """Base class for errors raised by the service and SQL layers."""

    status_code = 500

    def __init__(self, message: str | None = None):
        self.message = message or self.__class__.__doc__ or "Error"
        super().__init__(self.message)


class ValidationError(JoblyError):
    """Bad request."""

    status_code = 400


class DuplicateError(ValidationError):
    """Record already exists."""


class NotFoundError(JoblyError):
    """Not found."""

    status_code = 404


class UnauthorizedError(JoblyError):
    """Unauthorized."""

    status_code = 401
