"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class SchedulerError(Exception):
    """Base exception for autoschedule."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(SchedulerError):
    """Resource not found or not owned by the requesting user."""

    pass


class ValidationError(SchedulerError):
    """Validation error."""

    pass


class AuthenticationError(SchedulerError):
    """Authentication failed."""

    pass


class InfrastructureError(SchedulerError):
    """Infrastructure-related error (DB, external services, etc.)."""

    pass
