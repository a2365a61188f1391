from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced student, meeting, request or event is absent."""


class MeetingClosedError(DomainError):
    """Raised when a meeting is not accepting attendance."""


class InvalidCodeError(DomainError):
    """Raised when an attendance code does not match the meeting's code."""


class AlreadySubmittedError(DomainError):
    """Raised on a second attendance submission for the same meeting."""


class AlreadyDecidedError(DomainError):
    """Raised when an hour request is no longer pending."""


class InvalidAmountError(DomainError):
    """Non-numeric or non-positive hours at approval time."""


class GatewayError(Exception):
    """A non-2xx response from the backend REST API."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, body: str = "", code: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.code = code


class NetworkError(GatewayError):
    """The backend could not be reached at all."""
