from __future__ import annotations

from typing import Mapping, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``errors`` maps a form field to its message, one message per offending field.
    """

    def __init__(self, message: str = "Invalid input", errors: Optional[Mapping[str, str]] = None):
        self.errors: dict[str, str] = dict(errors or {})
        if self.errors and message == "Invalid input":
            message = "; ".join(self.errors.values())
        super().__init__(message)


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class ConflictError(DomainError):
    """Raised when a unique key is already taken."""


class IntegrationError(DomainError):
    """Raised when an external integration is required but not available."""
