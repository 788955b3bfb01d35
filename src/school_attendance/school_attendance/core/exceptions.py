from __future__ import annotations

from typing import Mapping, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, *, fields: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.fields = dict(fields or {})


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
