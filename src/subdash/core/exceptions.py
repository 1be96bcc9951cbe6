"""Custom exceptions for SubDash."""

from __future__ import annotations


class SubDashError(Exception):
    """Base exception for all SubDash errors."""


class ConfigError(SubDashError):
    """Configuration error."""


class ValidationError(SubDashError):
    """Subscription input failed validation."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        detail = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(f"Invalid subscription: {detail}" if detail else "Invalid subscription")


class NotFoundError(SubDashError):
    """Entity not found."""


class APIError(SubDashError):
    """Remote API request failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthError(APIError):
    """Not signed in, or the session token was rejected."""
