"""
Domain-specific exception hierarchy for the scheduling broker.
"""

from __future__ import annotations


class SchedulingError(Exception):
    """Base class for all application-level errors."""


class InputValidationError(SchedulingError):
    """Raised when a request is missing or carries a malformed parameter."""


class ConfigurationError(SchedulingError):
    """Raised when required configuration (e.g. provider credentials) is absent."""


class ProviderQueryError(SchedulingError):
    """
    Raised when the calendar provider call fails or returns an error status.

    ``status_code`` is ``None`` when the request never produced a response
    (connection error, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None, detail: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is not None:
            base = f"{base} (HTTP {self.status_code})"
        if self.detail:
            base = f"{base}: {self.detail}"
        return base
