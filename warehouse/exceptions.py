"""Custom exception hierarchy for the warehouse dashboard."""

from __future__ import annotations


class WarehouseError(Exception):
    """Base exception for all warehouse errors."""


class ValidationError(WarehouseError):
    """Raised when user input fails validation.

    Errors are keyed by form field so the caller can highlight the
    offending control. ``general`` is used for errors not tied to a field.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.errors: dict[str, list[str]] = {field: [message]}

    @classmethod
    def from_errors(cls, errors: dict[str, list[str]]) -> "ValidationError":
        """Build an error carrying messages for several fields."""
        field, messages = next(iter(errors.items()))
        err = cls(field, messages[0])
        err.errors = {key: list(value) for key, value in errors.items()}
        return err


class NotFoundError(WarehouseError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(NotFoundError):
    """Raised when a foreign key reference is violated."""


class InvalidEntityStateError(WarehouseError):
    """Raised when an entity is in an invalid state for the operation."""


class BackendUnavailableError(WarehouseError):
    """Raised when the backend times out, refuses connections or returns 5xx."""


class ApiError(WarehouseError):
    """Raised for any other non-successful backend response."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(WarehouseError):
    """Raised when configuration is invalid or missing."""
