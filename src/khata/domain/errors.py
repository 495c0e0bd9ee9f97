"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class NoActiveProfileError(DomainError):
    """A profile-scoped write was attempted with no profile selected."""

    def __init__(self, message: str = "No active profile found. Please create a profile first."):
        super().__init__(message)


def customer_not_found(customer_id: str) -> str:
    """Return message for missing customer."""
    return f"Customer {customer_id} not found"


def profile_not_found(profile_id: str) -> str:
    """Return message for missing profile."""
    return f"Profile {profile_id} not found"


def amount_not_positive(amount) -> str:
    """Return message for a zero or negative entry amount."""
    return f"Amount must be greater than zero, got {amount}"
