"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested expense or user does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as a duplicate user email."""


class InvalidCredentialsError(DomainError):
    """Login rejected."""


class PermissionDeniedError(DomainError):
    """Current session lacks the capability required for an operation."""


def expense_not_found(expense_id: int) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def duplicate_user_email(email: str) -> str:
    """Return message for an email that is already registered."""
    return f"User with email '{email}' already exists"


def invalid_credentials() -> str:
    """Return message for a failed login."""
    return "Invalid credentials"


def not_logged_in() -> str:
    """Return message when no session is active."""
    return "Not logged in. Run 'farmledger login' first."


def permission_denied(permission: str) -> str:
    """Return message when the current user lacks a permission."""
    return f"You don't have the '{permission}' permission required for this command"
