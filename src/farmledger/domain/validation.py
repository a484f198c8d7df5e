"""Input validation applied by callers before data reaches a store.

The stores accept whatever they are given, so every entry point that builds
expenses or users from user input runs these checks first.
"""

import re
from decimal import Decimal
from typing import Iterable, Optional

from farmledger.domain.entities import PERMISSIONS, ExpenseCategory, Role
from farmledger.domain.errors import ValidationError

MIN_DESCRIPTION_LENGTH = 2
MIN_PASSWORD_LENGTH = 6

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def parse_category(category: str | ExpenseCategory) -> ExpenseCategory:
    """Resolve a category name to ExpenseCategory.

    Raises:
        ValidationError: If the name is not one of the fixed categories
    """
    if isinstance(category, ExpenseCategory):
        return category
    try:
        return ExpenseCategory(category.strip().lower())
    except ValueError:
        choices = ", ".join(c.value for c in ExpenseCategory)
        raise ValidationError(f"Unknown category '{category}'. Choose one of: {choices}")


def parse_role(role: str | Role) -> Role:
    """Resolve a role name to Role."""
    if isinstance(role, Role):
        return role
    try:
        return Role(role.strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown role '{role}'. Choose one of: admin, user")


def validate_amount(amount: Decimal) -> None:
    if amount <= 0:
        raise ValidationError("Amount must be positive")


def validate_description(description: str) -> None:
    if description is None or len(description.strip()) < MIN_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters"
        )


def validate_expense_input(
    amount: Optional[Decimal] = None,
    description: Optional[str] = None,
    category: Optional[str | ExpenseCategory] = None,
    partial: bool = False,
) -> None:
    """Validate expense form fields.

    Args:
        amount: Expense amount
        description: Expense description
        category: Category name or enum member
        partial: If True, fields left as None are skipped (update forms)

    Raises:
        ValidationError: On the first field that fails
    """
    if not partial:
        missing = [
            name
            for name, value in (
                ("amount", amount),
                ("description", description),
                ("category", category),
            )
            if value is None
        ]
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

    if amount is not None:
        validate_amount(amount)
    if description is not None:
        validate_description(description)
    if category is not None:
        parse_category(category)


def validate_email(email: str) -> None:
    if not email or not _EMAIL_PATTERN.match(email.strip()):
        raise ValidationError(f"Invalid email address '{email}'")


def validate_password(password: str) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )


def validate_permissions(permissions: Iterable[str]) -> frozenset[str]:
    """Check every permission is known and return them as a frozenset."""
    result = frozenset(p.strip().lower() for p in permissions)
    unknown = sorted(result - set(PERMISSIONS))
    if unknown:
        raise ValidationError(
            f"Unknown permission(s): {', '.join(unknown)}. "
            f"Choose from: {', '.join(PERMISSIONS)}"
        )
    return result


def validate_user_input(
    name: Optional[str] = None,
    email: Optional[str] = None,
    password: Optional[str] = None,
    role: Optional[str | Role] = None,
    permissions: Optional[Iterable[str]] = None,
    partial: bool = False,
) -> None:
    """Validate the user administration form.

    On create (partial=False) name, email and password are required. The
    password is only checked, never stored.

    Raises:
        ValidationError: On the first field that fails
    """
    if not partial:
        if not name or not email or not password:
            raise ValidationError("Please fill in all required fields: name, email, password")

    if name is not None and not name.strip():
        raise ValidationError("Name cannot be empty")
    if email is not None:
        validate_email(email)
    if password is not None:
        validate_password(password)
    if role is not None:
        parse_role(role)
    if permissions is not None:
        validate_permissions(permissions)
