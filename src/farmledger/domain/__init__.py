"""Domain layer for farmledger application.

Services live in their own modules (farmledger.domain.expense, .user, .auth);
they are not re-exported here so that the database layer can import entities
without pulling the services in.
"""

from farmledger.domain.entities import (
    Expense,
    ExpenseCategory,
    FarmFinance,
    Role,
    User,
)

__all__ = [
    "Expense",
    "ExpenseCategory",
    "FarmFinance",
    "Role",
    "User",
]
