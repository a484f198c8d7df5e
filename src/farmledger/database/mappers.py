"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so schema changes stay out of the
domain services.
"""

from decimal import Decimal

from farmledger.domain import entities as domain
from farmledger.database.models import (
    Expense as ORMExpense,
    User as ORMUser,
)


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        date=orm_expense.date,
        category=domain.ExpenseCategory(orm_expense.category),
        amount=Decimal(str(orm_expense.amount)),
        description=orm_expense.description,
        is_paid=bool(orm_expense.is_paid),
        due_date=orm_expense.due_date,
        details=dict(orm_expense.details or {}),
        created_at=orm_expense.created_at,
    )


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        name=orm_user.name,
        email=orm_user.email,
        farm_name=orm_user.farm_name or "",
        role=domain.Role(orm_user.role),
        permissions=frozenset(orm_user.permissions or ()),
    )
