"""In-memory implementation of the Database interface.

State lives in plain dicts owned by the instance. Initial expenses, users and
the total investment are passed to the constructor, which makes this backend
handy for embedding, demos and tests.
"""

from dataclasses import replace
from datetime import datetime, date, UTC
from decimal import Decimal
from typing import Any, Iterable, Optional

from farmledger.database.base import Database
from farmledger.domain.entities import Expense, ExpenseCategory, Role, User
from farmledger.domain.errors import (
    ConflictError,
    NotFoundError,
    duplicate_user_email,
    expense_not_found,
    user_not_found,
)
from farmledger.domain.summary import sort_expenses, total_amount


def _copy(expense: Expense) -> Expense:
    """Copy of a stored expense with its own details dict."""
    return replace(expense, details=dict(expense.details))


class InMemoryDatabase(Database):
    """Dict-backed implementation of Database interface."""

    def __init__(
        self,
        expenses: Iterable[Expense] = (),
        users: Iterable[User] = (),
        total_investment: Decimal = Decimal("0"),
    ):
        """Initialize the store with its starting state.

        Args:
            expenses: Initial expenses; their IDs are kept
            users: Initial users; their IDs are kept
            total_investment: Initial total investment
        """
        self._expenses: dict[int, Expense] = {}
        self._users: dict[int, User] = {}
        self._total_investment = Decimal(total_investment)

        for expense in expenses:
            self._expenses[expense.id] = _copy(expense)
        for user in users:
            if self.get_user_by_email(user.email) is not None:
                raise ConflictError(duplicate_user_email(user.email))
            self._users[user.id] = user

        self._next_expense_id = max(self._expenses, default=0) + 1
        self._next_user_id = max(self._users, default=0) + 1

    def connect(self) -> None:
        """Nothing to connect to."""
        pass

    def disconnect(self) -> None:
        """Nothing to release; state stays with the instance."""
        pass

    def initialize_schema(self) -> None:
        """No schema for dicts."""
        pass

    # Expense operations
    def create_expense(
        self,
        date: date,
        category: ExpenseCategory,
        amount: Decimal,
        description: str,
        is_paid: bool = True,
        due_date: Optional[date] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> int:
        """Create an expense. Returns expense ID."""
        expense_id = self._next_expense_id
        self._next_expense_id += 1
        self._expenses[expense_id] = Expense(
            id=expense_id,
            date=date,
            category=ExpenseCategory(category),
            amount=Decimal(amount),
            description=description,
            is_paid=is_paid,
            due_date=due_date,
            details=dict(details or {}),
            created_at=datetime.now(UTC),
        )
        return expense_id

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        expense = self._expenses.get(expense_id)
        if expense is None:
            return None
        return _copy(expense)

    def update_expense(
        self,
        expense_id: int,
        date: Optional[date] = None,
        category: Optional[ExpenseCategory] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        is_paid: Optional[bool] = None,
        due_date: Optional[date] = None,
        details: Optional[dict[str, Any]] = None,
        update_due_date: bool = False,
    ) -> None:
        """Update expense fields."""
        expense = self._expenses.get(expense_id)
        if expense is None:
            raise NotFoundError(expense_not_found(expense_id))

        changes: dict[str, Any] = {}
        if date is not None:
            changes["date"] = date
        if category is not None:
            changes["category"] = ExpenseCategory(category)
        if amount is not None:
            changes["amount"] = Decimal(amount)
        if description is not None:
            changes["description"] = description
        if is_paid is not None:
            changes["is_paid"] = is_paid
        if update_due_date or due_date is not None:
            changes["due_date"] = due_date
        if details is not None:
            changes["details"] = dict(details)

        self._expenses[expense_id] = replace(expense, **changes)

    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense."""
        if expense_id not in self._expenses:
            raise NotFoundError(expense_not_found(expense_id))
        del self._expenses[expense_id]

    def list_expenses(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[ExpenseCategory] = None,
        is_paid: Optional[bool] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Expense]:
        """List expenses with optional filters."""
        needle = search.lower() if search else None
        matches = [
            e
            for e in self._expenses.values()
            if (start_date is None or e.date >= start_date)
            and (end_date is None or e.date <= end_date)
            and (category is None or e.category == category)
            and (is_paid is None or e.is_paid == is_paid)
            and (needle is None or needle in e.description.lower())
        ]
        result = sort_expenses(matches)
        if limit is not None:
            result = result[:limit]
        return [_copy(e) for e in result]

    def get_total_expenses(self) -> Decimal:
        """Sum of all expense amounts currently stored."""
        return total_amount(self._expenses.values())

    # Finance operations
    def get_total_investment(self) -> Decimal:
        """Get the farm's total investment."""
        return self._total_investment

    def set_total_investment(self, amount: Decimal) -> None:
        """Overwrite the farm's total investment."""
        self._total_investment = Decimal(amount)

    # User operations
    def create_user(
        self,
        name: str,
        email: str,
        farm_name: str,
        role: Role = Role.USER,
        permissions: frozenset[str] = frozenset(),
    ) -> int:
        """Create a user. Returns user ID."""
        if self.get_user_by_email(email) is not None:
            raise ConflictError(duplicate_user_email(email))
        user_id = self._next_user_id
        self._next_user_id += 1
        self._users[user_id] = User(
            id=user_id,
            name=name,
            email=email,
            farm_name=farm_name,
            role=Role(role),
            permissions=frozenset(permissions),
        )
        return user_id

    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    def list_users(self) -> list[User]:
        """List all users ordered by ID."""
        return [self._users[user_id] for user_id in sorted(self._users)]

    def update_user(
        self,
        user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        farm_name: Optional[str] = None,
        role: Optional[Role] = None,
        permissions: Optional[frozenset[str]] = None,
    ) -> None:
        """Update user fields."""
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))

        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = name
        if email is not None:
            existing = self.get_user_by_email(email)
            if existing is not None and existing.id != user_id:
                raise ConflictError(duplicate_user_email(email))
            changes["email"] = email
        if farm_name is not None:
            changes["farm_name"] = farm_name
        if role is not None:
            changes["role"] = Role(role)
        if permissions is not None:
            changes["permissions"] = frozenset(permissions)

        self._users[user_id] = replace(user, **changes)

    def delete_user(self, user_id: int) -> None:
        """Delete a user."""
        if user_id not in self._users:
            raise NotFoundError(user_not_found(user_id))
        del self._users[user_id]
