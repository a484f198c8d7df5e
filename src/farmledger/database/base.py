"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from farmledger.domain.entities import Expense, ExpenseCategory, User, Role


class Database(ABC):
    """Abstract database interface for farmledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Expense operations
    @abstractmethod
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
        pass

    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        pass

    @abstractmethod
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
        """Update expense fields.

        Fields left as None are not touched.

        Args:
            update_due_date: If True, write due_date even if it's None (to clear it)
        """
        pass

    @abstractmethod
    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense."""
        pass

    @abstractmethod
    def list_expenses(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[ExpenseCategory] = None,
        is_paid: Optional[bool] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Expense]:
        """List expenses with optional filters.

        Results are ordered by date descending; equal dates keep insertion
        order.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            category: Optional category filter
            is_paid: Optional payment status filter
            search: Optional case-insensitive substring of the description
            limit: Optional maximum number of results
        """
        pass

    @abstractmethod
    def get_total_expenses(self) -> Decimal:
        """Sum of all expense amounts currently stored."""
        pass

    # Finance operations
    @abstractmethod
    def get_total_investment(self) -> Decimal:
        """Get the farm's total investment."""
        pass

    @abstractmethod
    def set_total_investment(self, amount: Decimal) -> None:
        """Overwrite the farm's total investment."""
        pass

    # User operations
    @abstractmethod
    def create_user(
        self,
        name: str,
        email: str,
        farm_name: str,
        role: Role = Role.USER,
        permissions: frozenset[str] = frozenset(),
    ) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users ordered by ID."""
        pass

    @abstractmethod
    def update_user(
        self,
        user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        farm_name: Optional[str] = None,
        role: Optional[Role] = None,
        permissions: Optional[frozenset[str]] = None,
    ) -> None:
        """Update user fields. Fields left as None are not touched."""
        pass

    @abstractmethod
    def delete_user(self, user_id: int) -> None:
        """Delete a user."""
        pass
