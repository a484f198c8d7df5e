"""Expense domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from farmledger.database.base import Database
from farmledger.domain import summary
from farmledger.domain.entities import (
    Expense,
    ExpenseCategory,
    FarmFinance,
    PaymentReminders,
)
from farmledger.domain.errors import NotFoundError, expense_not_found

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for recording expenses and reading the farm's finances.

    Totals are never cached here: the finance summary and category totals are
    rebuilt from the stored expenses on every call, so they cannot drift from
    the collection.
    """

    def __init__(self, db: Database):
        """Initialize expense service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_expense(
        self,
        date: date,
        category: ExpenseCategory,
        amount: Decimal,
        description: str,
        is_paid: bool = True,
        due_date: Optional[date] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> Expense:
        """Record a new expense.

        Input is expected to be validated by the caller. A due date only
        applies to unpaid expenses and is dropped otherwise.

        Args:
            date: Date of the expense
            category: Expense category
            amount: Amount spent
            description: What the money was spent on
            is_paid: Whether the expense is settled
            due_date: Optional due date for unpaid expenses
            details: Optional free-form category details

        Returns:
            The stored expense, with its new ID
        """
        expense_id = self.db.create_expense(
            date=date,
            category=ExpenseCategory(category),
            amount=amount,
            description=description,
            is_paid=is_paid,
            due_date=None if is_paid else due_date,
            details=details,
        )
        logger.info("Added expense %s: %s %s", expense_id, category, amount)
        return self.require_expense(expense_id)

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID, or None if not found."""
        return self.db.get_expense(expense_id)

    def require_expense(self, expense_id: int) -> Expense:
        """Get expense by ID.

        Raises:
            NotFoundError: If the expense doesn't exist
        """
        expense = self.db.get_expense(expense_id)
        if expense is None:
            raise NotFoundError(expense_not_found(expense_id))
        return expense

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
        clear_due_date: bool = False,
    ) -> Expense:
        """Merge the given fields over an existing expense.

        Only fields that are not None change. details replaces the whole
        mapping.

        Args:
            expense_id: Expense ID to update
            clear_due_date: If True, remove the due date (due_date must be None)

        Returns:
            The updated expense

        Raises:
            NotFoundError: If the expense doesn't exist
            ValueError: If both due_date and clear_due_date are given
        """
        self.require_expense(expense_id)

        if clear_due_date and due_date is not None:
            raise ValueError("Cannot set both due_date and clear_due_date")

        self.db.update_expense(
            expense_id=expense_id,
            date=date,
            category=ExpenseCategory(category) if category is not None else None,
            amount=amount,
            description=description,
            is_paid=is_paid,
            due_date=due_date,
            details=details,
            update_due_date=clear_due_date,
        )
        logger.info("Updated expense %s", expense_id)
        return self.require_expense(expense_id)

    def mark_paid(self, expense_id: int) -> Expense:
        """Mark an expense as paid."""
        return self.update_expense(expense_id, is_paid=True)

    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense.

        Raises:
            NotFoundError: If the expense doesn't exist
        """
        self.require_expense(expense_id)
        self.db.delete_expense(expense_id)
        logger.info("Deleted expense %s", expense_id)

    def list_expenses(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[ExpenseCategory] = None,
        is_paid: Optional[bool] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Expense]:
        """List expenses, newest first.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            category: Optional category filter
            is_paid: Optional payment status filter
            search: Optional case-insensitive description search
            limit: Optional maximum number of expenses

        Returns:
            List of expense entities
        """
        return self.db.list_expenses(
            start_date=start_date,
            end_date=end_date,
            category=ExpenseCategory(category) if category is not None else None,
            is_paid=is_paid,
            search=search,
            limit=limit,
        )

    def list_recent(self, limit: int = 5) -> list[Expense]:
        """Most recent expenses."""
        return self.list_expenses(limit=limit)

    def list_unpaid(self) -> list[Expense]:
        """Expenses that still need to be paid."""
        return self.list_expenses(is_paid=False)

    def list_by_category(self, category: ExpenseCategory) -> list[Expense]:
        return self.list_expenses(category=category)

    def category_totals(self) -> dict[ExpenseCategory, Decimal]:
        """Total spent per category, zero for unused categories."""
        return summary.category_totals(self.db.list_expenses())

    def get_finance_summary(self) -> FarmFinance:
        """Current investment, total expenses and balance."""
        total_investment = self.db.get_total_investment()
        total_expenses = self.db.get_total_expenses()
        return FarmFinance(
            total_investment=total_investment,
            total_expenses=total_expenses,
            balance=summary.compute_balance(total_investment, total_expenses),
        )

    def set_total_investment(self, amount: Decimal) -> FarmFinance:
        """Overwrite the total investment.

        Returns:
            The finance summary after the change
        """
        self.db.set_total_investment(amount)
        logger.info("Total investment set to %s", amount)
        return self.get_finance_summary()

    def payment_reminders(
        self, today: Optional[date] = None, within_days: int = 7
    ) -> PaymentReminders:
        """Group unpaid expenses into overdue, due soon and the rest.

        Args:
            today: Reference date, defaults to date.today()
            within_days: Horizon for "due soon"
        """
        if today is None:
            today = date.today()
        return summary.group_payment_reminders(
            self.list_unpaid(), today=today, within_days=within_days
        )
