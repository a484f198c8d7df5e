"""Pure aggregation functions over expense collections.

Nothing here touches a database; every function takes the expenses it works
on, so the results can be checked against any collection.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Sequence

from farmledger.domain.entities import (
    Expense,
    ExpenseCategory,
    FarmFinance,
    PaymentReminders,
)


def sort_expenses(expenses: Iterable[Expense]) -> list[Expense]:
    """Order expenses by date, newest first.

    Expenses sharing a date keep insertion order (ascending id).
    """
    by_insertion = sorted(expenses, key=lambda e: e.id)
    # list.sort is stable, also with reverse=True
    by_insertion.sort(key=lambda e: e.date, reverse=True)
    return by_insertion


def filter_unpaid(expenses: Iterable[Expense]) -> list[Expense]:
    """Return the expenses that are not paid yet."""
    return [e for e in expenses if not e.is_paid]


def total_amount(expenses: Iterable[Expense]) -> Decimal:
    """Sum of all expense amounts."""
    return sum((e.amount for e in expenses), Decimal("0"))


def category_totals(expenses: Iterable[Expense]) -> dict[ExpenseCategory, Decimal]:
    """Sum amounts per category.

    Every category is present in the result, in declaration order, with zero
    for categories that have no expenses.
    """
    totals = {category: Decimal("0") for category in ExpenseCategory}
    for expense in expenses:
        totals[expense.category] += expense.amount
    return totals


def compute_balance(total_investment: Decimal, total_expenses: Decimal) -> Decimal:
    return total_investment - total_expenses


def build_finance_summary(
    total_investment: Decimal, expenses: Iterable[Expense]
) -> FarmFinance:
    """Build the finance summary from the investment and the expense collection."""
    spent = total_amount(expenses)
    return FarmFinance(
        total_investment=total_investment,
        total_expenses=spent,
        balance=compute_balance(total_investment, spent),
    )


def overdue_expenses(expenses: Iterable[Expense], today: date) -> list[Expense]:
    """Unpaid expenses whose due date has passed."""
    return [
        e
        for e in filter_unpaid(expenses)
        if e.due_date is not None and e.due_date < today
    ]


def due_soon_expenses(
    expenses: Iterable[Expense], today: date, within_days: int = 7
) -> list[Expense]:
    """Unpaid expenses due between today and today + within_days (inclusive)."""
    horizon = today + timedelta(days=within_days)
    return [
        e
        for e in filter_unpaid(expenses)
        if e.due_date is not None and today <= e.due_date <= horizon
    ]


def group_payment_reminders(
    expenses: Sequence[Expense], today: date, within_days: int = 7
) -> PaymentReminders:
    """Split unpaid expenses into overdue, due soon and everything else.

    Each group is ordered by due date, earliest first; expenses without a due
    date land in the last group.
    """
    overdue = overdue_expenses(expenses, today)
    due_soon = due_soon_expenses(expenses, today, within_days)
    grouped_ids = {e.id for e in overdue} | {e.id for e in due_soon}
    other = [e for e in filter_unpaid(expenses) if e.id not in grouped_ids]

    def by_due_date(expense: Expense):
        return (expense.due_date is None, expense.due_date or date.max, expense.id)

    return PaymentReminders(
        overdue=tuple(sorted(overdue, key=by_due_date)),
        due_soon=tuple(sorted(due_soon, key=by_due_date)),
        other=tuple(sorted(other, key=by_due_date)),
    )
