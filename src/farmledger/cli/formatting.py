"""Shared output helpers for CLI commands."""

from decimal import Decimal
from typing import Any

import click

from farmledger.domain.entities import Expense, User


def format_amount(amount: Decimal) -> str:
    return f"{amount:,.2f}"


def format_details(details: dict[str, Any]) -> str:
    return ", ".join(f"{key}={value}" for key, value in sorted(details.items()))


def payment_status(expense: Expense) -> str:
    if expense.is_paid:
        return "Paid"
    if expense.due_date is not None:
        return f"Due {expense.due_date}"
    return "Unpaid"


def print_expense_table(expenses: list[Expense]) -> None:
    """Print expenses as a compact table."""
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Category':<15} {'Amount':>14}  {'Status':<16} {'Description':<34}"
    )
    click.echo("-" * 100)
    for expense in expenses:
        description = expense.description[:34]
        click.echo(
            f"{expense.id:<6} {str(expense.date):<12} {expense.category.value:<15} "
            f"{format_amount(expense.amount):>14}  {payment_status(expense):<16} {description:<34}"
        )


def print_expense_detail(expense: Expense) -> None:
    """Print every field of an expense."""
    click.echo(f"Expense ID: {expense.id}")
    click.echo(f"  Date: {expense.date}")
    click.echo(f"  Category: {expense.category.label}")
    click.echo(f"  Amount: {format_amount(expense.amount)}")
    click.echo(f"  Description: {expense.description}")
    click.echo(f"  Status: {payment_status(expense)}")
    if expense.details:
        click.echo(f"  Details: {format_details(expense.details)}")
    if expense.created_at is not None:
        click.echo(f"  Recorded: {expense.created_at:%Y-%m-%d %H:%M}")


def print_user_table(users: list[User]) -> None:
    """Print users as a table."""
    click.echo("-" * 100)
    click.echo(f"{'ID':<5} {'Name':<20} {'Email':<28} {'Farm':<20} {'Role':<6} Permissions")
    click.echo("-" * 100)
    for user in users:
        click.echo(
            f"{user.id:<5} {user.name[:20]:<20} {user.email[:28]:<28} {user.farm_name[:20]:<20} "
            f"{user.role.value:<6} {', '.join(sorted(user.permissions)) or '-'}"
        )
