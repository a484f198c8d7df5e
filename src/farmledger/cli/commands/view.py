"""Expense viewing commands: activity listing and payment reminders."""

from datetime import date
from decimal import Decimal

import click

from farmledger.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from farmledger.cli.formatting import (
    format_amount,
    print_expense_detail,
    print_expense_table,
)
from farmledger.cli.session import require_permission_or_exit
from farmledger.domain.entities import PERMISSION_ACTIVITIES, ExpenseCategory
from farmledger.domain.expense import ExpenseService
from farmledger.domain.summary import total_amount
from farmledger.domain.validation import parse_category
from farmledger.utils.date_parser import parse_date


@click.command("view")
@click.option("--search", help="Case-insensitive text to look for in descriptions")
@click.option(
    "--category",
    type=click.Choice([c.value for c in ExpenseCategory], case_sensitive=False),
    help="Only this category",
)
@click.option(
    "--status",
    type=click.Choice(["all", "paid", "unpaid"], case_sensitive=False),
    default="all",
    show_default=True,
    help="Payment status filter",
)
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative)")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative)")
@period_options
@click.option("--limit", type=click.IntRange(min=1), help="Show only the N most recent expenses")
@click.option("--verbose", "-v", is_flag=True, help="Show every field, including details")
@click.pass_context
def view_expenses(
    ctx,
    search: str | None,
    category: str | None,
    status: str,
    start_date: str | None,
    end_date: str | None,
    limit: int | None,
    verbose: bool,
    **period_kwargs,
):
    """View recorded expenses, newest first.

    Examples:
        farmledger view --limit 5
        farmledger view --category labor --this-month
        farmledger view --search tractor --status unpaid
    """
    require_permission_or_exit(ctx, PERMISSION_ACTIVITIES)
    service = ExpenseService(ctx.obj["db"])

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(period_kwargs),
    )

    is_paid = {"all": None, "paid": True, "unpaid": False}[status.lower()]
    expenses = service.list_expenses(
        start_date=start,
        end_date=end,
        category=parse_category(category) if category else None,
        is_paid=is_paid,
        search=search,
        limit=limit,
    )

    if not expenses:
        click.echo("No expenses found.")
        return

    click.echo(f"\nFound {len(expenses)} expense(s):")
    if verbose:
        click.echo("=" * 100)
        for expense in expenses:
            print_expense_detail(expense)
            click.echo("-" * 100)
    else:
        print_expense_table(expenses)
    click.echo(f"{'Total':<36}{format_amount(total_amount(expenses)):>14}")


@click.command("unpaid")
@click.option(
    "--within-days",
    type=click.IntRange(min=0),
    default=7,
    show_default=True,
    help="Expenses due within this many days count as due soon",
)
@click.option("--today", "today_str", hidden=True, help="Reference date (for testing)")
@click.pass_context
def unpaid_expenses(ctx, within_days: int, today_str: str | None):
    """Show payment reminders for unpaid expenses."""
    require_permission_or_exit(ctx, PERMISSION_ACTIVITIES)
    service = ExpenseService(ctx.obj["db"])

    today = date.today()
    if today_str:
        try:
            today = parse_date(today_str)
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)
    reminders = service.payment_reminders(today=today, within_days=within_days)

    groups = (
        ("Overdue", reminders.overdue),
        (f"Due within {within_days} days", reminders.due_soon),
        ("Other unpaid", reminders.other),
    )
    if not any(expenses for _, expenses in groups):
        click.echo("No pending payments")
        return

    outstanding = Decimal("0")
    for title, expenses in groups:
        if not expenses:
            continue
        click.echo(f"\n{title}")
        click.echo("*" * 80)
        for expense in expenses:
            due = f"Due: {expense.due_date}" if expense.due_date else "No due date"
            click.echo(
                f"  {expense.id:<5} {expense.description[:36]:<36} {format_amount(expense.amount):>14}  {due}"
            )
            outstanding += expense.amount
    click.echo("-" * 80)
    click.echo(f"{'Outstanding':<43}{format_amount(outstanding):>14}")


def register_commands(cli):
    """Register view commands with main CLI."""
    cli.add_command(view_expenses)
    cli.add_command(unpaid_expenses)
