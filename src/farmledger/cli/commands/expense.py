"""Expense ledger commands."""

from typing import Any, Optional

import click

from farmledger.cli.error_handling import handle_domain_error
from farmledger.cli.formatting import format_amount, print_expense_detail
from farmledger.cli.session import require_permission_or_exit
from farmledger.domain.entities import PERMISSION_LEDGER, ExpenseCategory
from farmledger.domain.errors import DomainError
from farmledger.domain.expense import ExpenseService
from farmledger.domain.validation import parse_category, validate_expense_input
from farmledger.utils.amount_parser import parse_amount
from farmledger.utils.date_parser import parse_date

CATEGORY_CHOICE = click.Choice([c.value for c in ExpenseCategory], case_sensitive=False)


def detail_options(func):
    """Attach the category-specific detail options to a command."""
    options = [
        click.option("--quantity", help="Quantity purchased (e.g., '50kg', '40L')"),
        click.option("--supplier", help="Supplier or contractor"),
        click.option("--notes", help="Free-form notes"),
        click.option("--labor-count", type=click.IntRange(min=0), help="Number of laborers"),
        click.option("--labor-rate", type=click.FloatRange(min=0), help="Rate per laborer"),
        click.option("--labor-hours", type=click.FloatRange(min=0), help="Hours worked"),
        click.option(
            "--detail",
            "extra_details",
            multiple=True,
            help="Additional detail as KEY=VALUE (repeatable)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_details(
    quantity: Optional[str],
    supplier: Optional[str],
    notes: Optional[str],
    labor_count: Optional[int],
    labor_rate: Optional[float],
    labor_hours: Optional[float],
    extra_details: tuple[str, ...],
) -> dict[str, Any]:
    """Collect detail options into a dict, skipping the ones not given.

    Raises:
        ValueError: If an extra detail is not in KEY=VALUE form
    """
    details: dict[str, Any] = {}
    for key, value in (
        ("quantity", quantity),
        ("supplier", supplier),
        ("notes", notes),
        ("labor_count", labor_count),
        ("labor_rate", labor_rate),
        ("labor_hours", labor_hours),
    ):
        if value is not None:
            details[key] = value

    for item in extra_details:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid detail '{item}'. Expected KEY=VALUE")
        details[key.strip()] = value.strip()

    return details


@click.group()
def expense_group():
    """Record and manage expenses."""
    pass


@expense_group.command("add")
@click.option(
    "--date",
    "expense_date",
    default="today",
    show_default=True,
    help="Expense date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--category", required=True, type=CATEGORY_CHOICE, help="Expense category")
@click.option("--amount", required=True, help="Amount spent (e.g., 1200 or 1,200.50)")
@click.option("--description", required=True, help="What the money was spent on")
@click.option("--paid/--unpaid", "is_paid", default=True, show_default=True, help="Payment status")
@click.option("--due-date", help="Due date for unpaid expenses (e.g., 2025-05-20, 'in 14 days')")
@detail_options
@click.pass_context
def add_expense(
    ctx,
    expense_date: str,
    category: str,
    amount: str,
    description: str,
    is_paid: bool,
    due_date: Optional[str],
    **detail_kwargs,
):
    """Record a new expense.

    Examples:
        farmledger expense add --category fertilizer --amount 2500 --description "NPK Fertilizer" --quantity 50kg
        farmledger expense add --category fuel --amount 1200 --description "Tractor fuel" --unpaid --due-date "in 14 days"
    """
    require_permission_or_exit(ctx, PERMISSION_LEDGER)
    service = ExpenseService(ctx.obj["db"])

    try:
        parsed_date = parse_date(expense_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    parsed_due_date = None
    if due_date:
        try:
            parsed_due_date = parse_date(due_date)
        except ValueError as e:
            click.echo(f"Error: Invalid due date format: {e}", err=True)
            ctx.exit(1)

    try:
        parsed_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        validate_expense_input(amount=parsed_amount, description=description, category=category)
        details = build_details(**detail_kwargs)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if is_paid and parsed_due_date is not None:
        click.echo("Note: --due-date is ignored for paid expenses.")

    expense = service.add_expense(
        date=parsed_date,
        category=parse_category(category),
        amount=parsed_amount,
        description=description.strip(),
        is_paid=is_paid,
        due_date=parsed_due_date,
        details=details,
    )
    click.echo(f"Expense added successfully! (ID: {expense.id})")
    click.echo(f"  Date: {expense.date}")
    click.echo(f"  Category: {expense.category.label}")
    click.echo(f"  Amount: {format_amount(expense.amount)}")
    click.echo(f"  Description: {expense.description}")
    if not expense.is_paid:
        click.echo(f"  Due: {expense.due_date or 'no due date'}")


@expense_group.command("update")
@click.argument("expense_id", type=int)
@click.option("--date", "expense_date", help="New expense date")
@click.option("--category", type=CATEGORY_CHOICE, help="New category")
@click.option("--amount", help="New amount")
@click.option("--description", help="New description")
@click.option("--paid/--unpaid", "is_paid", default=None, help="New payment status")
@click.option("--due-date", help="New due date")
@click.option("--clear-due-date", is_flag=True, help="Remove the due date")
@detail_options
@click.pass_context
def update_expense(
    ctx,
    expense_id: int,
    expense_date: Optional[str],
    category: Optional[str],
    amount: Optional[str],
    description: Optional[str],
    is_paid: Optional[bool],
    due_date: Optional[str],
    clear_due_date: bool,
    **detail_kwargs,
):
    """Update an expense.

    Updates only the fields that are provided. Detail options are merged into
    the existing details.

    Examples:
        farmledger expense update 4 --amount 1350
        farmledger expense update 4 --paid
        farmledger expense update 3 --labor-count 6 --notes "Extra hand"
    """
    require_permission_or_exit(ctx, PERMISSION_LEDGER)
    service = ExpenseService(ctx.obj["db"])

    existing = service.get_expense(expense_id)
    if existing is None:
        click.echo(f"Error: Expense {expense_id} not found", err=True)
        ctx.exit(1)

    if due_date and clear_due_date:
        click.echo("Error: Cannot use --due-date together with --clear-due-date", err=True)
        ctx.exit(1)

    parsed_date = None
    parsed_due_date = None
    parsed_amount = None
    try:
        if expense_date:
            parsed_date = parse_date(expense_date)
        if due_date:
            parsed_due_date = parse_date(due_date)
        if amount is not None:
            parsed_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    try:
        validate_expense_input(
            amount=parsed_amount, description=description, category=category, partial=True
        )
        new_details = build_details(**detail_kwargs)
    except ValueError as e:
        handle_domain_error(ctx, e)

    details = None
    if new_details:
        details = {**existing.details, **new_details}

    if all(
        value is None
        for value in (parsed_date, category, parsed_amount, description, is_paid, parsed_due_date, details)
    ) and not clear_due_date:
        click.echo("Nothing to update. Provide at least one field option.")
        return

    try:
        expense = service.update_expense(
            expense_id,
            date=parsed_date,
            category=parse_category(category) if category else None,
            amount=parsed_amount,
            description=description.strip() if description is not None else None,
            is_paid=is_paid,
            due_date=parsed_due_date,
            details=details,
            clear_due_date=clear_due_date,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Expense updated successfully! (ID: {expense.id})")
    print_expense_detail(expense)


@expense_group.command("pay")
@click.argument("expense_id", type=int)
@click.pass_context
def pay_expense(ctx, expense_id: int):
    """Mark an expense as paid."""
    require_permission_or_exit(ctx, PERMISSION_LEDGER)
    service = ExpenseService(ctx.obj["db"])

    try:
        expense = service.mark_paid(expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Marked expense {expense.id} as paid ({format_amount(expense.amount)}, {expense.description})")


@expense_group.command("show")
@click.argument("expense_id", type=int)
@click.pass_context
def show_expense(ctx, expense_id: int):
    """Show all fields of an expense."""
    require_permission_or_exit(ctx, PERMISSION_LEDGER)
    service = ExpenseService(ctx.obj["db"])

    try:
        expense = service.require_expense(expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    print_expense_detail(expense)


@expense_group.command("delete")
@click.argument("expense_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_expense(ctx, expense_id: int, yes: bool):
    """Delete an expense."""
    require_permission_or_exit(ctx, PERMISSION_LEDGER)
    service = ExpenseService(ctx.obj["db"])

    expense = service.get_expense(expense_id)
    if expense is None:
        click.echo(f"Error: Expense {expense_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete expense {expense_id} ({expense.description})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_expense(expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Expense deleted successfully! (ID: {expense_id})")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
