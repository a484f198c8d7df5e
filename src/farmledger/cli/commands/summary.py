"""Finance summary and investment commands."""

import click

from farmledger.cli.error_handling import handle_domain_error
from farmledger.cli.formatting import format_amount
from farmledger.cli.session import require_permission_or_exit
from farmledger.domain.entities import PERMISSION_DASHBOARD, PERMISSION_LEDGER
from farmledger.domain.expense import ExpenseService
from farmledger.utils.amount_parser import parse_amount


@click.command("summary")
@click.option("--all-categories", is_flag=True, help="Also list categories with no expenses")
@click.option("--recent", type=click.IntRange(min=0), default=5, show_default=True, help="Number of recent expenses to show")
@click.pass_context
def summary(ctx, all_categories: bool, recent: int):
    """Show total investment, expenses, balance and spending per category."""
    require_permission_or_exit(ctx, PERMISSION_DASHBOARD)
    service = ExpenseService(ctx.obj["db"])

    finance = service.get_finance_summary()
    totals = service.category_totals()

    click.echo("\nFarm Finances")
    click.echo("=" * 80)
    click.echo(f"{'Total Investment':<50} {format_amount(finance.total_investment):>20}")
    click.echo(f"{'Total Expenses':<50} {format_amount(finance.total_expenses):>20}")
    click.echo(f"{'Balance':<50} {format_amount(finance.balance):>20}")
    click.echo()

    click.echo("Expenses by Category")
    click.echo("*" * 80)
    rows = [(category, amount) for category, amount in totals.items() if all_categories or amount != 0]
    # Largest first, ties by name
    rows.sort(key=lambda row: (-row[1], row[0].value))
    if not rows:
        click.echo("    No expenses recorded yet.")
    for category, amount in rows:
        share = ""
        if finance.total_expenses:
            share = f"{amount / finance.total_expenses * 100:5.1f}%"
        click.echo(f"    {category.label:<40} {share:>6} {format_amount(amount):>20}")
    click.echo("-" * 80)
    click.echo(f"{'TOTAL':<50} {format_amount(sum(totals.values())):>20}")

    if recent:
        expenses = service.list_recent(limit=recent)
        if expenses:
            click.echo("\nRecent Activities")
            click.echo("*" * 80)
            for expense in expenses:
                status = "" if expense.is_paid else f"  (due {expense.due_date or '-'})"
                click.echo(
                    f"    {str(expense.date):<12} {expense.category.value:<14} "
                    f"{expense.description[:30]:<30} {format_amount(expense.amount):>14}{status}"
                )


@click.group()
def investment_group():
    """Manage the farm's total investment."""
    pass


@investment_group.command("set")
@click.argument("amount")
@click.pass_context
def set_investment(ctx, amount: str):
    """Set the farm's total investment."""
    require_permission_or_exit(ctx, PERMISSION_LEDGER)
    service = ExpenseService(ctx.obj["db"])

    try:
        parsed_amount = parse_amount(amount)
    except ValueError as e:
        handle_domain_error(ctx, e)
    if parsed_amount < 0:
        click.echo("Error: Investment cannot be negative", err=True)
        ctx.exit(1)

    finance = service.set_total_investment(parsed_amount)
    click.echo("Investment updated successfully!")
    click.echo(f"  Total Investment: {format_amount(finance.total_investment)}")
    click.echo(f"  Balance: {format_amount(finance.balance)}")


@investment_group.command("show")
@click.pass_context
def show_investment(ctx):
    """Show the farm's total investment and balance."""
    require_permission_or_exit(ctx, PERMISSION_LEDGER)
    finance = ExpenseService(ctx.obj["db"]).get_finance_summary()
    click.echo(f"Total Investment: {format_amount(finance.total_investment)}")
    click.echo(f"Total Expenses: {format_amount(finance.total_expenses)}")
    click.echo(f"Balance: {format_amount(finance.balance)}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary)
    cli.add_command(investment_group, name="investment")
