"""Bootstrap a farm: default admin user and optional sample data."""

from datetime import date
from decimal import Decimal

import click

from farmledger.cli.error_handling import handle_domain_error
from farmledger.cli.formatting import format_amount
from farmledger.domain.entities import PERMISSIONS, ExpenseCategory, Role
from farmledger.domain.expense import ExpenseService
from farmledger.domain.user import UserService
from farmledger.utils.amount_parser import parse_amount

DEFAULT_ADMIN = {
    "name": "John Farmer",
    "email": "admin@farm.com",
    "farm_name": "Green Acres Farm",
    "role": Role.ADMIN,
    "permissions": PERMISSIONS,
}

DEFAULT_INVESTMENT = Decimal("100000")

# (date, category, amount, description, is_paid, due_date, details)
SAMPLE_EXPENSES = [
    (
        date(2025, 4, 10),
        ExpenseCategory.FERTILIZER,
        Decimal("2500"),
        "NPK Fertilizer purchase",
        True,
        None,
        {"quantity": "50kg", "supplier": "AgriSupply Co."},
    ),
    (
        date(2025, 4, 12),
        ExpenseCategory.SEEDS,
        Decimal("1800"),
        "Corn seeds for spring planting",
        True,
        None,
        {"quantity": "25kg", "variety": "Sweet Corn"},
    ),
    (
        date(2025, 4, 15),
        ExpenseCategory.LABOR,
        Decimal("3000"),
        "Field preparation labor",
        True,
        None,
        {"labor_count": 5, "labor_rate": 600, "labor_hours": 8},
    ),
    (
        date(2025, 5, 5),
        ExpenseCategory.FUEL,
        Decimal("1200"),
        "Tractor fuel for planting",
        False,
        date(2025, 5, 20),
        {"quantity": "40L", "vehicle": "John Deere Tractor"},
    ),
    (
        date(2025, 5, 8),
        ExpenseCategory.EQUIPMENT,
        Decimal("5000"),
        "Irrigation equipment maintenance",
        False,
        date(2025, 5, 25),
        {"contractor": "Farm Equipment Repairs"},
    ),
]


@click.command("init-farm")
@click.option("--with-sample-data", is_flag=True, help="Also record a season of sample expenses")
@click.option("--investment", help="Set the total investment (defaults to 100,000 with sample data)")
@click.pass_context
def init_farm(ctx, with_sample_data: bool, investment: str | None):
    """Create the default admin user and, optionally, sample expenses.

    Log in afterwards with:
        farmledger login --email admin@farm.com
    """
    db = ctx.obj["db"]
    users = UserService(db)
    expenses = ExpenseService(db)

    if users.user_exists(DEFAULT_ADMIN["email"]):
        click.echo(f"Admin user {DEFAULT_ADMIN['email']} already exists.")
    else:
        admin = users.create_user(**DEFAULT_ADMIN)
        click.echo(f"Created admin user {admin.email} (ID: {admin.id})")

    parsed_investment = None
    if investment is not None:
        try:
            parsed_investment = parse_amount(investment)
        except ValueError as e:
            handle_domain_error(ctx, e)
        if parsed_investment < 0:
            click.echo("Error: Investment cannot be negative", err=True)
            ctx.exit(1)

    if with_sample_data:
        if expenses.list_recent(limit=1):
            click.echo("Expenses already exist. Skipping sample data.")
        else:
            for expense_date, category, amount, description, is_paid, due_date, details in SAMPLE_EXPENSES:
                expenses.add_expense(
                    date=expense_date,
                    category=category,
                    amount=amount,
                    description=description,
                    is_paid=is_paid,
                    due_date=due_date,
                    details=details,
                )
            click.echo(f"Recorded {len(SAMPLE_EXPENSES)} sample expenses.")
            if parsed_investment is None:
                parsed_investment = DEFAULT_INVESTMENT

    if parsed_investment is not None:
        finance = expenses.set_total_investment(parsed_investment)
        click.echo(f"Total investment set to {format_amount(finance.total_investment)}")


def register_commands(cli):
    """Register init-farm command with main CLI."""
    cli.add_command(init_farm)
