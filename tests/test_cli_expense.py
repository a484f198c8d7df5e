"""Tests for expense commands."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from farmledger.cli.main import cli
from farmledger.domain.entities import ExpenseCategory
from farmledger.domain.expense import ExpenseService


@pytest.fixture
def ledger(temp_db):
    """ExpenseService over the database the CLI writes to."""
    return ExpenseService(temp_db)


@pytest.fixture
def fuel_expense(ledger, logged_in_admin):
    return ledger.add_expense(
        date=date(2025, 5, 5),
        category=ExpenseCategory.FUEL,
        amount=Decimal("1200"),
        description="Tractor fuel for planting",
        is_paid=False,
        due_date=date(2025, 5, 20),
        details={"quantity": "40L"},
    )


def test_add_expense(cli_runner, logged_in_admin, temp_db):
    """Test recording an expense with details."""
    result = cli_runner.invoke(
        cli,
        logged_in_admin
        + [
            "expense",
            "add",
            "--date",
            "2025-04-10",
            "--category",
            "fertilizer",
            "--amount",
            "2,500",
            "--description",
            "NPK Fertilizer purchase",
            "--quantity",
            "50kg",
            "--supplier",
            "AgriSupply Co.",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Expense added successfully! (ID: 1)" in result.output
    assert "Fertilizers" in result.output

    expense = temp_db.get_expense(1)
    assert expense.amount == Decimal("2500")
    assert expense.is_paid is True
    assert expense.details == {"quantity": "50kg", "supplier": "AgriSupply Co."}


def test_add_unpaid_expense_with_due_date(cli_runner, logged_in_admin, temp_db):
    result = cli_runner.invoke(
        cli,
        logged_in_admin
        + [
            "expense",
            "add",
            "--category",
            "fuel",
            "--amount",
            "1200",
            "--description",
            "Tractor fuel",
            "--unpaid",
            "--due-date",
            "in 14 days",
        ],
    )

    assert result.exit_code == 0, result.output
    expense = temp_db.get_expense(1)
    assert expense.date == date.today()
    assert expense.is_paid is False
    assert expense.due_date == date.today() + timedelta(days=14)


def test_add_labor_expense(cli_runner, logged_in_admin, temp_db):
    result = cli_runner.invoke(
        cli,
        logged_in_admin
        + [
            "expense",
            "add",
            "--category",
            "labor",
            "--amount",
            "3000",
            "--description",
            "Field preparation labor",
            "--labor-count",
            "5",
            "--labor-rate",
            "600",
            "--labor-hours",
            "8",
            "--detail",
            "field=North",
        ],
    )

    assert result.exit_code == 0, result.output
    details = temp_db.get_expense(1).details
    assert details["labor_count"] == 5
    assert details["labor_rate"] == 600
    assert details["field"] == "North"


@pytest.mark.parametrize(
    "amount, description, message",
    [
        ("0", "Tractor fuel", "Amount must be positive"),
        ("-10", "Tractor fuel", "Amount must be positive"),
        ("abc", "Tractor fuel", "Invalid amount format"),
        ("100", "x", "at least 2 characters"),
    ],
)
def test_add_expense_validation(cli_runner, logged_in_admin, temp_db, amount, description, message):
    result = cli_runner.invoke(
        cli,
        logged_in_admin
        + [
            "expense",
            "add",
            "--category",
            "fuel",
            "--amount",
            amount,
            "--description",
            description,
        ],
    )

    assert result.exit_code == 1
    assert message in result.output
    assert temp_db.list_expenses() == []


def test_add_expense_invalid_category(cli_runner, logged_in_admin):
    result = cli_runner.invoke(
        cli,
        logged_in_admin
        + ["expense", "add", "--category", "tractors", "--amount", "10", "--description", "Stuff"],
    )

    assert result.exit_code == 2
    assert "Invalid value for '--category'" in result.output


def test_add_expense_invalid_detail(cli_runner, logged_in_admin):
    result = cli_runner.invoke(
        cli,
        logged_in_admin
        + [
            "expense",
            "add",
            "--category",
            "seeds",
            "--amount",
            "10",
            "--description",
            "Seeds",
            "--detail",
            "novalue",
        ],
    )

    assert result.exit_code == 1
    assert "Expected KEY=VALUE" in result.output


def test_add_expense_requires_login(cli_runner, cli_args):
    result = cli_runner.invoke(
        cli,
        cli_args + ["expense", "add", "--category", "fuel", "--amount", "10", "--description", "Fuel"],
    )

    assert result.exit_code == 1
    assert "Not logged in" in result.output


def test_update_expense(cli_runner, logged_in_admin, fuel_expense, temp_db):
    """Test updating amount and merging details."""
    result = cli_runner.invoke(
        cli,
        logged_in_admin
        + [
            "expense",
            "update",
            str(fuel_expense.id),
            "--amount",
            "1350",
            "--supplier",
            "Village Pump",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Expense updated successfully!" in result.output

    temp_db.disconnect()
    expense = temp_db.get_expense(fuel_expense.id)
    assert expense.amount == Decimal("1350")
    assert expense.description == "Tractor fuel for planting"
    assert expense.details == {"quantity": "40L", "supplier": "Village Pump"}


def test_update_expense_clear_due_date(cli_runner, logged_in_admin, fuel_expense, temp_db):
    result = cli_runner.invoke(
        cli, logged_in_admin + ["expense", "update", str(fuel_expense.id), "--clear-due-date"]
    )

    assert result.exit_code == 0, result.output
    temp_db.disconnect()
    assert temp_db.get_expense(fuel_expense.id).due_date is None


def test_update_expense_nothing_to_update(cli_runner, logged_in_admin, fuel_expense):
    result = cli_runner.invoke(cli, logged_in_admin + ["expense", "update", str(fuel_expense.id)])

    assert result.exit_code == 0
    assert "Nothing to update" in result.output


def test_update_missing_expense(cli_runner, logged_in_admin):
    result = cli_runner.invoke(cli, logged_in_admin + ["expense", "update", "999", "--amount", "5"])

    assert result.exit_code == 1
    assert "Expense 999 not found" in result.output


def test_pay_expense(cli_runner, logged_in_admin, fuel_expense, temp_db):
    """Test marking an expense paid leaves the totals alone."""
    result = cli_runner.invoke(cli, logged_in_admin + ["expense", "pay", str(fuel_expense.id)])

    assert result.exit_code == 0, result.output
    assert f"Marked expense {fuel_expense.id} as paid" in result.output

    temp_db.disconnect()
    assert temp_db.get_expense(fuel_expense.id).is_paid is True
    assert temp_db.get_total_expenses() == Decimal("1200")


def test_pay_missing_expense(cli_runner, logged_in_admin):
    result = cli_runner.invoke(cli, logged_in_admin + ["expense", "pay", "999"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_show_expense(cli_runner, logged_in_admin, fuel_expense):
    result = cli_runner.invoke(cli, logged_in_admin + ["expense", "show", str(fuel_expense.id)])

    assert result.exit_code == 0
    assert f"Expense ID: {fuel_expense.id}" in result.output
    assert "Amount: 1,200.00" in result.output
    assert "Status: Due 2025-05-20" in result.output
    assert "quantity=40L" in result.output


def test_delete_expense(cli_runner, logged_in_admin, fuel_expense, temp_db):
    result = cli_runner.invoke(
        cli, logged_in_admin + ["expense", "delete", str(fuel_expense.id), "--yes"]
    )

    assert result.exit_code == 0
    assert "Expense deleted successfully!" in result.output
    temp_db.disconnect()
    assert temp_db.get_expense(fuel_expense.id) is None


def test_delete_expense_cancelled(cli_runner, logged_in_admin, fuel_expense, temp_db):
    result = cli_runner.invoke(
        cli, logged_in_admin + ["expense", "delete", str(fuel_expense.id)], input="n\n"
    )

    assert result.exit_code == 0
    assert "Deletion cancelled." in result.output
    temp_db.disconnect()
    assert temp_db.get_expense(fuel_expense.id) is not None


def test_expense_commands_require_ledger_permission(cli_runner, logged_in_admin, temp_db):
    """A user without the ledger permission cannot record expenses."""
    temp_db.create_user(
        name="Viewer", email="viewer@farm.com", farm_name="F", permissions=frozenset({"activities"})
    )
    cli_runner.invoke(
        cli, logged_in_admin + ["login", "--email", "viewer@farm.com", "--password", "secret123"]
    )

    result = cli_runner.invoke(
        cli,
        logged_in_admin
        + ["expense", "add", "--category", "fuel", "--amount", "10", "--description", "Fuel"],
    )

    assert result.exit_code == 1
    assert "'ledger' permission" in result.output


def test_add_expense_oversized_amount(cli_runner, logged_in_admin, temp_db):
    result = cli_runner.invoke(
        cli,
        logged_in_admin
        + [
            "expense",
            "add",
            "--category",
            "fuel",
            "--amount",
            "1" + "0" * 30,
            "--description",
            "Too much fuel",
        ],
    )

    assert result.exit_code == 1
    assert "Invalid amount format" in result.output
    assert temp_db.list_expenses() == []
