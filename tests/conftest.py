"""Shared pytest fixtures for farmledger tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal

import pytest

from farmledger.cli.commands.init_farm import DEFAULT_ADMIN, SAMPLE_EXPENSES
from farmledger.database.factories import (
    create_memory_database,
    create_session_store,
    create_sqlite_database,
)
from farmledger.database.session_store import MemorySessionStore
from farmledger.domain.auth import AuthService
from farmledger.domain.entities import Expense, ExpenseCategory
from farmledger.domain.expense import ExpenseService
from farmledger.domain.user import UserService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_db():
    """Create an empty in-memory database."""
    return create_memory_database()


@pytest.fixture(params=["sqlite", "memory"])
def db(request):
    """Run a test against both database implementations."""
    if request.param == "sqlite":
        return request.getfixturevalue("temp_db")
    return request.getfixturevalue("memory_db")


@pytest.fixture
def session_path(tmp_path):
    """Path of a session file that does not exist yet."""
    return str(tmp_path / "session.json")


@pytest.fixture
def session_store():
    """Create an in-memory session store."""
    return MemorySessionStore()


@pytest.fixture
def expense_service(db):
    """Create an ExpenseService over each database implementation."""
    return ExpenseService(db)


@pytest.fixture
def auth_service(db, session_store):
    """Create an AuthService over each database implementation."""
    return AuthService(db, session_store)


@pytest.fixture
def user_service(db, auth_service):
    """Create a UserService wired to the auth service."""
    return UserService(db, auth=auth_service)


@pytest.fixture
def sample_expenses(expense_service):
    """Record the sample season and return the stored expenses by category."""
    stored = {}
    for expense_date, category, amount, description, is_paid, due_date, details in SAMPLE_EXPENSES:
        expense = expense_service.add_expense(
            date=expense_date,
            category=category,
            amount=amount,
            description=description,
            is_paid=is_paid,
            due_date=due_date,
            details=details,
        )
        stored[category] = expense
    expense_service.set_total_investment(Decimal("100000"))
    return stored


@pytest.fixture
def admin_user(user_service):
    """Create the default admin with every permission."""
    return user_service.create_user(**DEFAULT_ADMIN)


@pytest.fixture
def make_expense():
    """Build Expense entities without a store."""

    def _make(
        id,
        expense_date,
        amount="100",
        category=ExpenseCategory.MISCELLANEOUS,
        is_paid=True,
        due_date=None,
        description="Test expense",
    ):
        return Expense(
            id=id,
            date=expense_date,
            category=category,
            amount=Decimal(amount),
            description=description,
            is_paid=is_paid,
            due_date=due_date,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_args(temp_db, session_path):
    """Global CLI options pointing at the temporary database and session file."""
    return ["--db-path", temp_db.database_path, "--session-path", session_path]


@pytest.fixture
def logged_in_admin(cli_runner, cli_args):
    """Bootstrap the farm through the CLI and log in as the default admin."""
    from farmledger.cli.main import cli

    result = cli_runner.invoke(cli, cli_args + ["init-farm"])
    assert result.exit_code == 0, result.output
    result = cli_runner.invoke(
        cli,
        cli_args + ["login", "--email", DEFAULT_ADMIN["email"], "--password", "secret123"],
    )
    assert result.exit_code == 0, result.output
    return cli_args


@pytest.fixture
def today():
    """Fixed reference date inside the sample season."""
    return date(2025, 5, 15)


@pytest.fixture
def file_session_store(session_path):
    """Create a file-backed session store in a temporary directory."""
    return create_session_store(session_path=session_path)
