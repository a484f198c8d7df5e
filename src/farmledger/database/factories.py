"""Factory functions for creating database and session store instances."""

import os
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Optional

from farmledger.database.memory import InMemoryDatabase
from farmledger.database.session_store import FileSessionStore
from farmledger.database.sqlalchemy_db import SQLAlchemyDatabase
from farmledger.domain.entities import Expense, User


def _default_data_dir() -> Path:
    """Return ~/.farmledger, creating it if needed."""
    data_dir = Path.home() / ".farmledger"
    data_dir.mkdir(exist_ok=True)
    return data_dir


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks FARMLEDGER_DB_PATH
            environment variable, then defaults to ~/.farmledger/farmledger.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("FARMLEDGER_DB_PATH")

    if database_path is None:
        database_path = str(_default_data_dir() / "farmledger.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)


def create_memory_database(
    expenses: Iterable[Expense] = (),
    users: Iterable[User] = (),
    total_investment: Decimal = Decimal("0"),
) -> InMemoryDatabase:
    """Create an in-memory database seeded with the given state."""
    return InMemoryDatabase(
        expenses=expenses, users=users, total_investment=total_investment
    )


def create_session_store(session_path: Optional[str] = None) -> FileSessionStore:
    """Create the file-backed session store.

    Args:
        session_path: Path to the session JSON file. If None, checks
            FARMLEDGER_SESSION_PATH, then defaults to ~/.farmledger/session.json

    Returns:
        FileSessionStore instance
    """
    if session_path is None:
        session_path = os.environ.get("FARMLEDGER_SESSION_PATH")

    if session_path is None:
        session_path = str(_default_data_dir() / "session.json")

    return FileSessionStore(session_path)
