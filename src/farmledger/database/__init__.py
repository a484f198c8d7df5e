"""Database layer for farmledger application."""

from farmledger.database.base import Database
from farmledger.database.factories import (
    create_memory_database,
    create_session_store,
    create_sqlite_database,
)
from farmledger.database.session_store import (
    FileSessionStore,
    MemorySessionStore,
    SessionStore,
)

__all__ = [
    "Database",
    "SessionStore",
    "FileSessionStore",
    "MemorySessionStore",
    "create_sqlite_database",
    "create_memory_database",
    "create_session_store",
]
