"""Database connection setup for the SQLite task store.

Connections are created explicitly and handed to the repository that uses
them; there is no process-wide connection cache.
"""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from todolist_service.adapters.sqlite.migrations.m001_initial_schema import initial_migration
from todolist_service.adapters.sqlite.migrations.runner import Migration, MigrationRunner

MEMORY_DATABASE = ":memory:"

# All migrations, in order
MIGRATIONS: list[Migration] = [
    initial_migration,
]


def default_db_path() -> Path:
    """Default database location inside the platform data directory."""
    return Path(user_data_dir("todolist_service")) / "todolist.db"


def connect(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Open a configured connection and bring the schema up to date.

    Provides:
    - dict-like rows (sqlite3.Row)
    - foreign key enforcement
    - WAL journaling for file databases
    - owner-only permissions on newly created database files

    Args:
        db_path: Path to database file, ``":memory:"`` for a throwaway
            database, or None for the default location.

    Returns:
        sqlite3.Connection with all migrations applied
    """
    if str(db_path) == MEMORY_DATABASE:
        connection = sqlite3.connect(MEMORY_DATABASE, check_same_thread=False)
        _configure(connection, wal=False)
    else:
        path = default_db_path() if db_path is None else Path(db_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not path.exists()

        connection = sqlite3.connect(
            str(path),
            check_same_thread=False,
            timeout=30.0,  # Wait up to 30s for locks
        )
        _configure(connection, wal=True)

        if is_new_database:
            os.chmod(path, 0o600)

    MigrationRunner(connection).run_migrations(MIGRATIONS)
    return connection


def _configure(connection: sqlite3.Connection, *, wal: bool) -> None:
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    if wal:
        connection.execute("PRAGMA journal_mode = WAL")
