"""Forward-only schema migrations for the SQLite task store.

Applied versions are recorded in ``schema_version``; on every connect the
runner applies whatever is newer than the recorded maximum, each migration in
its own transaction.
"""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import UTC, datetime

from todolist_service.utils.logger import get_logger


class Migration(ABC):
    """Base class for database migrations."""

    @property
    @abstractmethod
    def version(self) -> int:
        """Migration version number (sequential)."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of the migration."""

    @abstractmethod
    def up(self, connection: sqlite3.Connection) -> None:
        """Execute forward migration."""


class MigrationRunner:
    """Applies pending migrations and reports the schema history."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self.connection.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY,
                description TEXT NOT NULL,
                applied_at DATETIME NOT NULL
            )
        """)
        self.connection.commit()

    def get_current_version(self) -> int:
        """Highest applied version, 0 for a fresh database."""
        row = self.connection.execute("SELECT MAX(version) FROM schema_version").fetchone()
        return row[0] if row[0] is not None else 0

    def pending(self, migrations: Iterable[Migration]) -> list[Migration]:
        """Migrations newer than the current version, in version order."""
        current = self.get_current_version()
        return sorted(
            (m for m in migrations if m.version > current), key=lambda m: m.version
        )

    def run_migration(self, migration: Migration) -> None:
        """Apply a single migration and record it.

        Raises:
            ValueError: If the migration is not newer than the current version
            RuntimeError: If the migration fails (the transaction is rolled back)
        """
        current = self.get_current_version()
        if migration.version <= current:
            raise ValueError(
                f"Migration version {migration.version} is not greater than "
                f"current version {current}"
            )

        try:
            migration.up(self.connection)
            self.connection.execute(
                "INSERT INTO schema_version (version, description, applied_at) "
                "VALUES (?, ?, ?)",
                (migration.version, migration.description, datetime.now(UTC).isoformat()),
            )
            self.connection.commit()
        except sqlite3.Error as e:
            self.connection.rollback()
            raise RuntimeError(f"Migration {migration.version} failed: {e}") from e

        get_logger().info(
            "applied migration %03d: %s", migration.version, migration.description
        )

    def run_migrations(self, migrations: Iterable[Migration]) -> int:
        """Apply all pending migrations.

        Returns:
            Number of migrations applied
        """
        pending = self.pending(migrations)
        for migration in pending:
            self.run_migration(migration)
        return len(pending)

    def get_migration_history(self) -> list[dict]:
        """Applied migrations as dicts with version, description and applied_at."""
        cursor = self.connection.execute(
            "SELECT version, description, applied_at FROM schema_version ORDER BY version"
        )
        return [
            {"version": row[0], "description": row[1], "applied_at": row[2]}
            for row in cursor.fetchall()
        ]


def get_current_version(connection: sqlite3.Connection) -> int:
    """Helper function to get current schema version."""
    return MigrationRunner(connection).get_current_version()


def run_migrations(connection: sqlite3.Connection, migrations: Iterable[Migration]) -> int:
    """Helper function to run migrations."""
    return MigrationRunner(connection).run_migrations(migrations)
