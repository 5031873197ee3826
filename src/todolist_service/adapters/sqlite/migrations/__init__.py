"""Database migration system for the SQLite task store."""

from .runner import (
    Migration,
    MigrationRunner,
    get_current_version,
    run_migrations,
)

__all__ = [
    "Migration",
    "MigrationRunner",
    "get_current_version",
    "run_migrations",
]
