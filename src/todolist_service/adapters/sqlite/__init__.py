"""SQLite adapter module - Local database storage implementation."""

from todolist_service.adapters.sqlite.connection import connect, default_db_path
from todolist_service.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = [
    "SqliteTaskRepository",
    "connect",
    "default_db_path",
]
