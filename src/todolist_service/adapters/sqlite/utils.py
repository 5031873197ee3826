"""Utility functions for the SQLite adapter."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from todolist_service.models import Task


def to_db_timestamp(value: datetime | None) -> str | None:
    """Serialize a datetime as fixed-width UTC ISO text.

    Fixed width keeps lexicographic order equal to chronological order, so
    timestamp columns sort correctly in SQL.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse a stored timestamp into an aware UTC datetime."""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary."""
    if row is None:
        return {}
    return dict(row)


def row_to_task(row: Any) -> Task:
    """Build a Task model from a tasks table row."""
    data = row_to_dict(row)
    data["is_completed"] = bool(data["is_completed"])
    data["is_deleted"] = bool(data["is_deleted"])
    for key in ("created_at", "updated_at", "completed_at"):
        data[key] = parse_datetime(data.get(key))
    return Task(**data)


def task_to_params(task: Task) -> dict[str, Any]:
    """Column values for a task, keyed by column name."""
    return {
        "id": task.id,
        "owner_id": task.owner_id,
        "title": task.title,
        "description": task.description,
        "priority": int(task.priority),
        "category": task.category,
        "is_completed": int(task.is_completed),
        "completed_at": to_db_timestamp(task.completed_at),
        "is_deleted": int(task.is_deleted),
        "created_at": to_db_timestamp(task.created_at),
        "updated_at": to_db_timestamp(task.updated_at),
        "version": task.version,
    }
