"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

from todolist_service.adapters.sqlite import query_builder
from todolist_service.adapters.sqlite.schema import TASK_COLUMNS
from todolist_service.adapters.sqlite.utils import row_to_task, task_to_params
from todolist_service.exceptions import StaleTaskError, StoreError
from todolist_service.models import Task, TaskFilters
from todolist_service.repositories import TaskRepository

# Stay well below SQLite's bound-parameter limit for IN (...) lists
_ID_CHUNK_SIZE = 500

_MUTABLE_COLUMNS = (
    "title",
    "description",
    "priority",
    "category",
    "is_completed",
    "completed_at",
    "is_deleted",
    "updated_at",
)


def _chunks(ids: list[str]) -> Iterator[list[str]]:
    for start in range(0, len(ids), _ID_CHUNK_SIZE):
        yield ids[start : start + _ID_CHUNK_SIZE]


def _unique(task_ids: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(task_ids))


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository.

    The connection is injected (see ``adapters.sqlite.connection.connect``);
    the repository never opens one itself.
    """

    def __init__(self, connection: sqlite3.Connection):
        """Initialize SQLite task repository.

        Args:
            connection: Configured connection with the schema applied
        """
        self.connection = connection

    def _fetch(self, sql: str, params: list[Any] | tuple = ()) -> list[sqlite3.Row]:
        try:
            return self.connection.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read tasks: {e}") from e

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Commit on success, roll back on any error."""
        try:
            with self.connection:
                yield self.connection
        except sqlite3.Error as e:
            raise StoreError(f"Failed to write tasks: {e}") from e

    async def list_all(
        self,
        owner_id: str,
        filters: TaskFilters,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Task]:
        """List tasks with filtering, sorting and pagination done in SQL."""
        query, params = query_builder.build_select(
            owner_id, filters, limit=limit, offset=offset
        )
        return [row_to_task(row) for row in self._fetch(query, params)]

    async def count(self, owner_id: str, filters: TaskFilters) -> int:
        query, params = query_builder.build_count(owner_id, filters)
        return self._fetch(query, params)[0][0]

    async def get(self, owner_id: str, task_id: str) -> Task | None:
        """Get a specific task by ID."""
        rows = self._fetch(
            "SELECT * FROM tasks WHERE id = ? AND owner_id = ?", (task_id, owner_id)
        )
        return row_to_task(rows[0]) if rows else None

    async def get_many(self, owner_id: str, task_ids: Iterable[str]) -> list[Task]:
        tasks: list[Task] = []
        for chunk in _chunks(_unique(task_ids)):
            placeholders = ", ".join("?" for _ in chunk)
            rows = self._fetch(
                f"SELECT * FROM tasks WHERE owner_id = ? AND id IN ({placeholders}) "
                "ORDER BY rowid",
                [owner_id, *chunk],
            )
            tasks.extend(row_to_task(row) for row in rows)
        return tasks

    async def add(self, task: Task) -> Task:
        """Insert a new task."""
        values = task_to_params(task)
        columns = ", ".join(TASK_COLUMNS)
        placeholders = ", ".join("?" for _ in TASK_COLUMNS)
        with self._transaction() as conn:
            conn.execute(
                f"INSERT INTO tasks ({columns}) VALUES ({placeholders})",
                [values[column] for column in TASK_COLUMNS],
            )
        return task

    async def save(self, task: Task) -> Task:
        """Update a task, checking that nobody saved it since it was read."""
        with self._transaction() as conn:
            self._update(conn, task)
        return task.model_copy(update={"version": task.version + 1})

    async def save_many(self, tasks: list[Task]) -> int:
        """Update several tasks atomically."""
        if not tasks:
            return 0
        with self._transaction() as conn:
            for task in tasks:
                self._update(conn, task)
        return len(tasks)

    def _update(self, conn: sqlite3.Connection, task: Task) -> None:
        values = task_to_params(task)
        set_parts = [f"{column} = ?" for column in _MUTABLE_COLUMNS]
        # Always increment version
        set_parts.append("version = version + 1")
        params = [values[column] for column in _MUTABLE_COLUMNS]
        params.extend([task.id, task.owner_id, task.version])

        cursor = conn.execute(
            f"UPDATE tasks SET {', '.join(set_parts)} "
            "WHERE id = ? AND owner_id = ? AND version = ?",
            params,
        )
        if cursor.rowcount == 0:
            raise StaleTaskError(
                f"Task {task.id} was modified or removed since it was loaded"
            )

    async def remove(self, owner_id: str, task_id: str) -> bool:
        """Delete a task permanently."""
        with self._transaction() as conn:
            cursor = conn.execute(
                "DELETE FROM tasks WHERE id = ? AND owner_id = ?", (task_id, owner_id)
            )
        return cursor.rowcount > 0

    async def remove_many(self, owner_id: str, task_ids: Iterable[str]) -> int:
        removed = 0
        with self._transaction() as conn:
            for chunk in _chunks(_unique(task_ids)):
                placeholders = ", ".join("?" for _ in chunk)
                cursor = conn.execute(
                    f"DELETE FROM tasks WHERE owner_id = ? AND id IN ({placeholders})",
                    [owner_id, *chunk],
                )
                removed += cursor.rowcount
        return removed

    async def snapshot(self, owner_id: str) -> list[Task]:
        """Load all of an owner's tasks, including the recycle bin."""
        rows = self._fetch(
            "SELECT * FROM tasks WHERE owner_id = ? ORDER BY created_at, rowid",
            (owner_id,),
        )
        return [row_to_task(row) for row in rows]

    async def list_categories(self, owner_id: str) -> list[str]:
        rows = self._fetch(
            """SELECT DISTINCT category FROM tasks
               WHERE owner_id = ? AND is_deleted = 0
                 AND category IS NOT NULL AND category != ''
               ORDER BY category""",
            (owner_id,),
        )
        return [row[0] for row in rows]

    async def close(self) -> None:
        """Close the injected connection; the repository is unusable afterwards."""
        self.connection.close()
