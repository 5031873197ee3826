"""Database schema definitions for the SQLite task store.

Owners are external to this service: tasks reference them by opaque id only,
so there is no users table to join against.
"""

from __future__ import annotations

# Tasks table - main task entity
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    owner_id TEXT NOT NULL,
    title TEXT NOT NULL CHECK (length(title) BETWEEN 1 AND 200),
    description TEXT CHECK (description IS NULL OR length(description) <= 1000),
    priority INTEGER NOT NULL DEFAULT 0 CHECK (priority BETWEEN 0 AND 4),
    category TEXT CHECK (category IS NULL OR length(category) <= 50),
    is_completed BOOLEAN NOT NULL DEFAULT 0,
    completed_at DATETIME,
    is_deleted BOOLEAN NOT NULL DEFAULT 0,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    version INTEGER NOT NULL DEFAULT 1,
    CHECK ((is_completed = 1) = (completed_at IS NOT NULL))
)
"""

# Tasks indexes
CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_owner ON tasks(owner_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_owner_state ON tasks(owner_id, is_deleted, is_completed)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_owner_category ON tasks(owner_id, category)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_created ON tasks(created_at)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_updated ON tasks(updated_at)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_completed_at ON tasks(completed_at)",
]

# All table creation statements in order
ALL_TABLES = [
    CREATE_TASKS_TABLE,
]

# All index creation statements
ALL_INDEXES = CREATE_TASK_INDEXES

# Columns written on insert/update, in order
TASK_COLUMNS = (
    "id",
    "owner_id",
    "title",
    "description",
    "priority",
    "category",
    "is_completed",
    "completed_at",
    "is_deleted",
    "created_at",
    "updated_at",
    "version",
)
