"""Repository interfaces for the todo list service.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- todolist_service.adapters.sqlite (SQLite storage)
"""

from .repository import TaskRepository

__all__ = [
    "TaskRepository",
]
