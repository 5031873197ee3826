"""Repository abstraction layer for the todo list service.

This module defines the abstract base class (interface) for task storage,
following the hexagonal architecture (Ports & Adapters) pattern.

Every method is scoped by owner id: an adapter must never read or write a
task whose owner differs from the one given, even when the caller supplies
that task's id directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from todolist_service.models import Task, TaskFilters


class TaskRepository(ABC):
    """Abstract base class for task persistence operations.

    Filtering, sorting and slicing are expected to be pushed down to the
    backing store.
    """

    @abstractmethod
    async def list_all(
        self,
        owner_id: str,
        filters: TaskFilters,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Task]:
        """List an owner's tasks matching ``filters``, sorted as requested.

        Args:
            owner_id: Owner whose tasks are listed
            filters: TaskFilters object specifying filter and sort criteria
            limit: Maximum number of tasks to return
            offset: Number of matching tasks to skip

        Returns:
            List of Task objects

        Raises:
            StoreError: If the store cannot be read
        """
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def count(self, owner_id: str, filters: TaskFilters) -> int:
        """Count an owner's tasks matching ``filters`` (ignores pagination)."""
        raise NotImplementedError(
            "TaskRepository.count() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, owner_id: str, task_id: str) -> Task | None:
        """Get one of the owner's tasks by ID, whatever its lifecycle state.

        Returns:
            Task object, or None if it does not exist or belongs to someone else
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def get_many(self, owner_id: str, task_ids: Iterable[str]) -> list[Task]:
        """Get the subset of ``task_ids`` that exist and belong to the owner."""
        raise NotImplementedError(
            "TaskRepository.get_many() must be implemented by adapter"
        )

    @abstractmethod
    async def add(self, task: Task) -> Task:
        """Persist a newly created task.

        Raises:
            StoreError: If the task cannot be stored
        """
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def save(self, task: Task) -> Task:
        """Write back a modified task.

        Returns:
            The stored task with its version incremented

        Raises:
            StaleTaskError: If the stored version differs from ``task.version``
        """
        raise NotImplementedError(
            "TaskRepository.save() must be implemented by adapter"
        )

    @abstractmethod
    async def save_many(self, tasks: list[Task]) -> int:
        """Write back several modified tasks in one transaction.

        Returns:
            Number of tasks written
        """
        raise NotImplementedError(
            "TaskRepository.save_many() must be implemented by adapter"
        )

    @abstractmethod
    async def remove(self, owner_id: str, task_id: str) -> bool:
        """Permanently remove a task.

        Returns:
            True if a task was removed
        """
        raise NotImplementedError(
            "TaskRepository.remove() must be implemented by adapter"
        )

    @abstractmethod
    async def remove_many(self, owner_id: str, task_ids: Iterable[str]) -> int:
        """Permanently remove several tasks in one transaction.

        Returns:
            Number of tasks removed
        """
        raise NotImplementedError(
            "TaskRepository.remove_many() must be implemented by adapter"
        )

    @abstractmethod
    async def snapshot(self, owner_id: str) -> list[Task]:
        """Load every task of the owner, active and deleted alike."""
        raise NotImplementedError(
            "TaskRepository.snapshot() must be implemented by adapter"
        )

    @abstractmethod
    async def list_categories(self, owner_id: str) -> list[str]:
        """Distinct non-empty categories of the owner's active tasks, sorted."""
        raise NotImplementedError(
            "TaskRepository.list_categories() must be implemented by adapter"
        )

    async def close(self) -> None:
        """Release the backing store. Adapters without resources keep this no-op."""
