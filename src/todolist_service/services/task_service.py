"""Task service - Business logic for task operations.

This service layer sits between callers (CLI commands, an HTTP layer, ...)
and the task repository. Every operation is scoped to the owner id it is
given; a task that does not exist, belongs to another owner, or is in the
wrong lifecycle state produces the same not-found outcome (``None``,
``False`` or a zero count) so callers cannot probe other owners' data.

Store failures (``StoreError``) are never caught here.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from todolist_service.adapters.sqlite import SqliteTaskRepository, connect
from todolist_service.models import (
    PagedResult,
    SortField,
    Task,
    TaskCreate,
    TaskFilters,
    TaskQuery,
    TaskStatistics,
    TaskUpdate,
)
from todolist_service.models.config_models import Context
from todolist_service.repositories import TaskRepository
from todolist_service.services import lifecycle
from todolist_service.services.config_service import get_config_service
from todolist_service.services.lifecycle import Transition
from todolist_service.services.statistics import compute_statistics
from todolist_service.utils.logger import get_logger


def utc_now() -> datetime:
    return datetime.now(UTC)


class TaskService:
    """Service for task business logic.

    This service encapsulates business rules and orchestrates task operations
    using the task repository.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
            clock: Returns the current aware datetime (injectable for tests)
        """
        self.repository = task_repository
        self.clock = clock
        self.logger = get_logger("task_service")

    async def close(self) -> None:
        """Release the repository's store connection."""
        await self.repository.close()

    async def __aenter__(self) -> TaskService:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_tasks(self, owner_id: str, query: TaskQuery) -> PagedResult:
        """List one page of an owner's tasks.

        Args:
            owner_id: Owner whose tasks are listed
            query: Filters, sort order and page

        Returns:
            PagedResult; a page past the end has no items but correct counts
        """
        total_count = await self.repository.count(owner_id, query)
        items = await self.repository.list_all(
            owner_id, query, limit=query.page_size, offset=query.offset
        )
        result = PagedResult.from_page(items, total_count, query)
        self.logger.info(
            "listed %d/%d tasks for owner %s (page %d)",
            len(items),
            total_count,
            owner_id,
            query.page,
        )
        return result

    async def get_task(
        self, owner_id: str, task_id: str, *, include_deleted: bool = False
    ) -> Task | None:
        """Get a specific task by ID.

        Args:
            owner_id: Owner the task must belong to
            task_id: Unique identifier for the task
            include_deleted: Also return tasks in the recycle bin

        Returns:
            Task object, or None if not found
        """
        task = await self.find_task(owner_id, task_id)
        if task is None or (task.is_deleted and not include_deleted):
            self.logger.warning("owner %s requested missing task %s", owner_id, task_id)
            return None
        return task

    async def find_task(self, owner_id: str, task_id: str) -> Task | None:
        """Look up a task in any state without logging a miss.

        Used to probe whether user input is a full id before treating it as
        a suffix.
        """
        return await self.repository.get(owner_id, task_id)

    async def list_active_tasks(self, owner_id: str) -> list[Task]:
        """All active tasks, newest first."""
        return await self.repository.list_all(owner_id, TaskFilters())

    async def list_completed_tasks(self, owner_id: str) -> list[Task]:
        """Completed active tasks, most recently completed first."""
        filters = TaskFilters(is_completed=True, sort_by=SortField.COMPLETED_AT)
        return await self.repository.list_all(owner_id, filters)

    async def list_pending_tasks(self, owner_id: str) -> list[Task]:
        """Pending active tasks, most urgent first."""
        filters = TaskFilters(is_completed=False, sort_by=SortField.PRIORITY)
        return await self.repository.list_all(owner_id, filters)

    async def list_deleted_tasks(self, owner_id: str) -> list[Task]:
        """Tasks in the recycle bin, most recently deleted first."""
        filters = TaskFilters(deleted_only=True, sort_by=SortField.UPDATED_AT)
        return await self.repository.list_all(owner_id, filters)

    async def list_categories(self, owner_id: str) -> list[str]:
        """Distinct categories in use by active tasks, alphabetically."""
        return await self.repository.list_categories(owner_id)

    async def get_statistics(self, owner_id: str) -> TaskStatistics:
        """Aggregate statistics over the owner's whole task history."""
        tasks = await self.repository.snapshot(owner_id)
        statistics = compute_statistics(tasks, self.clock())
        self.logger.info(
            "statistics for owner %s: total=%d completed=%d pending=%d deleted=%d",
            owner_id,
            statistics.total_count,
            statistics.completed_count,
            statistics.pending_count,
            statistics.deleted_count,
        )
        return statistics

    # ------------------------------------------------------------------
    # Single-task lifecycle
    # ------------------------------------------------------------------

    async def create_task(self, owner_id: str, data: TaskCreate) -> Task:
        """Create a new task.

        Args:
            owner_id: Owner of the new task
            data: Validated task fields

        Returns:
            Created Task object
        """
        task = await self.repository.add(
            lifecycle.create_task(owner_id, data, self.clock())
        )
        self.logger.info("owner %s created task %s", owner_id, task.id)
        return task

    async def _transition(
        self,
        owner_id: str,
        task_id: str,
        transition: Transition,
        apply: Callable[[Task, datetime], Task],
    ) -> Task | None:
        """Load, transition and save one task; None if not applicable."""
        task = await self.repository.get(owner_id, task_id)
        if task is None or not lifecycle.can_apply(task, transition):
            self.logger.warning(
                "owner %s cannot %s task %s: not found",
                owner_id,
                transition.value,
                task_id,
            )
            return None

        saved = await self.repository.save(apply(task, self.clock()))
        self.logger.info(
            "owner %s applied %s to task %s", owner_id, transition.value, task_id
        )
        return saved

    async def update_task(
        self, owner_id: str, task_id: str, updates: TaskUpdate
    ) -> Task | None:
        """Apply a partial update to an active task.

        Returns:
            Updated Task object, or None if not found
        """
        return await self._transition(
            owner_id,
            task_id,
            Transition.UPDATE,
            lambda task, now: lifecycle.apply_update(task, updates, now),
        )

    async def toggle_completion(self, owner_id: str, task_id: str) -> bool:
        """Flip an active task between pending and completed."""
        task = await self._transition(
            owner_id, task_id, Transition.TOGGLE, lifecycle.toggle_completion
        )
        return task is not None

    async def soft_delete_task(self, owner_id: str, task_id: str) -> bool:
        """Move an active task to the recycle bin."""
        task = await self._transition(
            owner_id, task_id, Transition.SOFT_DELETE, lifecycle.soft_delete
        )
        return task is not None

    async def restore_task(self, owner_id: str, task_id: str) -> bool:
        """Bring a task back from the recycle bin."""
        task = await self._transition(
            owner_id, task_id, Transition.RESTORE, lifecycle.restore
        )
        return task is not None

    async def permanent_delete_task(self, owner_id: str, task_id: str) -> bool:
        """Remove a task for good, whether or not it is in the recycle bin."""
        removed = await self.repository.remove(owner_id, task_id)
        if removed:
            self.logger.info("owner %s permanently deleted task %s", owner_id, task_id)
        else:
            self.logger.warning(
                "owner %s cannot permanently delete task %s: not found",
                owner_id,
                task_id,
            )
        return removed

    # ------------------------------------------------------------------
    # Batch operations
    # ------------------------------------------------------------------

    async def batch_toggle(
        self, owner_id: str, task_ids: Iterable[str], target_state: bool
    ) -> int:
        """Set the completion state of several active tasks.

        Tasks that are missing, foreign, deleted or already in
        ``target_state`` are skipped.

        Returns:
            Number of tasks whose state changed
        """
        now = self.clock()
        changed = [
            lifecycle.set_completion(task, target_state, now)
            for task in await self.repository.get_many(owner_id, task_ids)
            if lifecycle.can_apply(task, Transition.TOGGLE)
            and task.is_completed != target_state
        ]
        count = await self.repository.save_many(changed)
        self.logger.info(
            "owner %s batch-set %d tasks to %s",
            owner_id,
            count,
            "completed" if target_state else "pending",
        )
        return count

    async def batch_soft_delete(self, owner_id: str, task_ids: Iterable[str]) -> int:
        """Move several active tasks to the recycle bin.

        Returns:
            Number of tasks deleted
        """
        now = self.clock()
        deleted = [
            lifecycle.soft_delete(task, now)
            for task in await self.repository.get_many(owner_id, task_ids)
            if lifecycle.can_apply(task, Transition.SOFT_DELETE)
        ]
        count = await self.repository.save_many(deleted)
        self.logger.info("owner %s batch soft-deleted %d tasks", owner_id, count)
        return count

    async def batch_permanent_delete(
        self, owner_id: str, task_ids: Iterable[str]
    ) -> int:
        """Permanently remove several tasks in any state.

        Returns:
            Number of tasks removed
        """
        count = await self.repository.remove_many(owner_id, task_ids)
        if count == 0:
            self.logger.warning(
                "owner %s batch permanent delete matched no tasks", owner_id
            )
        else:
            self.logger.info("owner %s batch permanently deleted %d tasks", owner_id, count)
        return count


def get_task_service(context: Context | None = None) -> TaskService:
    """Build a TaskService over the database of a configuration context.

    Args:
        context: Context to open; defaults to the current one

    Returns:
        TaskService with a SQLite repository injected; the caller closes it
        (``await service.close()`` or ``async with``)
    """
    if context is None:
        context = get_config_service().get_current_context()
    return TaskService(SqliteTaskRepository(connect(context.source)))
