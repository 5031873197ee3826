"""Task helper utilities shared by CLI commands."""

from todolist_service.services.task_service import TaskService


class AmbiguousTaskIdError(ValueError):
    """Raised when a suffix matches more than one task."""


async def resolve_task_id(
    task_service: TaskService, owner_id: str, task_id_or_suffix: str
) -> str:
    """
    Resolve a task ID or suffix to a full task ID.

    If the input is already a task ID of this owner, returns it as-is.
    Otherwise it is matched as a suffix against the owner's tasks, including
    the recycle bin. An unmatched value is returned unchanged so the caller
    reports it as not found.

    Args:
        task_service: The task service instance
        owner_id: Owner whose tasks are searched
        task_id_or_suffix: Full task ID or suffix to resolve

    Returns:
        The full task ID

    Raises:
        AmbiguousTaskIdError: If the suffix matches several tasks
    """
    task = await task_service.find_task(owner_id, task_id_or_suffix)
    if task is not None:
        return task.id

    tasks = await task_service.list_active_tasks(owner_id)
    tasks += await task_service.list_deleted_tasks(owner_id)
    matches = [t.id for t in tasks if t.id.endswith(task_id_or_suffix)]

    if len(matches) > 1:
        raise AmbiguousTaskIdError(
            f"'{task_id_or_suffix}' matches {len(matches)} tasks; use more characters"
        )
    return matches[0] if matches else task_id_or_suffix


async def resolve_task_ids(
    task_service: TaskService, owner_id: str, refs: list[str]
) -> list[str]:
    """Resolve several IDs or suffixes, keeping their order."""
    return [await resolve_task_id(task_service, owner_id, ref) for ref in refs]
