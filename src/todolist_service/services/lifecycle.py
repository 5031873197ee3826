"""Task lifecycle state machine.

States are ACTIVE_PENDING, ACTIVE_COMPLETED and DELETED (see ``TaskState``).
The functions here are pure: they take a task and the current time and
return the transitioned copy, leaving persistence to the caller. A
transition that is not allowed from the task's current state raises
``InvalidTransitionError``.

    create ──> ACTIVE_PENDING <──toggle──> ACTIVE_COMPLETED
                     │   ▲                     │   ▲
          soft_delete│   │restore   soft_delete│   │restore
                     ▼   │                     ▼   │
                  DELETED (completion flag kept as it was)

Permanent deletion is allowed from every state and simply removes the
record, so it has no function here beyond the permission check.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum

from todolist_service.exceptions import InvalidTransitionError
from todolist_service.models import Task, TaskCreate, TaskState, TaskUpdate

_ACTIVE = frozenset({TaskState.ACTIVE_PENDING, TaskState.ACTIVE_COMPLETED})


class Transition(str, Enum):
    """Mutations a task can go through after creation."""

    TOGGLE = "toggle"
    UPDATE = "update"
    SOFT_DELETE = "soft_delete"
    RESTORE = "restore"
    PERMANENT_DELETE = "permanent_delete"


ALLOWED_FROM: dict[Transition, frozenset[TaskState]] = {
    Transition.TOGGLE: _ACTIVE,
    Transition.UPDATE: _ACTIVE,
    Transition.SOFT_DELETE: _ACTIVE,
    Transition.RESTORE: frozenset({TaskState.DELETED}),
    Transition.PERMANENT_DELETE: frozenset(TaskState),
}


def can_apply(task: Task, transition: Transition) -> bool:
    """Whether ``transition`` is allowed from the task's current state."""
    return task.state in ALLOWED_FROM[transition]


def ensure_allowed(task: Task, transition: Transition) -> None:
    if not can_apply(task, transition):
        raise InvalidTransitionError(
            f"Cannot {transition.value} task {task.id} in state {task.state.value}"
        )


def create_task(owner_id: str, data: TaskCreate, now: datetime) -> Task:
    """Build a new ACTIVE_PENDING task with a fresh id."""
    return Task(
        id=str(uuid.uuid4()),
        owner_id=owner_id,
        title=data.title,
        description=data.description,
        priority=data.priority,
        category=data.category,
        is_completed=False,
        completed_at=None,
        is_deleted=False,
        created_at=now,
        updated_at=now,
    )


def _with_completion(completed: bool, now: datetime) -> dict:
    return {
        "is_completed": completed,
        "completed_at": now if completed else None,
    }


def toggle_completion(task: Task, now: datetime) -> Task:
    """Flip completion, setting or clearing completed_at."""
    ensure_allowed(task, Transition.TOGGLE)
    changes = _with_completion(not task.is_completed, now)
    return task.model_copy(update={**changes, "updated_at": now})


def set_completion(task: Task, completed: bool, now: datetime) -> Task:
    """Move an active task to the given completion state.

    completed_at is only touched when the state actually changes;
    updated_at is always bumped.
    """
    ensure_allowed(task, Transition.TOGGLE)
    changes: dict = {"updated_at": now}
    if task.is_completed != completed:
        changes.update(_with_completion(completed, now))
    return task.model_copy(update=changes)


def apply_update(task: Task, updates: TaskUpdate, now: datetime) -> Task:
    """Apply the fields present in ``updates`` to an active task."""
    ensure_allowed(task, Transition.UPDATE)
    changes = updates.provided_fields()
    completed = changes.pop("is_completed", None)

    updated = task.model_copy(update={**changes, "updated_at": now})
    if completed is not None:
        updated = set_completion(updated, completed, now)
    return updated


def soft_delete(task: Task, now: datetime) -> Task:
    """Move an active task to the recycle bin."""
    ensure_allowed(task, Transition.SOFT_DELETE)
    return task.model_copy(update={"is_deleted": True, "updated_at": now})


def restore(task: Task, now: datetime) -> Task:
    """Bring a task back from the recycle bin with its completion state intact."""
    ensure_allowed(task, Transition.RESTORE)
    return task.model_copy(update={"is_deleted": False, "updated_at": now})
