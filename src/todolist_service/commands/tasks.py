"""Task management commands."""

import typer

from todolist_service.models import TaskCreate, TaskQuery, TaskUpdate
from todolist_service.services.config_service import get_config_service
from todolist_service.utils.typer_helpers import SuggestingGroup
from todolist_service.utils.ui.formatters import format_info, format_success

from .common import OutputOption, not_found, open_session, resolve_ids, show
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")

PriorityOption = typer.Option(
    None, "--priority", "-p", min=0, max=4, help="Priority (0=normal .. 4=urgent)"
)


@app.command("add")
@command_wrapper
async def add_task(
    title: str = typer.Argument(..., help="Task title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="Task description"
    ),
    priority: int | None = PriorityOption,
    category: str | None = typer.Option(None, "--category", "-c", help="Category"),
    output: str | None = OutputOption,
) -> None:
    """Create a new task."""
    data = TaskCreate(
        title=title,
        description=description,
        priority=priority or 0,
        category=category,
    )
    async with open_session() as (service, owner_id):
        task = await service.create_task(owner_id, data)
    if output is None:
        format_success(f"Task created: {task.id}")
    else:
        show(task, output)


@app.command("list")
@command_wrapper
async def list_tasks(
    completed: bool | None = typer.Option(
        None, "--completed/--pending", help="Only completed or only pending tasks"
    ),
    category: str | None = typer.Option(None, "--category", "-c", help="Category"),
    priority: int | None = PriorityOption,
    sort: str = typer.Option(
        "created_at",
        "--sort",
        "-s",
        help="Sort by created_at, updated_at, priority, title or completed_at",
    ),
    ascending: bool = typer.Option(False, "--asc", help="Sort ascending"),
    include_deleted: bool = typer.Option(
        False, "--include-deleted", help="Include tasks in the recycle bin"
    ),
    page: int = typer.Option(1, "--page", help="Page number"),
    page_size: int | None = typer.Option(None, "--page-size", help="Tasks per page"),
    output: str | None = OutputOption,
) -> None:
    """List tasks, one page at a time."""
    query = TaskQuery(
        is_completed=completed,
        category=category,
        priority=priority,
        sort_by=sort,
        sort_ascending=ascending,
        include_deleted=include_deleted,
        page=page,
        page_size=page_size or get_config_service().config.ui.page_size,
    )
    async with open_session() as (service, owner_id):
        result = await service.list_tasks(owner_id, query)
    show(result, output)


@app.command("show")
@command_wrapper
async def show_task(
    task_id: str = typer.Argument(..., help="Task ID or suffix"),
    output: str | None = OutputOption,
) -> None:
    """Show one task, including tasks in the recycle bin."""
    async with open_session() as (service, owner_id):
        [resolved_id] = await resolve_ids(service, owner_id, [task_id])
        task = await service.get_task(owner_id, resolved_id, include_deleted=True)
    if task is None:
        raise not_found(task_id)
    show(task, output or "table")


@app.command("update")
@command_wrapper
async def update_task(
    task_id: str = typer.Argument(..., help="Task ID or suffix"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="New description (\"\" clears it)"
    ),
    priority: int | None = PriorityOption,
    category: str | None = typer.Option(
        None, "--category", "-c", help="New category (\"\" clears it)"
    ),
    output: str | None = OutputOption,
) -> None:
    """Edit an active task."""
    fields = {
        "title": title,
        "description": description,
        "priority": priority,
        "category": category,
    }
    updates = TaskUpdate(**{k: v for k, v in fields.items() if v is not None})
    if not updates.model_fields_set:
        format_info("Nothing to update")
        return

    async with open_session() as (service, owner_id):
        [resolved_id] = await resolve_ids(service, owner_id, [task_id])
        task = await service.update_task(owner_id, resolved_id, updates)
    if task is None:
        raise not_found(task_id)
    if output is None:
        format_success(f"Task updated: {task.id}")
    else:
        show(task, output)


@app.command("toggle")
@command_wrapper
async def toggle_task(
    task_id: str = typer.Argument(..., help="Task ID or suffix"),
) -> None:
    """Flip a task between pending and completed."""
    async with open_session() as (service, owner_id):
        [resolved_id] = await resolve_ids(service, owner_id, [task_id])
        if not await service.toggle_completion(owner_id, resolved_id):
            raise not_found(task_id)
        task = await service.get_task(owner_id, resolved_id)
    state = "completed" if task is not None and task.is_completed else "pending"
    format_success(f"Task {resolved_id} is now {state}")


@app.command("complete")
@command_wrapper
async def complete_tasks(
    task_ids: list[str] = typer.Argument(..., help="Task IDs or suffixes"),
    undo: bool = typer.Option(False, "--undo", help="Mark as pending instead"),
) -> None:
    """Mark one or more tasks as completed."""
    async with open_session() as (service, owner_id):
        resolved = await resolve_ids(service, owner_id, task_ids)
        changed = await service.batch_toggle(owner_id, resolved, target_state=not undo)
    state = "pending" if undo else "completed"
    format_success(f"{changed} of {len(task_ids)} task(s) marked {state}")


@app.command("delete")
@command_wrapper
async def delete_tasks(
    task_ids: list[str] = typer.Argument(..., help="Task IDs or suffixes"),
) -> None:
    """Move one or more tasks to the recycle bin."""
    async with open_session() as (service, owner_id):
        resolved = await resolve_ids(service, owner_id, task_ids)

        if len(resolved) == 1:
            if not await service.soft_delete_task(owner_id, resolved[0]):
                raise not_found(task_ids[0])
            format_success(f"Task moved to recycle bin: {resolved[0]}")
            return

        deleted = await service.batch_soft_delete(owner_id, resolved)
    format_success(f"{deleted} of {len(task_ids)} task(s) moved to recycle bin")
