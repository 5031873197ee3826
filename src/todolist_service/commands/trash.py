"""Recycle bin commands."""

import typer

from todolist_service.utils.exit_codes import ERROR_INVALID_ARGS
from todolist_service.utils.typer_helpers import SuggestingGroup
from todolist_service.utils.ui.formatters import format_info, format_success

from .common import OutputOption, not_found, open_session, resolve_ids, show
from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Recycle bin commands")


@app.command("list")
@command_wrapper
async def list_trash(output: str | None = OutputOption) -> None:
    """List tasks in the recycle bin, most recently deleted first."""
    async with open_session() as (service, owner_id):
        tasks = await service.list_deleted_tasks(owner_id)
    show(tasks, output)


@app.command("restore")
@command_wrapper
async def restore_tasks(
    task_ids: list[str] = typer.Argument(..., help="Task IDs or suffixes"),
) -> None:
    """Bring tasks back from the recycle bin."""
    async with open_session() as (service, owner_id):
        resolved = await resolve_ids(service, owner_id, task_ids)
        restored = [
            task_id
            for task_id in resolved
            if await service.restore_task(owner_id, task_id)
        ]
    if not restored:
        raise not_found(", ".join(task_ids))
    format_success(f"{len(restored)} of {len(task_ids)} task(s) restored")


@app.command("purge")
@command_wrapper
async def purge_tasks(
    task_ids: list[str] | None = typer.Argument(None, help="Task IDs or suffixes"),
    purge_all: bool = typer.Option(False, "--all", help="Empty the whole recycle bin"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Permanently delete tasks. This cannot be undone."""
    if bool(task_ids) == purge_all:
        raise AppError("Give task IDs or --all, not both", ERROR_INVALID_ARGS)

    async with open_session() as (service, owner_id):
        if purge_all:
            resolved = [task.id for task in await service.list_deleted_tasks(owner_id)]
            if not resolved:
                format_info("Recycle bin is already empty")
                return
        else:
            resolved = await resolve_ids(service, owner_id, task_ids)

        if not force:
            confirm = typer.confirm(f"Permanently delete {len(resolved)} task(s)?")
            if not confirm:
                format_info("Cancelled")
                raise typer.Exit(0)

        if len(resolved) == 1 and not purge_all:
            if not await service.permanent_delete_task(owner_id, resolved[0]):
                raise not_found(task_ids[0])
            format_success(f"Task permanently deleted: {resolved[0]}")
            return

        removed = await service.batch_permanent_delete(owner_id, resolved)
    format_success(f"{removed} task(s) permanently deleted")
