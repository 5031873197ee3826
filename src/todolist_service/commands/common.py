"""Helpers shared by the command modules."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import typer
from pydantic import BaseModel

from todolist_service.services.config_service import get_config_service
from todolist_service.services.task_service import TaskService, get_task_service
from todolist_service.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from todolist_service.utils.task_helpers import (
    AmbiguousTaskIdError,
    resolve_task_ids,
)
from todolist_service.utils.ui.formatters import OUTPUT_FORMATS, format_output

from .decorators import AppError

OutputOption = typer.Option(
    None,
    "--output",
    "-o",
    help=f"Output format ({', '.join(OUTPUT_FORMATS)}); defaults to output.format",
)


@asynccontextmanager
async def open_session() -> AsyncIterator[tuple[TaskService, str]]:
    """TaskService and owner id for the current context, closed on exit."""
    context = get_config_service().get_current_context()
    async with get_task_service(context) as service:
        yield service, context.owner_id


def resolve_output(output: str | None) -> str:
    output = output or get_config_service().config.output.format
    if output not in OUTPUT_FORMATS:
        raise AppError(
            f"Unknown output format '{output}'. Choose from: {', '.join(OUTPUT_FORMATS)}",
            ERROR_INVALID_ARGS,
        )
    return output


def show(data: BaseModel | list[BaseModel] | Any, output: str | None) -> None:
    """Render models (or plain data) in the chosen output format."""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    elif isinstance(data, list):
        data = [
            item.model_dump(mode="json") if isinstance(item, BaseModel) else item
            for item in data
        ]
    format_output(data, resolve_output(output))


async def resolve_ids(service: TaskService, owner_id: str, refs: list[str]) -> list[str]:
    try:
        return await resolve_task_ids(service, owner_id, refs)
    except AmbiguousTaskIdError as e:
        raise AppError(str(e), ERROR_INVALID_ARGS) from e


def not_found(task_ref: str) -> AppError:
    return AppError(f"Task '{task_ref}' not found", ERROR_NOT_FOUND)
