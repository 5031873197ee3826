"""Configuration management commands."""

import uuid
from typing import Any

import typer

from todolist_service.models.config_models import Context
from todolist_service.services.config_service import get_config_service
from todolist_service.utils.exit_codes import ERROR_INVALID_ARGS
from todolist_service.utils.typer_helpers import SuggestingGroup
from todolist_service.utils.ui.console import get_console
from todolist_service.utils.ui.formatters import format_info, format_success

from .common import OutputOption, show
from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
context_app = typer.Typer(cls=SuggestingGroup, help="Manage database/owner contexts")
app.add_typer(context_app, name="context")

console = get_console()


def parse_value(value: str) -> Any:
    """Convert CLI text to bool or int where it looks like one."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit():
        return int(value)
    return value


def _unknown_key(key: str) -> AppError:
    return AppError(
        f"Unknown configuration key '{key}'. Run 'config show' to list keys",
        ERROR_INVALID_ARGS,
    )


@app.command("show")
@command_wrapper
def show_config(output: str | None = OutputOption) -> None:
    """Show all settings and the current context."""
    config_service = get_config_service()
    data = {
        **config_service.settings(),
        "current_context": config_service.config.current_context_name,
        "config_file": str(config_service.config_path),
    }
    show(data, output or "table")


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., output.format)"),
) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise _unknown_key(key) from e
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., ui.page_size)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    parsed_value = parse_value(value)
    try:
        get_config_service().set(key, parsed_value)
    except KeyError as e:
        raise _unknown_key(key) from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset settings to defaults. Contexts are kept."""
    if not yes:
        msg = "all settings" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_info("Cancelled")
            raise typer.Exit(0)

    try:
        get_config_service().reset(key)
    except KeyError as e:
        raise _unknown_key(key) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")


@context_app.command("list")
@command_wrapper
def list_contexts(output: str | None = OutputOption) -> None:
    """List configured contexts; the active one is marked."""
    config_service = get_config_service()
    current = config_service.config.current_context_name
    rows = [
        {"active": ctx.name == current, **ctx.model_dump()}
        for ctx in config_service.list_contexts()
    ]
    show(rows, output or "table")


@context_app.command("add")
@command_wrapper
def add_context(
    name: str = typer.Argument(..., help="Context name"),
    db: str | None = typer.Option(
        None, "--db", help="SQLite database path (default: <data dir>/<name>.db)"
    ),
    owner: str | None = typer.Option(
        None, "--owner", help="Owner id (default: a new random id)"
    ),
    description: str = typer.Option("", "--description", "-d", help="Description"),
    use: bool = typer.Option(False, "--use", help="Switch to the new context"),
) -> None:
    """Add a context binding a database to an owner id."""
    config_service = get_config_service()
    context = Context(
        name=name,
        source=db or str(config_service.data_dir / f"{name}.db"),
        owner_id=owner or str(uuid.uuid4()),
        description=description,
    )
    try:
        config_service.add_context(context)
        if use:
            config_service.use_context(name)
    except ValueError as e:
        raise AppError(str(e), ERROR_INVALID_ARGS) from e
    format_success(f"Context added: {name}")


@context_app.command("use")
@command_wrapper
def use_context(name: str = typer.Argument(..., help="Context name")) -> None:
    """Switch the active context."""
    try:
        context = get_config_service().use_context(name)
    except ValueError as e:
        raise AppError(str(e), ERROR_INVALID_ARGS) from e
    format_success(f"Switched to context '{context.name}'")


@context_app.command("remove")
@command_wrapper
def remove_context(
    name: str = typer.Argument(..., help="Context name"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Remove a context. Its database file is left in place."""
    if not force:
        if not typer.confirm(f"Remove context {name}?"):
            format_info("Cancelled")
            raise typer.Exit(0)
    try:
        get_config_service().remove_context(name)
    except ValueError as e:
        raise AppError(str(e), ERROR_INVALID_ARGS) from e
    format_success(f"Context removed: {name}")
