"""Main entry point for the todolist CLI."""

import typer

from todolist_service import __version__
from todolist_service.commands import config, stats, tasks, trash
from todolist_service.utils.typer_helpers import SuggestingGroup
from todolist_service.utils.ui.console import get_console

app = typer.Typer(
    name="todolist",
    cls=SuggestingGroup,
    help="Multi-owner to-do lists with a recycle bin and completion statistics",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(trash.app, name="trash", help="Recycle bin commands")
app.add_typer(stats.app, name="stats", help="Statistics and completion streaks")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]todolist[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
