"""Statistics commands."""

import typer

from todolist_service.utils.typer_helpers import SuggestingGroup

from .common import OutputOption, open_session, show
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task statistics and completion streaks")


@app.command("show")
@command_wrapper
async def show_statistics(output: str | None = OutputOption) -> None:
    """Show counts, completion rates, priorities, categories and streaks."""
    async with open_session() as (service, owner_id):
        statistics = await service.get_statistics(owner_id)
    show(statistics, output)


@app.command("categories")
@command_wrapper
async def list_categories(output: str | None = OutputOption) -> None:
    """List categories used by active tasks."""
    async with open_session() as (service, owner_id):
        categories = await service.list_categories(owner_id)
    show(categories, output)
