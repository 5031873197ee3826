"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from todolist_service.utils.ui.console import get_console


class SuggestingGroup(TyperGroup):
    """Typer group that answers a mistyped command with close matches.

    The lookup happens before delegating to Typer, so it does not depend on
    which click exception class the installed Typer raises.
    """

    def resolve_command(self, ctx, args):
        if args and not args[0].startswith("-") and self.get_command(ctx, args[0]) is None:
            attempted = args[0]
            suggestions = get_close_matches(
                attempted, list(self.commands), n=3, cutoff=0.6
            )
            if suggestions:
                console = get_console()
                console.print(
                    f'[red]Error:[/red] unknown command "{attempted}" for "{ctx.info_name}"'
                )
                console.print()
                if len(suggestions) == 1:
                    console.print("[yellow]Did you mean this?[/yellow]")
                else:
                    console.print("[yellow]Did you mean one of these?[/yellow]")
                for suggestion in suggestions:
                    console.print(f"        {suggestion}")
                raise typer.Exit(2)
        return super().resolve_command(ctx, args)
