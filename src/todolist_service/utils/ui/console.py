"""Console utilities for the todolist CLI."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Get a shared Rich Console so all commands render alike."""
    return Console(highlight=highlight)
