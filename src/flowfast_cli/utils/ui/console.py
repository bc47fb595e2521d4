"""Shared rich console."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=4)
def get_console(highlight: bool = True, color: bool = True) -> Console:
    """Return the cached console; ``color=False`` strips all styling."""
    return Console(highlight=highlight, no_color=not color)
