"""Typer helpers shared by the root app and its sub-apps."""

from difflib import get_close_matches

import click
import typer
from typer.core import TyperGroup

from flowfast_cli.ui.formatters import format_error
from flowfast_cli.utils.ui.console import get_console


def suggest_commands(attempted: str, commands: list[str], limit: int = 3) -> list[str]:
    """Commands starting with *attempted* first, then the closest spellings."""
    prefixed = sorted(name for name in commands if name.startswith(attempted))
    close = get_close_matches(attempted, commands, n=limit, cutoff=0.6)
    return list(dict.fromkeys(prefixed + close))[:limit]


class SuggestingGroup(TyperGroup):
    """Group that answers an unknown command with the nearest known ones.

    Used by ``flowfast`` and by ``flowfast config``, so ``flowfast strat`` and
    ``flowfast config res`` both point somewhere useful.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if not args:
                raise
            suggestions = suggest_commands(args[0], self.list_commands(ctx))
            if not suggestions:
                raise

            console = get_console()
            format_error(f'unknown command "{args[0]}" for "{ctx.command_path}"')
            console.print()
            if len(suggestions) == 1:
                console.print("[yellow]Did you mean this?[/yellow]")
            else:
                console.print("[yellow]Did you mean one of these?[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            raise typer.Exit(1) from e
