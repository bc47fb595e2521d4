"""Main entry point for FlowFast CLI."""

import typer

from flowfast_cli import __version__
from flowfast_cli.commands import config
from flowfast_cli.commands.decorators import command_wrapper
from flowfast_cli.config import get_config_manager
from flowfast_cli.models.session import (
    SessionController,
    TickScheduler,
    TimerDisplay,
    show_summary_message,
)
from flowfast_cli.utils.logger import get_logger, log_file
from flowfast_cli.utils.typer_helpers import SuggestingGroup
from flowfast_cli.utils.ui.console import get_console

app = typer.Typer(
    name="flowfast",
    cls=SuggestingGroup,
    help="The fastest flowmodoro: focus as long as you like, earn a fifth of it as a break",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]FlowFast CLI[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"Log file: [dim]{log_file()}[/dim]")


@app.command()
@command_wrapper
def start(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Start the fullscreen flowmodoro timer."""
    settings = get_config_manager(profile).config
    get_logger(settings.log.level)
    timer_console = get_console(color=settings.ui.color)

    controller = SessionController(TickScheduler())
    display = TimerDisplay(
        timer_console,
        keys=settings.keys,
        refresh_per_second=settings.ui.refresh_per_second,
        bell_on_break_end=settings.ui.bell_on_break_end,
    )

    result = display.run_timer(controller)

    show_summary_message(controller.snapshot(), timer_console)
    if result == "interrupted":
        timer_console.print("[yellow]Timer interrupted[/yellow]")


if __name__ == "__main__":
    app()
