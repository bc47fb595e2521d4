"""Full-screen flowmodoro timer UI."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from flowfast_cli.config import KeysConfig
from flowfast_cli.ui.formatters import format_seconds

from .controller import SessionController
from .keyboard import get_keyboard_handler
from .state import RunState, SessionPhase, SessionSnapshot, break_for

APP_TITLE = "FlowFast"
APP_SUBTITLE = "The fastest flowmodoro"

ICON_GLYPHS = {"play": "▶", "pause": "⏸", "stop": "■"}


@dataclass(frozen=True)
class Control:
    """One of the three timer buttons."""

    name: str
    visible: bool
    icon: str

    @property
    def glyph(self) -> str:
        return ICON_GLYPHS[self.icon]


@dataclass(frozen=True)
class ControlsView:
    """What the screen shows for a given snapshot."""

    title: str
    counter: str
    take_break: Control
    toggle: Control
    handle_break: Control

    @property
    def controls(self) -> tuple[Control, Control, Control]:
        return (self.take_break, self.toggle, self.handle_break)

    @property
    def visible_controls(self) -> list[Control]:
        return [control for control in self.controls if control.visible]

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot) -> ControlsView:
        on_break = snapshot.phase == SessionPhase.BREAK
        paused = snapshot.run_state == RunState.PAUSED

        toggle_icon = "play" if paused or snapshot.phase == SessionPhase.IDLE else "pause"
        return cls(
            title="Take a break" if on_break else "Focus",
            counter=format_seconds(snapshot.displayed_seconds),
            take_break=Control(
                "take_break", snapshot.phase == SessionPhase.FOCUSED, "stop"
            ),
            toggle=Control("toggle", not on_break, toggle_icon),
            handle_break=Control(
                "handle_break", on_break, "play" if paused else "stop"
            ),
        )


def break_finished(before: SessionSnapshot, after: SessionSnapshot) -> bool:
    """True when a running break ended between two snapshots.

    Only meaningful around a tick run: a user ending the break early goes
    through a key press, never through the scheduler.
    """
    return (
        before.phase == SessionPhase.BREAK
        and before.run_state == RunState.PLAYING
        and after.phase == SessionPhase.FOCUSED
    )


def _control_label(control: Control) -> str:
    if control.name == "take_break":
        return "take a break"
    if control.name == "toggle":
        return "start" if control.icon == "play" else "pause"
    return "start break" if control.icon == "play" else "end break"


class TimerDisplay:
    """Manages the fullscreen timer display."""

    def __init__(
        self,
        console: Console | None = None,
        keys: KeysConfig | None = None,
        refresh_per_second: int = 4,
        bell_on_break_end: bool = True,
    ):
        self.console = console or Console()
        self.keys = keys or KeysConfig()
        self.refresh_per_second = refresh_per_second
        self.bell_on_break_end = bell_on_break_end

    def create_layout(self, snapshot: SessionSnapshot) -> Layout:
        """Create the timer layout with all components."""
        view = ControlsView.from_snapshot(snapshot)

        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        header_text = Text(APP_TITLE, style="bold cyan", justify="center")
        header_text.append(f"  {APP_SUBTITLE}", style="dim")
        layout["header"].update(Align.center(header_text, vertical="middle"))

        layout["body"].update(
            Align.center(self._create_body_content(view, snapshot), vertical="middle")
        )
        layout["footer"].update(
            Align.center(self._create_footer_text(view), vertical="middle")
        )
        return layout

    def _create_body_content(
        self, view: ControlsView, snapshot: SessionSnapshot
    ) -> Group:
        if snapshot.run_state == RunState.PAUSED:
            color = "yellow"
        elif snapshot.phase == SessionPhase.BREAK:
            color = "green"
        else:
            color = "cyan"

        buttons = Text(justify="center")
        for control in view.visible_controls:
            buttons.append(f" [{control.glyph}] ", style=f"bold {color}")

        return Group(
            Text(view.title, style="bold white", justify="center"),
            Text(""),
            Text(view.counter, style=f"bold {color}", justify="center"),
            Text(""),
            buttons,
        )

    def _create_footer_text(self, view: ControlsView) -> Text:
        """Create footer with keyboard hints."""
        bindings = {
            "take_break": self.keys.take_break,
            "toggle": self.keys.toggle,
            "handle_break": self.keys.handle_break,
        }
        hints = [
            f"'{bindings[control.name]}' {_control_label(control)}"
            for control in view.visible_controls
        ]
        hints.append(f"'{self.keys.quit}' quit")
        return Text("  •  ".join(hints), style="dim", justify="center")

    def run_timer(
        self,
        controller: SessionController,
        keyboard=None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> str:
        """
        Run the fullscreen timer until the user quits.

        Returns 'stopped' on quit or 'interrupted' on Ctrl-C. The tick is
        cancelled and the terminal restored either way.
        """
        keyboard = keyboard or get_keyboard_handler()
        actions = {
            self.keys.toggle: controller.toggle,
            self.keys.take_break: controller.take_break,
            self.keys.handle_break: controller.handle_break,
        }
        try:
            with Live(
                self.create_layout(controller.snapshot()),
                console=self.console,
                refresh_per_second=self.refresh_per_second,
                screen=True,
            ) as live:
                while True:
                    key = keyboard.get_key()
                    if key == self.keys.quit:
                        return "stopped"

                    action = actions.get(key)
                    if action is not None:
                        action()

                    before = controller.snapshot()
                    controller.scheduler.run_pending()
                    after = controller.snapshot()
                    if self.bell_on_break_end and break_finished(before, after):
                        self.console.bell()

                    live.update(self.create_layout(after))
                    sleep(1 / self.refresh_per_second)

        except KeyboardInterrupt:
            return "interrupted"
        finally:
            controller.close()
            keyboard.stop()


def show_summary_message(snapshot: SessionSnapshot, console: Console | None = None):
    """Show where the session stood when the timer was closed."""
    console = console or Console()

    if snapshot.phase == SessionPhase.BREAK:
        body = f"Break remaining: {format_seconds(snapshot.break_seconds)}"
    else:
        body = (
            f"Focused for: {format_seconds(snapshot.focus_seconds)}\n"
            f"Break earned: {format_seconds(break_for(snapshot.focus_seconds))}"
        )

    panel = Panel(
        f"""[bold cyan]{APP_TITLE} closed[/bold cyan]

{body}""",
        border_style="cyan",
        padding=(1, 2),
    )
    console.print(panel)
