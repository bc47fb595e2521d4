"""Flowmodoro session state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .scheduler import TickHandle

BREAK_DIVISOR = 5


class SessionPhase(str, Enum):
    """Which phase of the flowmodoro cycle the user is in."""

    IDLE = "idle"
    FOCUSED = "focused"
    BREAK = "break"


class RunState(str, Enum):
    """Whether the active counter is advancing."""

    PAUSED = "paused"
    PLAYING = "playing"


def break_for(focus_seconds: int) -> int:
    """Break earned by a stretch of focus, in whole seconds."""
    return focus_seconds // BREAK_DIVISOR


@dataclass
class Session:
    """The single long-lived flowmodoro session.

    Only the controller mutates it. ``active_timer`` is the handle of the
    repeating tick currently driving one of the counters.
    """

    phase: SessionPhase = SessionPhase.IDLE
    run_state: RunState = RunState.PAUSED
    focus_seconds: int = 0
    break_seconds: int = 0
    active_timer: TickHandle | None = None

    @property
    def is_playing(self) -> bool:
        return self.run_state == RunState.PLAYING

    @property
    def is_paused(self) -> bool:
        return self.run_state == RunState.PAUSED

    @property
    def on_break(self) -> bool:
        return self.phase == SessionPhase.BREAK

    def snapshot(self) -> SessionSnapshot:
        """Freeze the observable part of the session."""
        return SessionSnapshot(
            phase=self.phase,
            run_state=self.run_state,
            focus_seconds=self.focus_seconds,
            break_seconds=self.break_seconds,
            timer_active=self.active_timer is not None,
        )


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable view of a session handed to the presentation layer."""

    phase: SessionPhase
    run_state: RunState
    focus_seconds: int
    break_seconds: int
    timer_active: bool = False

    @property
    def displayed_seconds(self) -> int:
        """The counter the user should currently see."""
        if self.phase == SessionPhase.BREAK:
            return self.break_seconds
        return self.focus_seconds

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "phase": self.phase.value,
            "run_state": self.run_state.value,
            "focus_seconds": self.focus_seconds,
            "break_seconds": self.break_seconds,
            "timer_active": self.timer_active,
        }
