"""Flowmodoro session: state machine, tick scheduler and timer UI."""

from .controller import SessionController
from .keyboard import KeyboardHandler
from .scheduler import TickHandle, TickScheduler
from .state import RunState, Session, SessionPhase, SessionSnapshot, break_for
from .transitions import Msg, transition
from .ui import ControlsView, TimerDisplay, show_summary_message

__all__ = [
    "Session",
    "SessionPhase",
    "RunState",
    "SessionSnapshot",
    "SessionController",
    "TickScheduler",
    "TickHandle",
    "Msg",
    "transition",
    "break_for",
    "KeyboardHandler",
    "ControlsView",
    "TimerDisplay",
    "show_summary_message",
]
