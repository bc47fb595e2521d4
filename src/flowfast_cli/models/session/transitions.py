"""Flowmodoro state machine as a pure transition function.

``transition`` never touches the scheduler. It returns the next values of
the session fields plus an ordered list of effects; the controller applies
the effects and feeds any posted messages back in before admitting the next
event.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .state import RunState, Session, SessionPhase, break_for


class Msg(str, Enum):
    """Messages understood by the session controller."""

    # User intents
    TOGGLE_STATE = "toggle_state"
    SET_BREAK = "set_break"
    HANDLE_BREAK = "handle_break"

    # Internal transitions
    SET_FOCUS = "set_focus"
    START_FOCUS = "start_focus"
    START_BREAK = "start_break"
    PAUSE = "pause"

    # Ticks
    INCREMENT_FOCUS = "increment_focus"
    DECREMENT_BREAK = "decrement_break"


USER_INTENTS = frozenset({Msg.TOGGLE_STATE, Msg.SET_BREAK, Msg.HANDLE_BREAK})
TICKS = frozenset({Msg.INCREMENT_FOCUS, Msg.DECREMENT_BREAK})


@dataclass(frozen=True)
class CancelTick:
    """Stop the running tick, if any."""


@dataclass(frozen=True)
class ScheduleTick:
    """Replace the running tick with one posting ``msg`` every second."""

    msg: Msg


@dataclass(frozen=True)
class Post:
    """Process ``msg`` right after the current one."""

    msg: Msg


Effect = CancelTick | ScheduleTick | Post


@dataclass(frozen=True)
class Transition:
    """Result of applying one message to a session."""

    phase: SessionPhase
    run_state: RunState
    focus_seconds: int
    break_seconds: int
    effects: tuple[Effect, ...] = field(default=())


def _stay(session: Session, *effects: Effect, **changes) -> Transition:
    values = {
        "phase": session.phase,
        "run_state": session.run_state,
        "focus_seconds": session.focus_seconds,
        "break_seconds": session.break_seconds,
    }
    values.update(changes)
    return Transition(effects=tuple(effects), **values)


def transition(session: Session, msg: Msg) -> Transition:
    """Compute the next session values and effects for ``msg``.

    Every (phase, run_state) pair is handled; a message that means nothing in
    the current state yields the session unchanged with no effects.
    """
    phase = session.phase
    playing = session.run_state == RunState.PLAYING

    if msg == Msg.TOGGLE_STATE:
        if phase == SessionPhase.BREAK:
            return _stay(session)
        if playing and phase != SessionPhase.IDLE:
            return _stay(session, CancelTick(), run_state=RunState.PAUSED)
        return _stay(
            session, CancelTick(), Post(Msg.SET_FOCUS), Post(Msg.START_FOCUS)
        )

    if msg == Msg.SET_BREAK:
        if phase != SessionPhase.FOCUSED:
            return _stay(session)
        return _stay(
            session,
            CancelTick(),
            phase=SessionPhase.BREAK,
            run_state=RunState.PAUSED,
            break_seconds=break_for(session.focus_seconds),
            focus_seconds=0,
        )

    if msg == Msg.HANDLE_BREAK:
        if phase != SessionPhase.BREAK:
            return _stay(session)
        if playing:
            return _stay(session, Post(Msg.SET_FOCUS))
        return _stay(session, Post(Msg.START_BREAK), run_state=RunState.PLAYING)

    if msg == Msg.SET_FOCUS:
        # Whatever was left of a break is forfeited
        return _stay(
            session,
            CancelTick(),
            phase=SessionPhase.FOCUSED,
            run_state=RunState.PAUSED,
            break_seconds=0,
        )

    if msg == Msg.START_FOCUS:
        return _stay(
            session, ScheduleTick(Msg.INCREMENT_FOCUS), run_state=RunState.PLAYING
        )

    if msg == Msg.START_BREAK:
        return _stay(session, ScheduleTick(Msg.DECREMENT_BREAK))

    if msg == Msg.INCREMENT_FOCUS:
        if phase != SessionPhase.FOCUSED or not playing:
            return _stay(session)
        return _stay(session, focus_seconds=session.focus_seconds + 1)

    if msg == Msg.DECREMENT_BREAK:
        if phase != SessionPhase.BREAK or not playing:
            return _stay(session)
        if session.break_seconds <= 0:
            return _stay(
                session,
                CancelTick(),
                Post(Msg.SET_FOCUS),
                run_state=RunState.PAUSED,
                break_seconds=0,
            )
        return _stay(session, break_seconds=session.break_seconds - 1)

    if msg == Msg.PAUSE:
        return _stay(session, run_state=RunState.PAUSED)

    raise ValueError(f"Unknown session message: {msg!r}")
