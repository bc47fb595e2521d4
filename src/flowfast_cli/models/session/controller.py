"""Session controller: the single owner of the flowmodoro session."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

from .scheduler import TickScheduler
from .state import Session, SessionSnapshot
from .transitions import CancelTick, Msg, Post, ScheduleTick, Transition, transition

logger = logging.getLogger(__name__)

Listener = Callable[[SessionSnapshot], None]


class SessionController:
    """Drives a session from user intents and its own repeating tick.

    Events are admitted one at a time. Each one, together with every
    follow-up it posts, is processed before the next event is taken and
    before subscribers are notified.
    """

    TICK_INTERVAL = 1.0

    def __init__(self, scheduler: TickScheduler, session: Session | None = None):
        self.scheduler = scheduler
        self._session = session or Session()
        self._listeners: list[Listener] = []
        self._inbox: deque[Msg] = deque()
        self._dispatching = False

    @property
    def session(self) -> Session:
        return self._session

    def snapshot(self) -> SessionSnapshot:
        """Pull the current observable state."""
        return self._session.snapshot()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a snapshot after every processed event.

        Returns a function that removes the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # User intents

    def toggle(self) -> SessionSnapshot:
        return self.send(Msg.TOGGLE_STATE)

    def take_break(self) -> SessionSnapshot:
        return self.send(Msg.SET_BREAK)

    def handle_break(self) -> SessionSnapshot:
        return self.send(Msg.HANDLE_BREAK)

    def send(self, msg: Msg | str) -> SessionSnapshot:
        """Process ``msg`` to a fixed point and return the resulting snapshot.

        A ``send`` issued by a listener while another event is being handled
        is queued and processed after it.
        """
        self._inbox.append(Msg(msg))
        if self._dispatching:
            return self.snapshot()

        self._dispatching = True
        try:
            while self._inbox:
                self._handle(self._inbox.popleft())
                self._notify()
        finally:
            self._dispatching = False
        return self.snapshot()

    def close(self) -> None:
        """Stop the tick. The session itself is left as is."""
        self._cancel_tick()

    def _handle(self, msg: Msg) -> None:
        follow_ups: deque[Msg] = deque([msg])
        while follow_ups:
            current = follow_ups.popleft()
            result = transition(self._session, current)
            self._apply(current, result, follow_ups)

    def _apply(self, msg: Msg, result: Transition, follow_ups: deque[Msg]) -> None:
        session = self._session
        if result.phase != session.phase:
            logger.info(
                "session %s -> %s (%s)", session.phase.value, result.phase.value, msg.value
            )

        session.phase = result.phase
        session.run_state = result.run_state
        session.focus_seconds = result.focus_seconds
        session.break_seconds = result.break_seconds

        for effect in result.effects:
            if isinstance(effect, CancelTick):
                self._cancel_tick()
            elif isinstance(effect, ScheduleTick):
                self._start_tick(effect.msg)
            elif isinstance(effect, Post):
                follow_ups.append(effect.msg)

    def _start_tick(self, msg: Msg) -> None:
        self._cancel_tick()
        self._session.active_timer = self.scheduler.schedule_repeating(
            self.TICK_INTERVAL, lambda: self.send(msg)
        )
        logger.debug("scheduled %s tick %r", msg.value, self._session.active_timer)

    def _cancel_tick(self) -> None:
        handle = self._session.active_timer
        if handle is None:
            return
        self.scheduler.cancel(handle)
        self._session.active_timer = None
        logger.debug("cancelled tick %r", handle)

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
