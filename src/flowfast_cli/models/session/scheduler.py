"""Cooperative repeating-tick scheduler.

Everything runs on the caller's thread: callbacks only fire from inside
``run_pending``, which the timer loop calls between redraws.
"""

from __future__ import annotations

import itertools
import time
from collections.abc import Callable
from dataclasses import dataclass, field

_handle_ids = itertools.count(1)


@dataclass(eq=False)
class TickHandle:
    """A scheduled repeating callback."""

    interval: float
    callback: Callable[[], None]
    next_due: float
    handle_id: int = field(default_factory=lambda: next(_handle_ids))
    cancelled: bool = False
    fired: int = 0

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else f"due={self.next_due:.3f}"
        return f"<TickHandle #{self.handle_id} every {self.interval}s {state}>"


class TickScheduler:
    """Schedules repeating callbacks against an injectable monotonic clock."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._handles: list[TickHandle] = []

    @property
    def pending(self) -> int:
        """Number of live (not cancelled) handles."""
        return len(self._handles)

    def schedule_repeating(
        self, interval: float, callback: Callable[[], None]
    ) -> TickHandle:
        """Fire ``callback`` every ``interval`` seconds until cancelled."""
        if interval <= 0:
            raise ValueError("Tick interval must be positive")

        handle = TickHandle(
            interval=interval,
            callback=callback,
            next_due=self.clock() + interval,
        )
        self._handles.append(handle)
        return handle

    def cancel(self, handle: TickHandle | None) -> None:
        """Cancel a handle. Absent, unknown or cancelled handles are ignored."""
        if handle is None or handle.cancelled:
            return
        handle.cancelled = True
        if handle in self._handles:
            self._handles.remove(handle)

    def cancel_all(self) -> None:
        for handle in list(self._handles):
            self.cancel(handle)

    def next_due(self) -> float | None:
        """Earliest deadline among live handles."""
        if not self._handles:
            return None
        return min(handle.next_due for handle in self._handles)

    def run_pending(self, now: float | None = None) -> int:
        """Fire every due callback and return how many fired.

        A handle that fell behind fires once per missed interval. Handles
        scheduled by a callback during this call wait for the next one.
        """
        if now is None:
            now = self.clock()

        fired = 0
        for handle in list(self._handles):
            while not handle.cancelled and handle.next_due <= now:
                handle.next_due += handle.interval
                handle.fired += 1
                fired += 1
                handle.callback()
        return fired
