"""Unit tests for the cooperative TickScheduler."""

from __future__ import annotations

import pytest

from flowfast_cli.models.session.scheduler import TickScheduler


class TestScheduleRepeating:
    def test_first_fire_after_one_interval(self, clock, scheduler):
        calls = []
        scheduler.schedule_repeating(1.0, lambda: calls.append(clock()))

        assert scheduler.run_pending() == 0
        clock.advance(0.5)
        assert scheduler.run_pending() == 0
        clock.advance(0.5)
        assert scheduler.run_pending() == 1
        assert calls == [1001.0]

    def test_repeats_every_interval(self, clock, scheduler):
        calls = []
        handle = scheduler.schedule_repeating(1.0, lambda: calls.append(1))

        for _ in range(5):
            clock.advance(1.0)
            scheduler.run_pending()

        assert len(calls) == 5
        assert handle.fired == 5

    def test_catches_up_missed_intervals(self, clock, scheduler):
        calls = []
        scheduler.schedule_repeating(1.0, lambda: calls.append(1))

        clock.advance(3.5)
        assert scheduler.run_pending() == 3
        assert scheduler.next_due() == pytest.approx(1004.0)

    def test_explicit_now_overrides_clock(self, scheduler):
        calls = []
        scheduler.schedule_repeating(2.0, lambda: calls.append(1))
        assert scheduler.run_pending(now=1004.0) == 2

    def test_rejects_non_positive_interval(self, scheduler):
        with pytest.raises(ValueError):
            scheduler.schedule_repeating(0, lambda: None)

    def test_handles_are_distinct(self, scheduler):
        first = scheduler.schedule_repeating(1.0, lambda: None)
        second = scheduler.schedule_repeating(1.0, lambda: None)
        assert first.handle_id != second.handle_id
        assert scheduler.pending == 2


class TestCancel:
    def test_cancelled_handle_never_fires(self, clock, scheduler):
        calls = []
        handle = scheduler.schedule_repeating(1.0, lambda: calls.append(1))
        scheduler.cancel(handle)

        clock.advance(5.0)
        assert scheduler.run_pending() == 0
        assert calls == []
        assert handle.cancelled

    def test_cancel_is_idempotent(self, scheduler):
        handle = scheduler.schedule_repeating(1.0, lambda: None)
        scheduler.cancel(handle)
        scheduler.cancel(handle)
        assert scheduler.pending == 0

    def test_cancel_none_is_noop(self, scheduler):
        scheduler.cancel(None)
        assert scheduler.pending == 0

    def test_cancel_foreign_handle_is_noop(self, scheduler):
        other = TickScheduler()
        foreign = other.schedule_repeating(1.0, lambda: None)
        mine = scheduler.schedule_repeating(1.0, lambda: None)

        scheduler.cancel(foreign)

        assert scheduler.pending == 1
        assert not mine.cancelled

    def test_cancel_from_callback_stops_catch_up(self, clock, scheduler):
        calls = []

        def callback():
            calls.append(1)
            if len(calls) == 2:
                scheduler.cancel(handle)

        handle = scheduler.schedule_repeating(1.0, callback)
        clock.advance(10.0)

        assert scheduler.run_pending() == 2
        assert scheduler.pending == 0

    def test_cancel_all(self, scheduler):
        handles = [scheduler.schedule_repeating(1.0, lambda: None) for _ in range(3)]
        scheduler.cancel_all()
        assert scheduler.pending == 0
        assert all(h.cancelled for h in handles)
        assert scheduler.next_due() is None

    def test_handle_scheduled_by_callback_waits_for_next_run(self, clock, scheduler):
        late = []

        def spawn():
            scheduler.cancel(first)
            scheduler.schedule_repeating(1.0, lambda: late.append(clock()))

        first = scheduler.schedule_repeating(1.0, spawn)
        clock.advance(1.0)
        scheduler.run_pending()
        assert late == []

        clock.advance(1.0)
        scheduler.run_pending()
        assert late == [1002.0]
