"""Shared test fixtures and configuration.

Isolates tests from real platform directories and gives session tests a
clock they can move by hand.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from flowfast_cli.models.session import SessionController, TickScheduler


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point config and log directories at *tmp_path* for every test."""
    import flowfast_cli.config as config_mod
    import flowfast_cli.utils.logger as logger_mod

    config_mod._config_manager = None
    logger_mod._logger = None

    with patch("flowfast_cli.config.user_config_dir", return_value=str(tmp_path / "config")):
        with patch("flowfast_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "log")):
            yield tmp_path

    app_logger = logging.getLogger("flowfast_cli")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)
    app_logger.propagate = True
    app_logger.setLevel(logging.NOTSET)
    config_mod._config_manager = None
    logger_mod._logger = None


# ---------------------------------------------------------------------------
# Session helpers
# ---------------------------------------------------------------------------


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def scheduler(clock):
    return TickScheduler(clock=clock)


@pytest.fixture()
def controller(scheduler):
    return SessionController(scheduler)


@pytest.fixture()
def tick(clock, scheduler):
    """Advance the clock one second at a time, firing due ticks."""

    def _tick(times: int = 1) -> None:
        for _ in range(times):
            clock.advance(1.0)
            scheduler.run_pending()

    return _tick
