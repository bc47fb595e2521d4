"""Unit tests for command decorators."""

from unittest.mock import patch

import pytest
import typer

from flowfast_cli.commands.decorators import AppError, command_wrapper


class TestAppError:
    def test_default_exit_code(self):
        err = AppError("nope")
        assert str(err) == "nope"
        assert err.exit_code == 1

    def test_custom_exit_code(self):
        assert AppError("bad args", exit_code=2).exit_code == 2


class TestCommandWrapper:
    def test_returns_result(self):
        @command_wrapper
        def cmd(x):
            return x * 2

        assert cmd(21) == 42

    def test_preserves_metadata(self):
        @command_wrapper
        def start_timer():
            """Start it."""

        assert start_timer.__name__ == "start_timer"
        assert start_timer.__doc__ == "Start it."

    def test_app_error_becomes_exit(self):
        @command_wrapper
        def cmd():
            raise AppError("no such profile", exit_code=5)

        with patch("flowfast_cli.commands.decorators.format_error") as fmt:
            with pytest.raises(typer.Exit) as exc_info:
                cmd()

        assert exc_info.value.exit_code == 5
        fmt.assert_called_once_with("no such profile")

    def test_typer_exit_passes_through(self):
        @command_wrapper
        def cmd():
            raise typer.Exit(0)

        with patch("flowfast_cli.commands.decorators.format_error") as fmt:
            with pytest.raises(typer.Exit) as exc_info:
                cmd()

        assert exc_info.value.exit_code == 0
        fmt.assert_not_called()

    def test_unexpected_error_is_logged(self, isolated_dirs):
        @command_wrapper
        def cmd():
            raise RuntimeError("kaboom")

        with patch("flowfast_cli.commands.decorators.format_error") as fmt:
            with pytest.raises(typer.Exit) as exc_info:
                cmd()

        assert exc_info.value.exit_code == 1
        fmt.assert_called_once_with("An unexpected error occurred: kaboom")
        log = (isolated_dirs / "log" / "flowfast.log").read_text()
        assert "command started: cmd" in log
        assert "RuntimeError: kaboom" in log

    def test_success_is_logged(self, isolated_dirs):
        @command_wrapper
        def cmd():
            return None

        cmd()
        log = (isolated_dirs / "log" / "flowfast.log").read_text()
        assert "command completed: cmd" in log
