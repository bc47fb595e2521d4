"""Non-blocking terminal key reader for the timer controls."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

_NAMED_KEYS = {
    " ": "space",
    "\n": "enter",
    "\r": "enter",
    "\x1b": "escape",
}


def normalize_key(raw: str) -> str:
    """Map a raw character to the name used in key bindings."""
    return _NAMED_KEYS.get(raw, raw.lower())


class KeyboardHandler:
    """Reads single keypresses from a POSIX terminal in cbreak mode."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdin
        self.old_settings = None
        self.fd: int | None = None
        self._setup()

    def _setup(self):
        """Put the terminal in cbreak mode so keys arrive without Enter."""
        try:
            import termios
            import tty
        except ImportError:
            return

        try:
            self.fd = self.stream.fileno()
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (termios.error, OSError, ValueError, AttributeError):
            # Not a tty
            self.old_settings = None

    def get_key(self) -> Optional[str]:
        """
        Get a single keypress without blocking.

        Returns the normalized key name or None if no key was pressed.
        """
        try:
            import select

            if select.select([self.stream], [], [], 0)[0]:
                raw = self.stream.read(1)
                return normalize_key(raw) if raw else None
            return None
        except (OSError, ValueError):
            return None

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings is None or self.fd is None:
            return
        import termios

        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
        except (OSError, termios.error):
            pass
        self.old_settings = None


class WindowsKeyboardHandler:
    """Keyboard handler for Windows consoles using msvcrt."""

    def __init__(self):
        try:
            import msvcrt

            self.msvcrt = msvcrt
        except ImportError:
            self.msvcrt = None

    def get_key(self) -> Optional[str]:
        if not self.msvcrt or not self.msvcrt.kbhit():
            return None
        key = self.msvcrt.getwch()
        return normalize_key(key) if key else None

    def stop(self):
        """No cleanup needed on Windows."""


def get_keyboard_handler() -> KeyboardHandler | WindowsKeyboardHandler:
    """Pick the reader matching the running platform."""
    if sys.platform == "win32":
        return WindowsKeyboardHandler()
    return KeyboardHandler()
