"""Terminal control helpers for the viewer session.

Owns raw-mode lifecycle and alternate-screen switching, and detects whether
the terminal speaks the Kitty graphics protocol.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ENTER_VIEWER_MODE = b"\x1b[?1049h\x1b[?25l\x1b[2J"
LEAVE_VIEWER_MODE = b"\x1b_Ga=d,d=A,q=2;\x1b\\\x1b[?25h\x1b[?1049l"

KITTY_TERM_PROGRAMS = frozenset({"WezTerm", "ghostty"})


class TerminalController:
    """Manage terminal mode transitions around the viewer loop."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_viewer_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_VIEWER_MODE)

    def disable_viewer_mode(self) -> None:
        """Drop inline images and restore the normal screen and tty state."""
        os.write(self.stdout_fd, LEAVE_VIEWER_MODE)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @staticmethod
    def supports_kitty_graphics() -> bool:
        """Return whether environment appears to support kitty graphics protocol."""
        if os.environ.get("TERM", "") == "xterm-kitty":
            return True
        if os.environ.get("KITTY_WINDOW_ID"):
            return True
        return os.environ.get("TERM_PROGRAM", "") in KITTY_TERM_PROGRAMS

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with viewer enter/exit calls."""
        try:
            self.enable_viewer_mode()
            yield
        finally:
            self.disable_viewer_mode()
