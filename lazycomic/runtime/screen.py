"""Cursor-addressable output sink over the terminal's stdout descriptor.

Rows and columns are zero-based here and converted to the one-based CSI
coordinates on the way out. Callers group related writes with ``atomic()``
so concurrent page renders never interleave inside an escape sequence.
"""

from __future__ import annotations

import contextlib
import os
import threading
from collections.abc import Iterable, Iterator

from ..graphics import KITTY_CLEAR_IMAGES

CLEAR_TO_END = "\x1b[0J"
CLEAR_LINE = "\x1b[2K"
SAVE_CURSOR = "\x1b7"
RESTORE_CURSOR = "\x1b8"


class TerminalScreen:
    """Thread-safe text sink bound to a file descriptor."""

    def __init__(self, fd: int, *, clear_images: bool = True) -> None:
        self.fd = fd
        self.clear_images = clear_images
        self._lock = threading.RLock()

    def _write_all(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            written = os.write(self.fd, view)
            view = view[written:]

    @contextlib.contextmanager
    def atomic(self) -> Iterator[None]:
        """Hold the output lock for a group of writes."""
        with self._lock:
            yield

    def write(self, text: str) -> None:
        if not text:
            return
        with self._lock:
            self._write_all(text.encode("utf-8"))

    def write_line(self, text: str = "") -> None:
        # Raw mode disables output post-processing, so emit CR explicitly.
        self.write(f"{text}\r\n")

    def set_cursor_position(self, col: int, row: int) -> None:
        self.write(f"\x1b[{max(0, row) + 1};{max(0, col) + 1}H")

    def clear_to_end(self) -> None:
        """Erase from the cursor to the end of the screen, images included."""
        self.write(CLEAR_TO_END + (KITTY_CLEAR_IMAGES if self.clear_images else ""))

    def show_status(self, message: str) -> None:
        """Replace the cursor's current line with ``message``."""
        self.write(f"\r{CLEAR_LINE}{message}")

    def write_block(self, lines: Iterable[str], col: int, row: int) -> None:
        """Draw ``lines`` starting at ``(col, row)`` and restore the cursor."""
        with self._lock:
            parts = [SAVE_CURSOR]
            for offset, line in enumerate(lines):
                parts.append(f"\x1b[{row + offset + 1};{col + 1}H{line}")
            parts.append(RESTORE_CURSOR)
            self.write("".join(parts))
