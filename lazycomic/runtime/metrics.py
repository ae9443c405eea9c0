"""Terminal pixel metrics from the ``TIOCGWINSZ`` ioctl.

Terminals that report zero pixel sizes fall back to a configured cell size
multiplied by the character grid from ``shutil.get_terminal_size``.
"""

from __future__ import annotations

import fcntl
import shutil
import struct
import termios
from typing import NamedTuple

from ..layout import Size

DEFAULT_CELL_SIZE = Size(10, 20)


class WindowSize(NamedTuple):
    rows: int
    columns: int
    width_px: int
    height_px: int


def query_window_size(fd: int) -> WindowSize:
    """Return the character grid and pixel area reported for ``fd``."""
    try:
        packed = fcntl.ioctl(fd, termios.TIOCGWINSZ, b"\0" * 8)
        rows, columns, width_px, height_px = struct.unpack("HHHH", packed)
    except OSError:
        term = shutil.get_terminal_size((80, 24))
        return WindowSize(term.lines, term.columns, 0, 0)
    if rows <= 0 or columns <= 0:
        term = shutil.get_terminal_size((80, 24))
        rows, columns = term.lines, term.columns
    return WindowSize(rows, columns, width_px, height_px)


class TerminalMetrics:
    """Fresh cell and viewport pixel sizes on every call."""

    def __init__(self, fd: int, fallback_cell_size: Size = DEFAULT_CELL_SIZE) -> None:
        self.fd = fd
        self.fallback_cell_size = fallback_cell_size

    def _cell_from(self, window: WindowSize) -> Size:
        if window.width_px > 0 and window.height_px > 0:
            return Size(max(1, window.width_px // window.columns), max(1, window.height_px // window.rows))
        return self.fallback_cell_size

    def cell_pixel_size(self) -> Size:
        return self._cell_from(query_window_size(self.fd))

    def viewport_pixel_size(self) -> Size:
        window = query_window_size(self.fd)
        if window.width_px > 0 and window.height_px > 0:
            return Size(window.width_px, window.height_px)
        cell = self._cell_from(window)
        return Size(window.columns * cell.width, window.rows * cell.height)
