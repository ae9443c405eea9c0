"""Runtime composition layer for lazycomic.

Wires the terminal controller, metrics, output sink, and viewer together and
hands control to the key loop.
"""

from __future__ import annotations

import logging
import sys

from ..entries import EntrySource
from ..viewer import ImageViewer, PageMode
from .config import load_cell_size, load_poll_interval_ms, save_page_mode
from .loop import ViewerSession, run_main_loop
from .metrics import TerminalMetrics
from .screen import TerminalScreen
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def run_viewer(source: EntrySource, page_mode: PageMode, start_index: int = 0) -> None:
    """Show ``source`` interactively until the user quits.

    The viewer, and with it any archive the source owns, is closed on every
    exit path.
    """
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    if not terminal.supports_kitty_graphics():
        logger.warning("terminal does not advertise kitty graphics support; images may not display")

    screen = TerminalScreen(stdout_fd)
    metrics = TerminalMetrics(stdout_fd, fallback_cell_size=load_cell_size())
    with ImageViewer(source, metrics=metrics, output=screen, page_mode=page_mode) as viewer:
        logger.info("viewing %s (%d page(s), %s)", source.label, viewer.last_index + 1, page_mode.value)
        session = ViewerSession(
            viewer,
            screen,
            stdin_fd,
            on_page_mode_change=save_page_mode,
            poll_interval_ms=load_poll_interval_ms(),
        )
        run_main_loop(session, terminal, start_index)
