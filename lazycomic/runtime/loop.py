"""Main interactive event loop for the terminal viewer.

Polls the keyboard, dispatches key tokens through the binding registry, and
turns failed navigation into status-line messages. Keys are processed one
at a time, so viewer calls never overlap.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..errors import StreamUnavailable
from ..input import read_key
from ..keys import KeyComboRegistry, ViewerKeyActions, build_key_registry, parse_jump_command
from ..logger import console_muted
from ..render import help_box_lines
from ..viewer import ImageViewer, PageMode
from .screen import TerminalScreen
from .terminal import TerminalController

logger = logging.getLogger(__name__)

HELP_BOX_ROW = 5
LAST_PAGE_MESSAGE = "Already the last page."
FIRST_PAGE_MESSAGE = "Already on the first page."
NO_IMAGES_MESSAGE = "No images found."
COMMAND_PROMPT = ": "


class ViewerSession:
    """Key actions bound to one viewer and its screen."""

    def __init__(
        self,
        viewer: ImageViewer,
        screen: TerminalScreen,
        stdin_fd: int,
        *,
        on_page_mode_change: Callable[[PageMode], None] | None = None,
        key_reader: Callable[..., str] = read_key,
        poll_interval_ms: int = 50,
    ) -> None:
        self.viewer = viewer
        self.screen = screen
        self.stdin_fd = stdin_fd
        self.on_page_mode_change = on_page_mode_change
        self.key_reader = key_reader
        self.poll_interval_ms = poll_interval_ms
        self.help_visible = False
        self.quit_requested = False
        self.registry: KeyComboRegistry = build_key_registry(self.key_actions())

    def key_actions(self) -> ViewerKeyActions:
        return ViewerKeyActions(
            quit=self.request_quit,
            toggle_help=self.toggle_help,
            next_page=lambda: self._navigate(self.viewer.show_next, LAST_PAGE_MESSAGE),
            next_single_page=lambda: self._navigate(lambda: self.viewer.show_next(True), LAST_PAGE_MESSAGE),
            previous_page=lambda: self._navigate(self.viewer.show_previous, FIRST_PAGE_MESSAGE),
            previous_single_page=lambda: self._navigate(
                lambda: self.viewer.show_previous(True), FIRST_PAGE_MESSAGE
            ),
            redraw=lambda: self._navigate(lambda: self.viewer.show(self.viewer.current_index)),
            redraw_single=lambda: self._navigate(lambda: self.viewer.show(self.viewer.current_index, True)),
            toggle_page_mode=self.toggle_page_mode,
            first_page=lambda: self._navigate(lambda: self.viewer.show(0)),
            last_page=lambda: self._navigate(lambda: self.viewer.show(self.viewer.last_index)),
            command_prompt=self.command_prompt,
        )

    def start(self, index: int) -> bool:
        """Show the first screen, falling back to page one for a bad index."""
        if not self.viewer.entries:
            self.screen.show_status(NO_IMAGES_MESSAGE)
            return False
        if self._navigate(lambda: self.viewer.show(index)):
            return True
        if index != 0:
            return self._navigate(lambda: self.viewer.show(0))
        return False

    def handle_key(self, key: str) -> bool:
        """Dispatch one key token; return ``True`` when the loop should end."""
        self.registry.dispatch(key)
        return self.quit_requested

    def request_quit(self) -> None:
        self.quit_requested = True

    def _navigate(self, action: Callable[[], bool], failure_message: str = "") -> bool:
        self.help_visible = False
        try:
            shown = action()
        except StreamUnavailable as exc:
            logger.warning("%s", exc)
            self.screen.show_status(str(exc))
            return False
        if not shown and failure_message:
            self.screen.show_status(failure_message)
        return shown

    def toggle_help(self) -> None:
        if self.help_visible:
            self._navigate(lambda: self.viewer.show(self.viewer.current_index))
            return
        self.screen.write_block(help_box_lines(), 0, HELP_BOX_ROW)
        self.help_visible = True

    def toggle_page_mode(self) -> None:
        self.viewer.page_mode = self.viewer.page_mode.toggled()
        logger.info("page mode: %s", self.viewer.page_mode.value)
        if self.on_page_mode_change is not None:
            self.on_page_mode_change(self.viewer.page_mode)
        self._navigate(lambda: self.viewer.show(self.viewer.current_index))

    def read_command(self) -> str | None:
        """Edit a one-line command in raw mode; ``None`` when cancelled."""
        buffer = ""
        self.screen.show_status(COMMAND_PROMPT)
        while True:
            key = self.key_reader(self.stdin_fd, timeout_ms=self.poll_interval_ms)
            if not key:
                continue
            if key == "ENTER":
                return buffer
            if key in {"ESC", "CTRL_C"}:
                self.screen.show_status("")
                return None
            if key == "BACKSPACE":
                buffer = buffer[:-1]
            elif key == "CTRL_U":
                buffer = ""
            elif len(key) == 1 and key.isprintable():
                buffer += key
            else:
                continue
            self.screen.show_status(COMMAND_PROMPT + buffer)

    def command_prompt(self) -> None:
        command = self.read_command()
        if command is None:
            return
        target = parse_jump_command(command, self.viewer.current_index)
        if target is None:
            self.screen.show_status(f"Unknown command: {command.strip()}")
            return
        self._navigate(lambda: self.viewer.show(target), f"No such page: {target + 1}")


def run_main_loop(
    session: ViewerSession,
    terminal: TerminalController,
    start_index: int = 0,
) -> None:
    """Run the viewer until a quit key is pressed."""
    with console_muted(), terminal.raw_mode():
        session.start(start_index)
        while True:
            key = session.key_reader(session.stdin_fd, timeout_ms=session.poll_interval_ms)
            if not key:
                continue
            if session.handle_key(key):
                return
