"""Tests for the cursor-addressable terminal output sink."""

from __future__ import annotations

import os
import threading
import unittest
from unittest import mock

from lazycomic.graphics import KITTY_CLEAR_IMAGES
from lazycomic.runtime.screen import TerminalScreen


def _drain(fd: int) -> bytes:
    chunks = []
    while True:
        chunk = os.read(fd, 65536)
        chunks.append(chunk)
        if len(chunk) < 65536:
            return b"".join(chunks)


class TerminalScreenTests(unittest.TestCase):
    def setUp(self) -> None:
        self.read_fd, self.write_fd = os.pipe()
        self.screen = TerminalScreen(self.write_fd)

    def tearDown(self) -> None:
        os.close(self.read_fd)
        os.close(self.write_fd)

    def test_cursor_positions_are_one_based_csi(self) -> None:
        self.screen.set_cursor_position(0, 0)
        self.screen.set_cursor_position(40, 1)

        self.assertEqual(_drain(self.read_fd), b"\x1b[1;1H\x1b[2;41H")

    def test_write_line_appends_carriage_return_and_newline(self) -> None:
        self.screen.write("  1/  3")
        self.screen.write_line("body")

        self.assertEqual(_drain(self.read_fd), b"  1/  3body\r\n")

    def test_clear_to_end_also_removes_inline_images(self) -> None:
        self.screen.clear_to_end()
        plain = TerminalScreen(self.write_fd, clear_images=False)
        plain.clear_to_end()

        self.assertEqual(_drain(self.read_fd), ("\x1b[0J" + KITTY_CLEAR_IMAGES + "\x1b[0J").encode())

    def test_status_line_replaces_current_row(self) -> None:
        self.screen.show_status("Already the last page.")

        self.assertEqual(_drain(self.read_fd), b"\r\x1b[2KAlready the last page.")

    def test_write_block_restores_cursor(self) -> None:
        self.screen.write_block(["ab", "cd"], 2, 5)

        self.assertEqual(_drain(self.read_fd), b"\x1b7\x1b[6;3Hab\x1b[7;3Hcd\x1b8")

    def test_partial_os_writes_are_retried(self) -> None:
        written: list[bytes] = []

        def short_write(_fd: int, data) -> int:
            piece = bytes(data[:3])
            written.append(piece)
            return len(piece)

        with mock.patch("lazycomic.runtime.screen.os.write", side_effect=short_write):
            self.screen.write("abcdefgh")

        self.assertEqual(b"".join(written), b"abcdefgh")

    def test_atomic_blocks_other_writers(self) -> None:
        order: list[str] = []
        entered = threading.Event()

        def other_writer() -> None:
            entered.set()
            with self.screen.atomic():
                order.append("other")

        with self.screen.atomic():
            worker = threading.Thread(target=other_writer)
            worker.start()
            entered.wait(timeout=5)
            order.append("first")
        worker.join(timeout=5)

        self.assertEqual(order, ["first", "other"])


if __name__ == "__main__":
    unittest.main()
