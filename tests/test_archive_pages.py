"""Viewer behaviour over real zip archives with damaged members."""

from __future__ import annotations

import io
import struct
import tempfile
import unittest
import zipfile
from pathlib import Path

from PIL import Image

from lazycomic.entries import open_archive
from lazycomic.errors import StreamUnavailable
from lazycomic.runtime.loop import ViewerSession
from lazycomic.viewer import ImageViewer, PageState

from viewer_doubles import FakeMetrics, RecordingScreen


def _bmp_bytes(size: tuple[int, int], color: str) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="BMP")
    return buffer.getvalue()


def _build_comic(path: Path) -> None:
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("00.bmp", _bmp_bytes((64, 48), "red"))
        archive.writestr("01.bmp", _bmp_bytes((64, 48), "blue"))


def _damage_member(path: Path, member: str) -> None:
    """Make the member's first deflate block use the reserved block type."""
    with zipfile.ZipFile(path) as archive:
        offset = archive.getinfo(member).header_offset
    data = bytearray(path.read_bytes())
    name_len, extra_len = struct.unpack_from("<HH", data, offset + 26)
    data[offset + 30 + name_len + extra_len] = 0xFF
    path.write_bytes(bytes(data))


class DamagedArchiveMemberTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.path = Path(tmp.name) / "book.cbz"
        _build_comic(self.path)
        _damage_member(self.path, "00.bmp")
        self.screen = RecordingScreen()
        self.viewer = ImageViewer(open_archive(self.path), metrics=FakeMetrics(), output=self.screen)
        self.addCleanup(self.viewer.close)

    def test_show_reports_damaged_member_as_unavailable(self) -> None:
        with self.assertRaises(StreamUnavailable) as ctx:
            self.viewer.show(0)

        self.assertEqual(ctx.exception.name, "00.bmp")
        self.assertEqual(self.viewer.page_state, PageState.NONE)
        self.assertEqual(self.screen.ops, [])

    def test_session_survives_damaged_member_and_shows_the_next_page(self) -> None:
        session = ViewerSession(self.viewer, self.screen, stdin_fd=0)

        self.assertFalse(session.start(0))
        self.assertIn("00.bmp", self.screen.statuses()[-1])

        self.assertTrue(self.viewer.show(1))
        self.assertEqual(self.viewer.current_index, 1)
        self.assertEqual(len(self.screen.images()), 1)


if __name__ == "__main__":
    unittest.main()
