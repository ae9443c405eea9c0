"""Kitty graphics-protocol encoder built on Pillow.

Images are decoded once, optionally resized, then transmitted inline as
base64 PNG data split into protocol-sized chunks.
"""

from __future__ import annotations

import base64
import io
import zipfile
import zlib
from typing import BinaryIO

from PIL import Image, UnidentifiedImageError

from .errors import StreamUnavailable
from .layout import Size

KITTY_CHUNK_SIZE = 4096
KITTY_CLEAR_IMAGES = "\x1b_Ga=d,d=A,q=2;\x1b\\"


def kitty_payload(png_bytes: bytes, chunk_size: int = KITTY_CHUNK_SIZE) -> str:
    """Wrap PNG bytes in one or more kitty transmit-and-display commands."""
    data = base64.b64encode(png_bytes).decode("ascii")
    chunks = [data[i : i + chunk_size] for i in range(0, len(data), chunk_size)] or [""]
    parts: list[str] = []
    for idx, chunk in enumerate(chunks):
        more = 1 if idx < len(chunks) - 1 else 0
        if idx == 0:
            parts.append(f"\x1b_Ga=T,f=100,q=2,m={more};{chunk}\x1b\\")
        else:
            parts.append(f"\x1b_Gm={more};{chunk}\x1b\\")
    return "".join(parts)


def _display_mode(image: Image.Image) -> Image.Image:
    if image.mode in ("RGB", "RGBA"):
        return image
    has_alpha = "A" in image.getbands() or "transparency" in image.info
    return image.convert("RGBA" if has_alpha else "RGB")


class KittyEncoder:
    """Decoded image that can be resized and encoded for the terminal."""

    def __init__(self, image: Image.Image) -> None:
        self._image = image

    @classmethod
    def from_stream(cls, stream: BinaryIO, name: str = "") -> KittyEncoder:
        """Decode ``stream`` fully so the caller may close it right away.

        Archive members decompress lazily, so a damaged member only fails
        here; it is reported like any other unreadable page.
        """
        try:
            image = Image.open(stream)
            image.load()
        except (
            UnidentifiedImageError,
            OSError,
            ValueError,
            Image.DecompressionBombError,
            zipfile.BadZipFile,
            zlib.error,
        ) as exc:
            raise StreamUnavailable(name or "<stream>", str(exc)) from exc
        return cls(_display_mode(image))

    @property
    def canvas_size(self) -> Size:
        return Size(self._image.width, self._image.height)

    def resize(self, size: Size) -> KittyEncoder:
        if size != self.canvas_size and size.width > 0 and size.height > 0:
            self._image = self._image.resize((size.width, size.height), Image.Resampling.LANCZOS)
        return self

    def encode(self) -> str:
        buffer = io.BytesIO()
        self._image.save(buffer, format="PNG")
        return kitty_payload(buffer.getvalue())
