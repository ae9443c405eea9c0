"""Shared entry contract and supported image extensions."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import BinaryIO, Protocol, runtime_checkable

IMAGE_EXTENSIONS: frozenset[str] = frozenset({".gif", ".png", ".jpg", ".jpeg", ".webp", ".bmp"})


def is_image_file(name: str) -> bool:
    """Return whether ``name`` carries a supported raster extension."""
    return PurePath(name).suffix.lower() in IMAGE_EXTENSIONS


@runtime_checkable
class Entry(Protocol):
    """One viewable image, independent of where its bytes live."""

    @property
    def name(self) -> str: ...

    def open(self) -> BinaryIO: ...


@dataclass
class EntrySource:
    """Sorted entries plus the container resource that backs them, if any."""

    entries: tuple[Entry, ...]
    label: str = ""
    closer: Callable[[], None] | None = field(default=None, repr=False)

    def close(self) -> None:
        closer = self.closer
        self.closer = None
        self.entries = ()
        if closer is not None:
            closer()

    def __len__(self) -> int:
        return len(self.entries)


def sorted_by_name(entries: Sequence[Entry]) -> tuple[Entry, ...]:
    """Order entries ascending by name; Python's sort is stable for ties."""
    return tuple(sorted(entries, key=lambda entry: entry.name))
