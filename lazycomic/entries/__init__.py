"""Entry sources: filesystem files, directories, and zip archives.

``load_entries`` picks the provider for a command-line path list. Every
provider yields the same ``Entry`` contract so the viewer never cares where
image bytes come from.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ..errors import ContainerNotFound
from .archive import ZipEntry, is_archive_file, open_archive
from .files import FileEntry, open_directory, open_files
from .types import IMAGE_EXTENSIONS, Entry, EntrySource, is_image_file


def load_entries(paths: Sequence[str | Path]) -> EntrySource:
    """Resolve CLI paths into an ``EntrySource``.

    A single directory lists its children, a single ``.zip``/``.cbz`` opens
    the archive, anything else is treated as a list of image files.
    """
    if not paths:
        raise ContainerNotFound("")
    path_list = [Path(p) for p in paths]
    if len(path_list) == 1:
        target = path_list[0]
        if not target.exists():
            raise ContainerNotFound(target)
        if target.is_dir():
            return open_directory(target)
        if is_archive_file(target):
            return open_archive(target)
    return open_files(path_list)


__all__ = [
    "IMAGE_EXTENSIONS",
    "Entry",
    "EntrySource",
    "FileEntry",
    "ZipEntry",
    "is_image_file",
    "load_entries",
    "open_archive",
    "open_directory",
    "open_files",
]
