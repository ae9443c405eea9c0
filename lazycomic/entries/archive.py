"""Zip-archive-backed entries.

The archive handle stays open for the lifetime of the source; the viewer
closes it on teardown. Member streams are opened one at a time.
"""

from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from ..errors import ArchiveUnreadable, ContainerNotFound, StreamUnavailable
from .types import EntrySource, is_image_file, sorted_by_name

logger = logging.getLogger(__name__)

ARCHIVE_EXTENSIONS: frozenset[str] = frozenset({".zip", ".cbz"})

# General purpose bit 0 marks an encrypted member.
_ENCRYPTED_FLAG = 0x1


def is_archive_file(path: Path) -> bool:
    return path.suffix.lower() in ARCHIVE_EXTENSIONS


@dataclass(frozen=True)
class ZipEntry:
    """Image stored as a member of an open zip archive."""

    archive: zipfile.ZipFile
    info: zipfile.ZipInfo

    @property
    def name(self) -> str:
        return self.info.filename

    def open(self) -> BinaryIO:
        try:
            return self.archive.open(self.info, "r")
        except (zipfile.BadZipFile, RuntimeError, ValueError, KeyError, OSError) as exc:
            raise StreamUnavailable(self.name, str(exc)) from exc


def is_viewable_member(info: zipfile.ZipInfo) -> bool:
    """Return whether an archive member is an unencrypted image file."""
    if not info.filename or info.filename.endswith("/"):
        return False
    if info.flag_bits & _ENCRYPTED_FLAG:
        return False
    base_name = PurePosixPath(info.filename).name
    if not base_name:
        return False
    return is_image_file(base_name)


def open_archive(path: Path) -> EntrySource:
    """Open ``path`` as a zip archive and expose its image members."""
    path = Path(path)
    if not path.is_file():
        raise ContainerNotFound(path)
    try:
        archive = zipfile.ZipFile(path, "r")
    except (zipfile.BadZipFile, OSError) as exc:
        raise ArchiveUnreadable(path, str(exc)) from exc

    # Duplicate member names resolve to the last one, as zipfile lookups do.
    members = {info.filename: info for info in archive.infolist() if is_viewable_member(info)}
    entries = sorted_by_name([ZipEntry(archive, info) for info in members.values()])
    logger.info("found %d image(s) in archive %s", len(entries), path)
    return EntrySource(entries=entries, label=str(path), closer=archive.close)
