"""Filesystem-backed entries for loose image files and directories."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from ..errors import ContainerNotFound, StreamUnavailable
from .types import EntrySource, is_image_file

logger = logging.getLogger(__name__)

FILTER_MAX_WORKERS = 8


@dataclass(frozen=True)
class FileEntry:
    """Image stored as a file on disk."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    def open(self) -> BinaryIO:
        try:
            return self.path.open("rb")
        except OSError as exc:
            raise StreamUnavailable(str(self.path), exc.strerror or str(exc)) from exc


def is_viewable_file(path: Path) -> bool:
    """Return whether ``path`` is an existing, non-directory image file."""
    try:
        if not path.is_file():
            return False
    except OSError:
        return False
    return is_image_file(path.name)


def _unique_paths(paths: Iterable[Path]) -> list[Path]:
    seen: set[Path] = set()
    unique: list[Path] = []
    for path in paths:
        try:
            key = path.resolve()
        except OSError:
            key = path.absolute()
        if key in seen:
            continue
        seen.add(key)
        unique.append(path)
    return unique


def build_file_entries(paths: Iterable[Path]) -> tuple[FileEntry, ...]:
    """Filter candidate paths concurrently and return them sorted by name."""
    candidates = _unique_paths(Path(p) for p in paths)
    if not candidates:
        return ()
    workers = max(1, min(FILTER_MAX_WORKERS, len(candidates)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="lazycomic-filter") as executor:
        keep = list(executor.map(is_viewable_file, candidates))
    accepted = [path for path, ok in zip(candidates, keep) if ok]
    skipped = len(candidates) - len(accepted)
    if skipped:
        logger.debug("skipped %d non-image or missing path(s)", skipped)
    accepted.sort(key=lambda path: (path.name, str(path)))
    return tuple(FileEntry(path) for path in accepted)


def open_files(paths: Iterable[Path]) -> EntrySource:
    """Build a source over explicitly listed files."""
    path_list = [Path(p) for p in paths]
    entries = build_file_entries(path_list)
    label = str(path_list[0]) if len(path_list) == 1 else f"{len(path_list)} files"
    return EntrySource(entries=entries, label=label)


def open_directory(directory: Path) -> EntrySource:
    """Build a source over the direct children of ``directory``."""
    directory = Path(directory)
    if not directory.is_dir():
        raise ContainerNotFound(directory)
    try:
        children = list(directory.iterdir())
    except OSError as exc:
        raise ContainerNotFound(directory) from exc
    entries = build_file_entries(children)
    logger.info("found %d image(s) in %s", len(entries), directory)
    return EntrySource(entries=entries, label=str(directory))
