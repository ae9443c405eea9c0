"""Exception types raised by entry sources and the page viewer.

Only resource acquisition is exceptional. Out-of-range navigation is
reported through boolean return values instead.
"""

from __future__ import annotations


class LazyComicError(Exception):
    """Base class for all lazycomic failures."""


class StreamUnavailable(LazyComicError):
    """An entry's bytes could not be opened at render time."""

    def __init__(self, name: str, reason: str = "") -> None:
        self.name = name
        self.reason = reason
        message = f"Cannot open {name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ContainerNotFound(LazyComicError, FileNotFoundError):
    """The directory, archive, or file named as a source does not exist."""

    def __init__(self, path: object) -> None:
        self.path = path
        super().__init__(f"No such file or directory: {path}")


class ArchiveUnreadable(LazyComicError):
    """The archive exists but cannot be read as a zip container."""

    def __init__(self, path: object, reason: str = "") -> None:
        self.path = path
        message = f"Not a readable archive: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
