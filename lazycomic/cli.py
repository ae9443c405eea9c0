"""Command-line front door for lazycomic.

Parses CLI options, resolves the image source, and picks the reading
direction. Then dispatches into the interactive viewer runtime.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from .entries import load_entries
from .errors import LazyComicError
from .logger import setup_logger
from .runtime import run_viewer
from .runtime.config import load_page_mode
from .viewer import PageMode

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazycomic",
        description="Page through images in a terminal with inline graphics.",
    )
    parser.add_argument("files", nargs="+", help="A zip/cbz file, a directory, or image files.")
    parser.add_argument(
        "-p",
        "--page",
        type=_positive_int,
        default=1,
        help="Page number to display first (starting with 1).",
    )
    direction = parser.add_mutually_exclusive_group()
    direction.add_argument(
        "-j",
        "--jcomic",
        dest="page_mode",
        action="store_const",
        const=PageMode.RIGHT_TO_LEFT,
        help="Japanese comic mode (page direction: right to left).",
    )
    direction.add_argument(
        "--ltr",
        dest="page_mode",
        action="store_const",
        const=PageMode.LEFT_TO_RIGHT,
        help="Force left-to-right page direction.",
    )
    parser.add_argument("--log-level", default=None, help="debug, info, warning, error or critical.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write log records to this file.")
    return parser


def resolve_page_mode(requested: PageMode | None) -> PageMode:
    """CLI flag first, then the persisted preference, then left-to-right."""
    if requested is not None:
        return requested
    return load_page_mode() or PageMode.LEFT_TO_RIGHT


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and launch the viewer.

    Construction failures (missing container, unreadable archive) exit with
    status 1 before the terminal is touched. An empty source still opens the
    viewer, which reports that there is nothing to show.
    """
    args = build_parser().parse_args(argv)
    setup_logger(args.log_level, args.log_file)

    try:
        source = load_entries(args.files)
    except LazyComicError as exc:
        raise SystemExit(str(exc)) from exc

    if len(source) == 0:
        logger.info("no images found in %s", " ".join(args.files))

    page_mode = resolve_page_mode(args.page_mode)
    logger.debug("opening %s at page %d", source.label, args.page)
    run_viewer(source, page_mode, args.page - 1)


if __name__ == "__main__":
    main()
