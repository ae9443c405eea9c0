"""Page navigation and dual-page layout engine.

``ImageViewer`` owns the ordered entries and decides, for each requested
index, whether to show one page or a two-page spread, how large each page
is drawn, and which terminal column it starts at. Spreads are rendered by
two worker threads that are joined before ``show`` returns.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, wait
from contextlib import AbstractContextManager
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import BinaryIO, Protocol

from .entries import Entry, EntrySource
from .graphics import KittyEncoder
from .layout import Size, column_offset, fit_size, spread_fits

logger = logging.getLogger(__name__)

HEADER_ROW = 0
IMAGE_ROW = 1


class PageMode(Enum):
    """Reading direction of a two-page spread."""

    LEFT_TO_RIGHT = "ltr"
    RIGHT_TO_LEFT = "rtl"

    def toggled(self) -> PageMode:
        if self is PageMode.LEFT_TO_RIGHT:
            return PageMode.RIGHT_TO_LEFT
        return PageMode.LEFT_TO_RIGHT


class PageState(IntEnum):
    """Pages drawn by the last ``show``; doubles as the forward step."""

    NONE = 0
    SINGLE = 1
    DOUBLE = 2


class TerminalMetricsProvider(Protocol):
    def cell_pixel_size(self) -> Size: ...

    def viewport_pixel_size(self) -> Size: ...


class GraphicsEncoder(Protocol):
    @property
    def canvas_size(self) -> Size: ...

    def resize(self, size: Size) -> GraphicsEncoder: ...

    def encode(self) -> str: ...


class OutputSink(Protocol):
    def atomic(self) -> AbstractContextManager[None]: ...

    def set_cursor_position(self, col: int, row: int) -> None: ...

    def write(self, text: str) -> None: ...

    def write_line(self, text: str = "") -> None: ...

    def clear_to_end(self) -> None: ...


EncoderFactory = Callable[[BinaryIO, str], GraphicsEncoder]


@dataclass(frozen=True)
class PagePlacement:
    """Where one page of the current screen was drawn."""

    index: int
    column: int
    size: Size


@dataclass
class _LoadedPage:
    index: int
    encoder: GraphicsEncoder
    size: Size


def page_header(index: int, total: int) -> str:
    return f"{index + 1:3d}/{total:3d}"


def place_pages(pages: Sequence[_LoadedPage], page_mode: PageMode, cell: Size) -> tuple[PagePlacement, ...]:
    """Assign columns to one page, or to a chronologically ordered pair."""
    if len(pages) == 1:
        page = pages[0]
        return (PagePlacement(page.index, 0, page.size),)
    earlier, later = pages
    if page_mode is PageMode.RIGHT_TO_LEFT:
        offset = column_offset(later.size.width, cell)
        return (
            PagePlacement(earlier.index, offset, earlier.size),
            PagePlacement(later.index, 0, later.size),
        )
    offset = column_offset(earlier.size.width, cell)
    return (
        PagePlacement(earlier.index, 0, earlier.size),
        PagePlacement(later.index, offset, later.size),
    )


class ImageViewer:
    """Show pages of an entry sequence one or two at a time.

    The viewer is not reentrant: the driver must issue one ``show`` call at a
    time because the terminal cursor is shared state.
    """

    def __init__(
        self,
        source: EntrySource | Sequence[Entry],
        *,
        metrics: TerminalMetricsProvider,
        output: OutputSink,
        encoder_factory: EncoderFactory = KittyEncoder.from_stream,
        page_mode: PageMode = PageMode.LEFT_TO_RIGHT,
    ) -> None:
        if not isinstance(source, EntrySource):
            source = EntrySource(entries=tuple(source))
        self._source = source
        self._entries: tuple[Entry, ...] = tuple(source.entries)
        self._metrics = metrics
        self._output = output
        self._encoder_factory = encoder_factory
        self.page_mode = page_mode
        self._current_index = 0
        self._page_state = PageState.NONE
        self._placements: tuple[PagePlacement, ...] = ()
        self._closed = False

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def last_index(self) -> int:
        return len(self._entries) - 1

    @property
    def page_state(self) -> PageState:
        return self._page_state

    @property
    def placements(self) -> tuple[PagePlacement, ...]:
        """Pages drawn by the last successful ``show``, in reading order of index."""
        return self._placements

    @property
    def closed(self) -> bool:
        return self._closed

    def show_next(self, force_single: bool = False) -> bool:
        """Advance past every page currently on screen."""
        target = self._current_index + int(self._page_state)
        if target >= len(self._entries):
            return False
        return self.show(target, force_single)

    def show_previous(self, force_single: bool = False) -> bool:
        """Step back exactly one page, whatever is on screen."""
        target = self._current_index - 1
        if target < 0:
            return False
        return self.show(target, force_single)

    def show(self, index: int, force_single: bool = False) -> bool:
        """Draw the page at ``index``, paired with a neighbour when both fit.

        Returns ``False`` without touching any state when ``index`` is out of
        range. ``StreamUnavailable`` from either page propagates before
        anything is written or committed.
        """
        total = len(self._entries)
        if index < 0 or index >= total:
            return False

        forward = index >= self._current_index
        cell = self._metrics.cell_pixel_size()
        viewport = self._metrics.viewport_pixel_size()

        first = self._load_page(index, viewport, cell)
        pages = [first]
        state = PageState.SINGLE
        if not force_single and first.size.is_portrait:
            neighbour = index + 1 if forward else index - 1
            if 0 <= neighbour < total:
                second = self._load_page(neighbour, viewport, cell)
                if spread_fits(first.size, second.size, viewport):
                    state = PageState.DOUBLE
                    pages = sorted((first, second), key=lambda page: page.index)
                else:
                    logger.debug(
                        "spread %d+%d rejected: %s + %s in %s", index, neighbour, first.size, second.size, viewport
                    )

        placements = place_pages(pages, self.page_mode, cell)
        self._current_index = pages[0].index
        self._page_state = state
        self._placements = placements

        self._output.set_cursor_position(0, HEADER_ROW)
        self._output.clear_to_end()
        loaded = {page.index: page for page in pages}
        if len(placements) == 1:
            self._render_page(loaded[placements[0].index], placements[0], total)
        else:
            self._render_spread([(loaded[p.index], p) for p in placements], total)
        return True

    def _load_page(self, index: int, viewport: Size, cell: Size) -> _LoadedPage:
        entry = self._entries[index]
        with entry.open() as stream:
            encoder = self._encoder_factory(stream, entry.name)
        size = fit_size(encoder.canvas_size, viewport, cell)
        return _LoadedPage(index=index, encoder=encoder, size=size)

    def _render_page(self, page: _LoadedPage, placement: PagePlacement, total: int) -> None:
        body = page.encoder.resize(placement.size).encode()
        with self._output.atomic():
            self._output.set_cursor_position(placement.column, HEADER_ROW)
            self._output.write(page_header(placement.index, total))
            self._output.set_cursor_position(placement.column, IMAGE_ROW)
            self._output.write_line(body)

    def _render_spread(self, pairs: Sequence[tuple[_LoadedPage, PagePlacement]], total: int) -> None:
        with ThreadPoolExecutor(max_workers=len(pairs), thread_name_prefix="lazycomic-render") as executor:
            futures = [executor.submit(self._render_page, page, placement, total) for page, placement in pairs]
            wait(futures)
        for future in futures:
            error = future.exception()
            if error is not None:
                logger.error("page render failed: %s", error)
                raise error

    def close(self) -> None:
        """Release entries and the owned container; safe to call twice."""
        if self._closed:
            return
        self._closed = True
        self._entries = ()
        self._placements = ()
        self._source.close()

    def __enter__(self) -> ImageViewer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
