"""Page geometry for fitting images into the terminal viewport.

Everything here is pure arithmetic on pixel sizes. Image widths are snapped
to whole terminal cells because the graphics protocol places images on cell
columns.
"""

from __future__ import annotations

import math
from typing import NamedTuple

# Rows kept free above/below the image for the page header and margins.
RESERVED_CELL_ROWS = 3


class Size(NamedTuple):
    width: int
    height: int

    @property
    def is_portrait(self) -> bool:
        return self.height > self.width


def fit_size(image: Size, viewport: Size, cell: Size) -> Size:
    """Return the size ``image`` should be drawn at inside ``viewport``.

    The usable height is the viewport height minus ``RESERVED_CELL_ROWS``
    cell rows. Images that already fit are returned unchanged. Larger images
    are scaled down uniformly, the width truncated to a multiple of the cell
    width, and the height recomputed from that width.
    """
    max_width = viewport.width
    max_height = viewport.height - cell.height * RESERVED_CELL_ROWS
    if image.width <= 0 or image.height <= 0:
        return Size(max(0, image.width), max(0, image.height))
    if image.width <= max_width and image.height <= max_height:
        return image

    ratio = min(max_width / image.width, max(1, max_height) / image.height)
    width = int(image.width * ratio)
    if cell.width > 0:
        width -= width % cell.width
        width = max(cell.width, width)
    width = max(1, width)
    height = max(1, int(image.height * (width / image.width)))
    return Size(width, height)


def spread_fits(first: Size, second: Size, viewport: Size) -> bool:
    """Return whether two fitted pages can be shown side by side."""
    if not (first.is_portrait and second.is_portrait):
        return False
    return first.width + second.width < viewport.width


def column_offset(width: int, cell: Size) -> int:
    """Return the cell column just right of an image ``width`` pixels wide."""
    if cell.width <= 0:
        return 0
    return math.ceil(width / cell.width)
