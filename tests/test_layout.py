"""Tests for viewport fitting and spread geometry helpers."""

from __future__ import annotations

import unittest

from lazycomic.layout import Size, column_offset, fit_size, spread_fits

CELL = Size(10, 20)
VIEWPORT = Size(1000, 800)


class FitSizeTests(unittest.TestCase):
    def test_image_that_fits_is_unchanged(self) -> None:
        self.assertEqual(fit_size(Size(403, 600), VIEWPORT, CELL), Size(403, 600))

    def test_three_cell_rows_are_reserved_from_height(self) -> None:
        self.assertEqual(fit_size(Size(100, 740), VIEWPORT, CELL), Size(100, 740))
        self.assertNotEqual(fit_size(Size(100, 741), VIEWPORT, CELL), Size(100, 741))

    def test_tall_image_scales_to_reduced_height(self) -> None:
        self.assertEqual(fit_size(Size(1000, 1480), VIEWPORT, CELL), Size(500, 740))

    def test_wide_image_scales_to_viewport_width(self) -> None:
        self.assertEqual(fit_size(Size(2000, 1000), VIEWPORT, CELL), Size(1000, 500))

    def test_scaled_width_truncates_to_whole_cells(self) -> None:
        # 1030 * 0.5 = 515 -> 510, height follows the truncated width.
        self.assertEqual(fit_size(Size(1030, 1480), VIEWPORT, CELL), Size(510, 732))

    def test_scaled_width_never_drops_below_one_cell(self) -> None:
        fitted = fit_size(Size(10, 100000), VIEWPORT, CELL)

        self.assertEqual(fitted.width, CELL.width)
        self.assertGreaterEqual(fitted.height, 1)

    def test_tiny_viewport_does_not_produce_negative_sizes(self) -> None:
        fitted = fit_size(Size(400, 600), Size(100, 40), CELL)

        self.assertGreater(fitted.width, 0)
        self.assertGreater(fitted.height, 0)

    def test_degenerate_image_size_is_returned_clamped(self) -> None:
        self.assertEqual(fit_size(Size(0, 0), VIEWPORT, CELL), Size(0, 0))


class SpreadGeometryTests(unittest.TestCase):
    def test_spread_requires_two_portrait_pages(self) -> None:
        self.assertTrue(spread_fits(Size(300, 600), Size(300, 600), VIEWPORT))
        self.assertFalse(spread_fits(Size(300, 600), Size(600, 300), VIEWPORT))
        self.assertFalse(spread_fits(Size(600, 600), Size(300, 600), VIEWPORT))

    def test_spread_width_comparison_is_strict(self) -> None:
        self.assertFalse(spread_fits(Size(500, 700), Size(500, 700), VIEWPORT))
        self.assertTrue(spread_fits(Size(499, 700), Size(500, 700), VIEWPORT))

    def test_column_offset_rounds_up_to_next_cell(self) -> None:
        self.assertEqual(column_offset(400, CELL), 40)
        self.assertEqual(column_offset(401, CELL), 41)
        self.assertEqual(column_offset(0, CELL), 0)

    def test_size_portrait_flag(self) -> None:
        self.assertTrue(Size(1, 2).is_portrait)
        self.assertFalse(Size(2, 2).is_portrait)
        self.assertFalse(Size(3, 2).is_portrait)


if __name__ == "__main__":
    unittest.main()
