from __future__ import annotations

import time
import unittest

import numpy as np

from gridwise_plot.raster import (
    Bounds,
    RasterSurface,
    clip_segment,
    draw_segment,
    draw_text,
    fill_rect,
    new_canvas,
    text_size,
)


class CanvasTests(unittest.TestCase):
    def test_new_canvas_rejects_empty_sizes(self) -> None:
        with self.assertRaises(ValueError):
            new_canvas(0, 10)

    def test_fill_rect_is_inclusive_and_clipped(self) -> None:
        canvas = new_canvas(10, 10, color=(0, 0, 0, 255))
        fill_rect(canvas, 8, 8, 20, 20, (255, 255, 255, 255))
        self.assertEqual(int(np.count_nonzero(canvas[:, :, 0])), 4)

    def test_half_transparent_fill_blends(self) -> None:
        canvas = new_canvas(4, 4, color=(0, 0, 0, 255))
        fill_rect(canvas, 0, 0, 3, 3, (200, 100, 0, 128))
        self.assertTrue(0 < int(canvas[0, 0, 0]) < 200)


class TextTests(unittest.TestCase):
    def test_text_uses_antialias_coverage(self) -> None:
        canvas = new_canvas(220, 80, color=(0, 0, 0, 0))
        draw_text(canvas, 10, 20, "Axis 0.25", (255, 255, 255, 255), font_size_px=24.0)
        chan = canvas[:, :, 0]
        self.assertTrue(np.any(chan > 0))
        self.assertEqual(int(canvas[0, 0, 3]), 0)

    def test_rotated_text_size_swaps_dimensions(self) -> None:
        w0, h0 = text_size("value", font_size_px=18.0)
        w1, h1 = text_size("value", font_size_px=18.0, rotate_deg=90)
        self.assertEqual((w0, h0), (h1, w1))

    def test_italic_text_is_wider(self) -> None:
        upright = text_size("caption", font_size_px=14.0)
        italic = text_size("caption", font_size_px=14.0, italic=True)
        self.assertGreaterEqual(italic[0], upright[0])

    def test_rotation_must_be_quarter_turns(self) -> None:
        with self.assertRaises(ValueError):
            text_size("x", rotate_deg=45)


class RasterSurfaceTests(unittest.TestCase):
    def test_surface_dimensions(self) -> None:
        surface = RasterSurface(64, 32)
        self.assertEqual((surface.width, surface.height), (64, 32))
        self.assertEqual(surface.canvas.shape, (32, 64, 4))

    def test_right_aligned_text_ends_at_anchor(self) -> None:
        surface = RasterSurface(200, 60, background=(0, 0, 0, 255))
        surface.fill_text(150, 30, "123", (255, 255, 255, 255), size_px=16.0, halign="right", valign="center")
        cols = np.nonzero(surface.canvas[:, :, 0].any(axis=0))[0]
        self.assertGreater(len(cols), 0)
        self.assertLessEqual(int(cols.max()), 151)

    def test_stroke_line_draws_diagonals(self) -> None:
        surface = RasterSurface(20, 20, background=(0, 0, 0, 255))
        surface.stroke_line(0, 0, 19, 19, (255, 0, 0, 255))
        self.assertEqual(int(surface.canvas[10, 10, 0]), 255)

    def test_zero_sized_rect_draws_nothing(self) -> None:
        surface = RasterSurface(10, 10, background=(0, 0, 0, 255))
        surface.fill_rect(2, 2, 0, 5, (255, 0, 0, 255))
        self.assertFalse(np.any(surface.canvas[:, :, 0]))


class ClipSegmentTests(unittest.TestCase):
    def test_inside_segment_is_unchanged(self) -> None:
        self.assertEqual(clip_segment(1, 2, 8, 9, 0, 0, 10, 10), (1, 2, 8, 9))

    def test_segment_is_cut_at_the_edges(self) -> None:
        clipped = clip_segment(-10, 5, 20, 5, 0, 0, 10, 10)
        assert clipped is not None
        for got, want in zip(clipped, (0.0, 5.0, 10.0, 5.0), strict=True):
            self.assertAlmostEqual(got, want)
        clipped = clip_segment(5, 5, 5 + 1e9, 5 - 1e9, 0, 0, 10, 10)
        assert clipped is not None
        _, _, x1, y1 = clipped
        self.assertAlmostEqual(x1, 10.0)
        self.assertAlmostEqual(y1, 0.0)

    def test_outside_segment_is_dropped(self) -> None:
        self.assertIsNone(clip_segment(-5, -5, -1, 20, 0, 0, 10, 10))
        self.assertIsNone(clip_segment(20, 0, 30, 10, 0, 0, 10, 10))

    def test_far_off_canvas_segment_draws_quickly(self) -> None:
        canvas = new_canvas(200, 150, color=(0, 0, 0, 255))
        started = time.perf_counter()
        draw_segment(canvas, 20, 140, 30, -3e8, (255, 0, 0, 255), width=2)
        self.assertLess(time.perf_counter() - started, 2.0)
        self.assertTrue(np.any(canvas[:, :, 0]))
        self.assertEqual(int(canvas[149, 199, 0]), 0)


class BoundsTests(unittest.TestCase):
    def test_contains(self) -> None:
        bounds = Bounds(10, 20, 100, 50)
        self.assertEqual((bounds.right, bounds.bottom), (110, 70))
        self.assertTrue(bounds.contains(10, 20, 100, 50))
        self.assertFalse(bounds.contains(9, 20))
        self.assertFalse(bounds.contains(50, 30, 61, 1))


if __name__ == "__main__":
    unittest.main()
