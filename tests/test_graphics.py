"""
Drawing primitive, surface and wheel renderer tests.

Pixel checks sample well inside each region so anti-aliasing-free edges
and label glyphs never land on a sampled pixel.
"""

import math
import unittest

import numpy as np

from prizewheel.graphics.primitives import (
    draw_circle,
    draw_polygon,
    draw_text,
    draw_text_rotated,
    draw_wedge,
    measure_text,
)
from prizewheel.graphics.renderer import WheelLayout, WheelRenderer, WheelStyle
from prizewheel.graphics.surface import BufferSurface
from prizewheel.settings import DisplaySettings
from prizewheel.wheel.geometry import WheelGeometry, build_sectors

LABELS = ["Try Again", "$5", "$10", "$20", "$50", "$100"]
COLORS = [(248, 113, 113), (251, 191, 36), (96, 165, 250),
          (52, 211, 153), (167, 139, 250), (244, 114, 182)]


def blank(size: int = 20) -> np.ndarray:
    return np.zeros((size, size, 3), dtype=np.uint8)


class TestPrimitives(unittest.TestCase):

    def test_filled_circle(self):
        buffer = blank()
        draw_circle(buffer, 10, 10, 5, (255, 0, 0))
        self.assertEqual(tuple(buffer[10, 10]), (255, 0, 0))
        self.assertEqual(tuple(buffer[0, 0]), (0, 0, 0))

    def test_ring_leaves_center_untouched(self):
        buffer = blank()
        draw_circle(buffer, 10, 10, 8, (0, 255, 0), filled=False, thickness=2)
        self.assertEqual(tuple(buffer[10, 10]), (0, 0, 0))
        self.assertEqual(tuple(buffer[10, 17]), (0, 255, 0))

    def test_wedge_quarter_runs_clockwise_on_screen(self):
        buffer = blank()
        draw_wedge(buffer, 10, 10, 10, 0.0, math.pi / 2, (1, 2, 3))
        # 0..pi/2 with y down is the lower-right quadrant
        self.assertEqual(tuple(buffer[15, 15]), (1, 2, 3))
        self.assertEqual(tuple(buffer[5, 15]), (0, 0, 0))
        self.assertEqual(tuple(buffer[5, 5]), (0, 0, 0))
        self.assertEqual(tuple(buffer[15, 5]), (0, 0, 0))

    def test_wedge_accepts_unnormalized_angles(self):
        a = blank()
        b = blank()
        draw_wedge(a, 10, 10, 10, 0.0, math.pi / 2, (9, 9, 9))
        draw_wedge(b, 10, 10, 10, 40 * math.pi, 40 * math.pi + math.pi / 2, (9, 9, 9))
        self.assertTrue(np.array_equal(a, b))

    def test_full_turn_wedge_fills_disc(self):
        buffer = blank()
        draw_wedge(buffer, 10, 10, 6, 1.0, 1.0 + 2 * math.pi, (7, 7, 7))
        self.assertEqual(tuple(buffer[10, 4 + 1]), (7, 7, 7))
        self.assertEqual(tuple(buffer[4 + 1, 10]), (7, 7, 7))

    def test_polygon_either_winding(self):
        for points in ([(2, 2), (18, 2), (10, 18)], [(10, 18), (18, 2), (2, 2)]):
            buffer = blank()
            draw_polygon(buffer, points, (5, 5, 5))
            self.assertEqual(tuple(buffer[6, 10]), (5, 5, 5))
            self.assertEqual(tuple(buffer[17, 3]), (0, 0, 0))

    def test_measure_text(self):
        self.assertEqual(measure_text("$5"), (7, 5))
        self.assertEqual(measure_text("$5", scale=2), (14, 10))
        self.assertEqual(measure_text(""), (0, 5))

    def test_unrotated_text_matches_draw_text(self):
        expected = blank(40)
        draw_text(expected, "$100", 3, 7, (255, 255, 255))

        rotated = blank(40)
        draw_text_rotated(rotated, "$100", 3, 7 + 2.5, 0.0, (255, 255, 255), align="left")
        self.assertTrue(np.array_equal(expected, rotated))

    def test_rotated_text_stays_near_anchor(self):
        buffer = blank(60)
        draw_text_rotated(buffer, "TRY", 30, 30, math.pi / 2, (255, 255, 255), align="right")
        ys, xs = np.nonzero(buffer[:, :, 0])
        self.assertTrue(len(ys) > 0)
        # Right-aligned along +y: glyphs sit above the anchor
        self.assertLessEqual(ys.max(), 30)
        self.assertTrue(np.all(np.abs(xs - 30) <= 3))

    def test_bad_alignment(self):
        with self.assertRaises(ValueError):
            draw_text_rotated(blank(), "X", 5, 5, 0.0, (1, 1, 1), align="justify")


class TestBufferSurface(unittest.TestCase):

    def test_physical_size_follows_pixel_ratio(self):
        surface = BufferSurface(size=100, pixel_ratio=2)
        self.assertEqual((surface.width, surface.height), (200, 200))
        self.assertEqual(surface.logical_size, 100)
        self.assertEqual(surface.get_buffer().shape, (200, 200, 3))

    def test_invalid_ratio(self):
        with self.assertRaises(ValueError):
            BufferSurface(size=100, pixel_ratio=0)

    def test_get_buffer_is_a_copy(self):
        surface = BufferSurface(size=32)
        buffer = surface.get_buffer()
        buffer[:] = 200
        self.assertEqual(int(surface.buffer.max()), 0)

    def test_set_buffer_crops_mismatched_shapes(self):
        surface = BufferSurface(size=32)
        big = np.full((40, 40, 3), 9, dtype=np.uint8)
        surface.set_buffer(big)
        self.assertEqual(surface.buffer.shape, (32, 32, 3))
        self.assertEqual(int(surface.buffer.min()), 9)

    def test_clear(self):
        surface = BufferSurface(size=32)
        surface.clear(1, 2, 3)
        self.assertEqual(tuple(surface.buffer[5, 5]), (1, 2, 3))


class TestWheelRenderer(unittest.TestCase):

    def setUp(self):
        self.geometry = WheelGeometry(build_sectors(LABELS, COLORS))
        self.renderer = WheelRenderer(self.geometry)
        self.buffer = BufferSurface(size=240).get_buffer()
        self.center = 120.0

    def pixel(self, angle: float, radius: float):
        x = self.center + radius * math.cos(angle)
        y = self.center + radius * math.sin(angle)
        return tuple(int(c) for c in self.buffer[int(y), int(x)])

    def test_sector_colors_at_rest(self):
        self.renderer.render(self.buffer, 0.0)
        a = self.geometry.sector_angle
        for i, color in enumerate(COLORS):
            self.assertEqual(self.pixel((i + 0.25) * a, 60), color, f"sector {i}")

    def test_rotation_moves_sectors_clockwise(self):
        a = self.geometry.sector_angle
        self.renderer.render(self.buffer, a)
        # One sector of clockwise rotation brings the last sector to angle 0
        self.assertEqual(self.pixel(0.25 * a, 60), COLORS[5])
        self.assertEqual(self.pixel(1.25 * a, 60), COLORS[0])

    def test_hub_background_and_pointer(self):
        style = WheelStyle()
        self.renderer.render(self.buffer, 1.234)
        self.assertEqual(tuple(self.buffer[120, 120]), style.hub_color)
        self.assertEqual(tuple(self.buffer[0, 0]), style.background)
        self.assertEqual(tuple(self.buffer[239, 239]), style.background)
        # Pointer hangs over the rim at 12 o'clock
        self.assertEqual(tuple(self.buffer[12, 120]), style.pointer_color)

    def test_render_is_a_pure_function_of_rotation(self):
        first = self.buffer.copy()
        second = self.buffer.copy()
        self.renderer.render(first, 3.3)
        self.renderer.render(np.full_like(second, 77), 0.0)
        self.renderer.render(second, 3.3)
        self.assertTrue(np.array_equal(first, second))

    def test_labels_are_drawn(self):
        renderer = WheelRenderer(self.geometry, WheelStyle(label_color=(1, 2, 3)))
        renderer.render(self.buffer, 0.0)
        text = np.all(self.buffer == (1, 2, 3), axis=-1)
        self.assertGreater(int(text.sum()), 0)

    def test_style_from_settings(self):
        style = WheelStyle.from_settings(DisplaySettings())
        self.assertEqual(style.background, (11, 16, 32))
        self.assertEqual(style.pointer_color, (255, 59, 59))


class TestWheelLayout(unittest.TestCase):

    def test_scales_with_pixel_ratio(self):
        single = WheelLayout.for_buffer(240, 240, 1)
        double = WheelLayout.for_buffer(480, 480, 2)
        self.assertEqual(single.stroke, 2)
        self.assertEqual(double.stroke, 4)
        self.assertAlmostEqual(double.radius, single.radius * 2)
        self.assertGreater(double.text_scale, single.text_scale)

    def test_too_small(self):
        with self.assertRaises(ValueError):
            WheelLayout.for_buffer(10, 10)


if __name__ == "__main__":
    unittest.main()
