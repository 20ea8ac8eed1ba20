"""
signature/tests/test_geometry.py

Placement geometry: coordinate flip, clamping and aspect-preserving fit.
"""

from __future__ import annotations

import random
import unittest

from signature.exceptions.errors import DegenerateBoxError, InvalidImageError
from signature.logic.geometry import clamp01, resolve_placement, target_rect
from signature.models.normalized_box import NormalizedBox


class TestClamp(unittest.TestCase):
    def test_clamp_values(self) -> None:
        self.assertEqual(clamp01(-1), 0.0)
        self.assertEqual(clamp01(2), 1.0)
        self.assertEqual(clamp01(0.25), 0.25)
        self.assertEqual(clamp01(float("nan")), 0.0)
        self.assertEqual(clamp01("abc"), 0.0)
        self.assertEqual(clamp01(None), 0.0)


class TestResolvePlacement(unittest.TestCase):
    def test_square_image_in_wide_box_fits_to_height(self) -> None:
        box = NormalizedBox(x=0, y=0, width=0.5, height=0.25)
        rect = resolve_placement(box, 600, 800, 1.0)
        self.assertAlmostEqual(rect.x, 50.0)
        self.assertAlmostEqual(rect.y, 600.0)
        self.assertAlmostEqual(rect.width, 200.0)
        self.assertAlmostEqual(rect.height, 200.0)

    def test_wide_image_fits_to_width_and_centres_vertically(self) -> None:
        box = NormalizedBox(x=0.1, y=0.1, width=0.5, height=0.25)
        rect = resolve_placement(box, 600, 800, 3.0)
        # target: x=60, w=300, h=200, y=800-80-200=520
        self.assertAlmostEqual(rect.width, 300.0)
        self.assertAlmostEqual(rect.height, 100.0)
        self.assertAlmostEqual(rect.x, 60.0)
        self.assertAlmostEqual(rect.y, 520.0 + 50.0)

    def test_out_of_range_values_are_clamped(self) -> None:
        clamped = resolve_placement(NormalizedBox(x=-1, y=2, width=0.5, height=0.5), 600, 800, 1.5)
        expected = resolve_placement(NormalizedBox(x=0, y=1, width=0.5, height=0.5), 600, 800, 1.5)
        self.assertEqual(clamped, expected)
        self.assertAlmostEqual(clamped.y, -400.0 + (400.0 - 300.0 / 1.5) / 2)

    def test_zero_width_or_height_is_degenerate(self) -> None:
        with self.assertRaises(DegenerateBoxError):
            resolve_placement(NormalizedBox(x=0, y=0, width=0, height=0.5), 600, 800, 1.0)
        with self.assertRaises(DegenerateBoxError):
            resolve_placement(NormalizedBox(x=0, y=0, width=0.5, height=-3), 600, 800, 1.0)
        with self.assertRaises(DegenerateBoxError):
            target_rect(NormalizedBox(x=0, y=0, width=0.5, height=0.5), 600, 0)

    def test_invalid_aspect_rejected(self) -> None:
        box = NormalizedBox(x=0, y=0, width=0.5, height=0.5)
        for aspect in (0.0, -1.0, float("inf"), float("nan")):
            with self.assertRaises(InvalidImageError):
                resolve_placement(box, 600, 800, aspect)

    def test_result_contained_and_aspect_preserved(self) -> None:
        rnd = random.Random(1234)
        for _ in range(500):
            box = NormalizedBox(
                x=rnd.uniform(0, 1), y=rnd.uniform(0, 1),
                width=rnd.uniform(0.001, 1), height=rnd.uniform(0.001, 1),
            )
            page_w, page_h = rnd.uniform(50, 2000), rnd.uniform(50, 2000)
            aspect = rnd.choice([rnd.uniform(0.01, 1), rnd.uniform(1, 100)])

            target = target_rect(box, page_w, page_h)
            rect = resolve_placement(box, page_w, page_h, aspect)

            tol = 1e-9 * max(page_w, page_h)
            self.assertGreaterEqual(rect.x, target.x - tol)
            self.assertGreaterEqual(rect.y, target.y - tol)
            self.assertLessEqual(rect.right, target.right + tol)
            self.assertLessEqual(rect.top, target.top + tol)
            self.assertAlmostEqual((rect.width / rect.height) / aspect, 1.0, delta=1e-6)


if __name__ == "__main__":
    unittest.main()
