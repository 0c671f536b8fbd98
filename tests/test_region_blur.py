"""
Tests for the live-referenced rectangular region blur.

Tests cover:
- Gaussian blur helper validation
- Clip-region compositing
- Boundary pixels shifting toward gray
- Compounding on repeated application
- Commutativity on disjoint rectangles
- Degenerate selections
"""

import unittest

import numpy as np
from PIL import Image

from RC_Libs.errors import DegenerateRegion
from RC_Libs.ImageEditingLib.brush_blur import BrushBlurEngine
from RC_Libs.ImageEditingLib.image_models import BrushGeometry, Selection
from RC_Libs.ImageEditingLib.region_blur import RegionBlurEngine, apply_gaussian_blur


def square_image():
    buffer = np.zeros((100, 100, 4), dtype=np.uint8)
    buffer[:, :, 3] = 255
    buffer[25:75, 25:75] = (255, 255, 255, 255)
    return buffer


def step_image():
    buffer = np.zeros((100, 100, 4), dtype=np.uint8)
    buffer[:, :, 3] = 255
    buffer[:, 50:, :3] = 255
    return buffer


class TestApplyGaussianBlur(unittest.TestCase):
    """Test the Gaussian blur helper."""

    def test_returns_same_size(self):
        image = Image.new("RGBA", (40, 30), (255, 0, 0, 255))
        result = apply_gaussian_blur(image, radius=3)

        self.assertEqual(result.size, image.size)
        self.assertEqual(result.mode, "RGBA")

    def test_invalid_radius(self):
        image = Image.new("RGBA", (10, 10))
        with self.assertRaises(ValueError):
            apply_gaussian_blur(image, radius=0)
        with self.assertRaises(ValueError):
            apply_gaussian_blur(image, radius=101)

    def test_invalid_input_type(self):
        with self.assertRaises(TypeError):
            apply_gaussian_blur("not_an_image")

    def test_engine_rejects_invalid_radius(self):
        with self.assertRaises(ValueError):
            RegionBlurEngine(radius=0)


class TestRegionBlurEngine(unittest.TestCase):
    """Test RegionBlurEngine.apply."""

    def setUp(self):
        self.engine = RegionBlurEngine()

    def test_boundary_shifts_toward_gray(self):
        """End-to-end: boundary pixels turn gray, far pixels stay put."""
        original = square_image()
        buffer = original.copy()
        selection = Selection(0, 40, 40, 20)

        changed = self.engine.apply(buffer, selection)

        self.assertEqual(changed, selection)
        for x in (24, 25):
            value = int(buffer[50, x, 0])
            self.assertGreater(value, 40, f"pixel ({x}, 50) should be gray, got {value}")
            self.assertLess(value, 215, f"pixel ({x}, 50) should be gray, got {value}")
        # Far from any white pixel inside the selection
        self.assertEqual(buffer[50, 0, :3].tolist(), [0, 0, 0])

    def test_pixels_outside_selection_untouched(self):
        original = square_image()
        buffer = original.copy()
        selection = Selection(10, 10, 30, 30)

        self.engine.apply(buffer, selection)

        outside = np.ones((100, 100), dtype=bool)
        outside[10:40, 10:40] = False
        self.assertTrue(np.array_equal(buffer[outside], original[outside]))
        self.assertFalse(np.array_equal(buffer[10:40, 10:40], original[10:40, 10:40]))

    def test_selection_is_clamped(self):
        buffer = square_image()
        changed = self.engine.apply(buffer, Selection(-20, 80, 200, 50))
        self.assertEqual(changed, Selection(0, 80, 100, 20))

    def test_degenerate_selection_raises(self):
        original = square_image()
        buffer = original.copy()

        with self.assertRaises(DegenerateRegion):
            self.engine.apply(buffer, Selection(30, 30, 0, 10))
        with self.assertRaises(DegenerateRegion):
            self.engine.apply(buffer, Selection(300, 300, 10, 10))
        self.assertTrue(np.array_equal(buffer, original))

    def test_repeated_application_compounds(self):
        """Variance of the region drops with every pass."""
        buffer = step_image()
        selection = Selection(30, 0, 40, 100)
        variances = [buffer[:, 30:70, 0].astype(np.float64).var()]

        for _ in range(3):
            self.engine.apply(buffer, selection)
            variances.append(buffer[:, 30:70, 0].astype(np.float64).var())

        for before, after in zip(variances, variances[1:]):
            self.assertLess(after, before)

    def test_compounds_unlike_brush(self):
        """Region blur deepens on reapplication; brush blur does not."""
        region_once = step_image()
        region_twice = step_image()
        self.engine.apply(region_once, Selection(30, 30, 40, 40))
        self.engine.apply(region_twice, Selection(30, 30, 40, 40))
        self.engine.apply(region_twice, Selection(30, 30, 40, 40))
        self.assertFalse(np.array_equal(region_once, region_twice))

        baseline = step_image()
        brush_once = step_image()
        brush_twice = step_image()
        brush = BrushBlurEngine()
        brush.apply(brush_once, baseline, (50, 50), BrushGeometry(40))
        brush.apply(brush_twice, baseline, (50, 50), BrushGeometry(40))
        brush.apply(brush_twice, baseline, (50, 50), BrushGeometry(40))
        self.assertTrue(np.array_equal(brush_once, brush_twice))

    def test_disjoint_regions_commute(self):
        rng = np.random.default_rng(7)
        original = rng.integers(0, 256, size=(60, 200, 4), dtype=np.uint8)
        original[:, :, 3] = 255
        left = Selection(0, 0, 40, 60)
        right = Selection(160, 0, 40, 60)

        first = original.copy()
        self.engine.apply(first, left)
        self.engine.apply(first, right)

        second = original.copy()
        self.engine.apply(second, right)
        self.engine.apply(second, left)

        self.assertTrue(np.array_equal(first, second))
