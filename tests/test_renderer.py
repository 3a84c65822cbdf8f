"""
Unit tests for live and overview rendering.
Run from project root: python -m pytest tests/ -v
"""
import unittest

import numpy as np

from mandelbrot_explorer.colormaps import get_colormap
from mandelbrot_explorer.renderer import (
    MARKER_COLOR,
    OVERVIEW,
    FractalRenderer,
    live_config,
    render,
)
from mandelbrot_explorer.viewport import DEFAULT_VIEWPORT, Viewport


def _is_marker(buffer):
    return (buffer == np.array(MARKER_COLOR, dtype=np.uint8)).all(axis=-1)


class TestLiveRender(unittest.TestCase):

    def setUp(self):
        self.palette = get_colormap('initial')

    def test_center_of_default_view_is_black(self):
        """The plane origin is interior, so the center pixel is opaque black."""
        buffer = np.zeros((60, 80, 4), dtype=np.uint8)
        render(buffer, DEFAULT_VIEWPORT, self.palette)
        self.assertEqual(tuple(buffer[30, 40]), (0, 0, 0, 255))
        self.assertTrue((buffer[:, :, 3] == 255).all())

    def test_immediate_escape_gets_first_palette_color(self):
        """A pixel at x = 3 escapes with count 0 and gets palette[0]."""
        buffer = np.zeros((60, 80, 4), dtype=np.uint8)
        render(buffer, Viewport(center_x=3.0), self.palette)
        self.assertEqual(tuple(buffer[30, 40, :3]), tuple(self.palette[0]))

    def test_render_fills_in_place_and_returns_buffer(self):
        """render writes into the caller's buffer and hands it back."""
        buffer = np.zeros((20, 20, 4), dtype=np.uint8)
        self.assertIs(render(buffer, DEFAULT_VIEWPORT, self.palette), buffer)
        self.assertTrue(buffer.any())

    def test_live_config_follows_viewport(self):
        """The live configuration copies center, scale and budget."""
        v = Viewport(-0.5, 0.25, 800.0, 964)
        self.assertEqual(tuple(live_config(v)), (-0.5, 0.25, 800.0, 964))

    def test_palette_swap_changes_output(self):
        """Rendering the same view with another palette gives other colors."""
        a = np.zeros((40, 40, 4), dtype=np.uint8)
        b = np.zeros((40, 40, 4), dtype=np.uint8)
        view = Viewport(scale=10.0)
        render(a, view, get_colormap('initial'))
        render(b, view, get_colormap('grayscale'))
        self.assertFalse(np.array_equal(a, b))

    def test_rejects_malformed_input(self):
        """Wrong buffer shape, empty buffer or short palette raise ValueError."""
        with self.assertRaises(ValueError):
            render(np.zeros((10, 10, 3), dtype=np.uint8), DEFAULT_VIEWPORT, self.palette)
        with self.assertRaises(ValueError):
            render(np.zeros((0, 10, 4), dtype=np.uint8), DEFAULT_VIEWPORT, self.palette)
        with self.assertRaises(ValueError):
            render(np.zeros((10, 10, 4), dtype=np.float64), DEFAULT_VIEWPORT, self.palette)
        with self.assertRaises(ValueError):
            render(np.zeros((10, 10, 4), dtype=np.uint8), DEFAULT_VIEWPORT,
                   np.zeros((1, 3), dtype=np.uint8))


class TestOverviewRender(unittest.TestCase):

    def setUp(self):
        self.palette = get_colormap('initial')

    def test_overview_configuration_is_fixed(self):
        """The overview always uses scale 50, 50 iterations, center (-0.5, 0)."""
        self.assertEqual(tuple(OVERVIEW), (-0.5, 0.0, 50.0, 50))

    def test_overview_ignores_live_depth_apart_from_marker(self):
        """Two overviews for different live views match outside the markers."""
        a = np.zeros((150, 150, 4), dtype=np.uint8)
        b = np.zeros((150, 150, 4), dtype=np.uint8)
        render(a, DEFAULT_VIEWPORT, self.palette, overview=True)
        render(b, Viewport(-1.25, 0.1, 51200.0, 1000), self.palette, overview=True)
        unmarked = ~(_is_marker(a) | _is_marker(b))
        self.assertTrue(unmarked.any())
        self.assertTrue(np.array_equal(a[unmarked], b[unmarked]))

    def test_marker_circle_around_live_center(self):
        """Default view: marker centered at (100, 75) with radius 37.5 on a 150px overview."""
        buffer = np.zeros((150, 150, 4), dtype=np.uint8)
        render(buffer, DEFAULT_VIEWPORT, self.palette, overview=True)
        marker = _is_marker(buffer)
        self.assertTrue(marker[75, 137])
        self.assertTrue(marker[75, 62])
        self.assertTrue(marker[37, 100])
        self.assertFalse(marker[75, 100])

    def test_marker_follows_live_center_y(self):
        """Live center (0, 0.5) puts the marker at (100, 100); the overview itself stays put."""
        buffer = np.zeros((150, 150, 4), dtype=np.uint8)
        render(buffer, Viewport(0.0, 0.5, 200.0, 100), self.palette, overview=True)
        marker = _is_marker(buffer)
        self.assertTrue(marker[100, 137])
        self.assertTrue(marker[100, 62])
        self.assertTrue(marker[62, 100])
        self.assertFalse(marker[100, 100])
        self.assertFalse(marker[75, 137])

        plain = np.zeros((150, 150, 4), dtype=np.uint8)
        render(plain, DEFAULT_VIEWPORT, self.palette, overview=True)
        unmarked = ~(marker | _is_marker(plain))
        self.assertTrue(np.array_equal(buffer[unmarked], plain[unmarked]))

    def test_marker_radius_is_clamped(self):
        """At deep zoom the marker shrinks to radius 1 around the center."""
        buffer = np.zeros((150, 150, 4), dtype=np.uint8)
        render(buffer, Viewport(0.0, 0.0, 1e6, 1000), self.palette, overview=True)
        marker = _is_marker(buffer)
        self.assertTrue(marker[75, 100])
        self.assertLessEqual(marker.sum(), 16)

        buffer = np.zeros((150, 150, 4), dtype=np.uint8)
        render(buffer, Viewport(0.0, 0.0, 1.0, 1), self.palette, overview=True)
        marker = _is_marker(buffer)
        # radius capped at width / 2 = 75
        self.assertTrue(marker[75, 25])
        self.assertFalse(marker[75, 100])


class TestFractalRenderer(unittest.TestCase):

    def test_palette_selection(self):
        """set_palette swaps to a registered palette and rejects unknown names."""
        renderer = FractalRenderer()
        self.assertEqual(renderer.palette_name, 'initial')
        renderer.set_palette('ocean')
        self.assertIs(renderer.palette, get_colormap('ocean'))
        with self.assertRaises(KeyError):
            renderer.set_palette('nope')
        self.assertEqual(renderer.palette_name, 'ocean')

    def test_render_image_allocates_buffer(self):
        """render_image returns a fresh (height, width, 4) buffer."""
        renderer = FractalRenderer('warm')
        buffer = renderer.render_image(DEFAULT_VIEWPORT, 32, 24)
        self.assertEqual(buffer.shape, (24, 32, 4))
        self.assertEqual(buffer.dtype, np.uint8)

    def test_new_buffer_rejects_empty_size(self):
        with self.assertRaises(ValueError):
            FractalRenderer.new_buffer(0, 10)


if __name__ == "__main__":
    unittest.main()
