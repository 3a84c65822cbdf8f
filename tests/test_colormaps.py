"""
Unit tests for the palette registry.
Run from project root: python -m pytest tests/ -v
"""
import unittest

import numpy as np

from mandelbrot_explorer.colormaps import (
    COLORMAPS,
    get_colormap,
    get_default_colormap,
    list_colormap_names,
    make_palette,
    next_colormap_name,
)


class TestColormaps(unittest.TestCase):

    def test_registered_names_in_menu_order(self):
        self.assertEqual(list_colormap_names(), [
            'initial', 'original', 'cool', 'warm',
            'grayscale', 'psychedelic', 'ocean', 'forest',
        ])

    def test_palette_shapes(self):
        """Every palette is an (N, 3) uint8 array with at least 4 stops."""
        for name, palette in COLORMAPS.items():
            with self.subTest(palette=name):
                self.assertEqual(palette.dtype, np.uint8)
                self.assertEqual(palette.shape[1], 3)
                self.assertGreaterEqual(palette.shape[0], 4)

    def test_palettes_are_read_only(self):
        """Palettes cannot be edited in place."""
        with self.assertRaises(ValueError):
            get_colormap('warm')[0, 0] = 1

    def test_lookup(self):
        self.assertIs(get_default_colormap(), COLORMAPS['initial'])
        self.assertEqual(tuple(get_colormap('ocean')[-1]), (255, 255, 255))
        with self.assertRaises(KeyError):
            get_colormap('sepia')

    def test_cycling_wraps_around(self):
        self.assertEqual(next_colormap_name('initial'), 'original')
        self.assertEqual(next_colormap_name('forest'), 'initial')
        self.assertEqual(next_colormap_name('initial', -1), 'forest')

    def test_make_palette_validation(self):
        with self.assertRaises(ValueError):
            make_palette([(0, 0, 0)])
        with self.assertRaises(ValueError):
            make_palette([(0, 0, 0), (256, 0, 0)])
        self.assertEqual(make_palette([(0, 0, 0), (1, 2, 3)]).shape, (2, 3))


if __name__ == "__main__":
    unittest.main()
