"""
Palette definitions for the explorer.

Each palette is a small, ordered list of RGB stops. compute.color_for
interpolates linearly between neighbouring stops, so a handful of
stops is enough for a smooth gradient.

Palettes are stored as read-only numpy arrays of shape (N, 3), uint8.
Switching palettes means picking another array, never editing one.

To add a new palette:
1. Add its stops to _PALETTE_STOPS below (at least 2 stops)
2. It is picked up by COLORMAPS and the palette cycling keys automatically
"""

import numpy as np


# Insertion order is the cycling order in the explorer window.
_PALETTE_STOPS = {
    'initial': [
        (0, 7, 100),
        (32, 107, 203),
        (237, 255, 255),
        (255, 170, 0),
        (0, 2, 0),
        (237, 255, 255),
        (255, 170, 0),
        (0, 2, 0),
    ],
    # The classic 16-color "Ultra Fractal" style gradient
    'original': [
        (66, 30, 15),
        (25, 7, 26),
        (9, 1, 47),
        (4, 4, 73),
        (0, 7, 100),
        (12, 44, 138),
        (24, 82, 177),
        (57, 125, 209),
        (134, 181, 229),
        (211, 236, 248),
        (241, 233, 191),
        (248, 201, 95),
        (255, 170, 0),
        (204, 128, 0),
        (153, 87, 0),
        (106, 52, 3),
    ],
    'cool': [
        (0, 0, 0),
        (0, 7, 100),
        (32, 107, 203),
        (237, 255, 255),
        (255, 170, 0),
        (0, 2, 0),
    ],
    'warm': [
        (0, 0, 0),
        (102, 2, 4),
        (255, 0, 0),
        (255, 200, 0),
        (255, 255, 255),
    ],
    'grayscale': [
        (0, 0, 0),
        (32, 32, 32),
        (64, 64, 64),
        (128, 128, 128),
        (192, 192, 192),
        (255, 255, 255),
    ],
    'psychedelic': [
        (0, 0, 0),
        (255, 0, 0),
        (255, 255, 0),
        (0, 255, 0),
        (0, 255, 255),
        (0, 0, 255),
        (255, 0, 255),
    ],
    'ocean': [
        (0, 0, 32),
        (0, 128, 255),
        (0, 255, 255),
        (255, 255, 255),
    ],
    'forest': [
        (0, 32, 0),
        (0, 64, 0),
        (0, 128, 0),
        (128, 255, 0),
        (255, 255, 0),
    ],
}

DEFAULT_PALETTE = 'initial'


def make_palette(stops):
    """
    Build a read-only palette array from a sequence of RGB stops.

    Args:
        stops: Sequence of (r, g, b) tuples, channels in 0-255

    Returns:
        Read-only numpy array (N, 3) of uint8

    Raises:
        ValueError if there are fewer than 2 stops or a channel is out of range
    """
    colors = np.asarray(stops, dtype=np.int64)
    if colors.ndim != 2 or colors.shape[1] != 3 or colors.shape[0] < 2:
        raise ValueError("A palette needs at least 2 RGB stops")
    if colors.min() < 0 or colors.max() > 255:
        raise ValueError("Palette channels must be in 0-255")
    palette = colors.astype(np.uint8)
    palette.setflags(write=False)
    return palette


# Registry of all available palettes, keyed by name.
COLORMAPS = {name: make_palette(stops) for name, stops in _PALETTE_STOPS.items()}


def get_colormap(name):
    """
    Get a palette by name.

    Args:
        name: Key from COLORMAPS dictionary

    Returns:
        Palette array (N, 3) of uint8 RGB values

    Raises:
        KeyError if name not found
    """
    return COLORMAPS[name]


def get_default_colormap():
    """Get the default palette (initial)."""
    return COLORMAPS[DEFAULT_PALETTE]


def list_colormap_names():
    """Get list of available palette names."""
    return list(COLORMAPS.keys())


def next_colormap_name(name, step=1):
    """Name of the palette `step` places after `name`, wrapping around."""
    names = list_colormap_names()
    return names[(names.index(name) + step) % len(names)]
