"""
Fractal renderer: fills RGBA pixel buffers for the live view and the overview.

Two render configurations share one per-pixel pipeline
(compute.render_pixels):
- the live configuration follows the current Viewport
- the overview configuration is fixed (scale 50, 50 iterations,
  centered on the main cardioid) and only gets a marker showing
  where the live view is looking

Usage:
    renderer = FractalRenderer('ocean')
    buffer = renderer.new_buffer(800, 600)
    renderer.render(buffer, viewport)

    minimap = renderer.new_buffer(150, 150)
    renderer.render(minimap, viewport, overview=True)

The buffer is a (height, width, 4) uint8 numpy array, row 0 at the top.
"""

import time
from typing import NamedTuple

import numpy as np

from .colormaps import DEFAULT_PALETTE, get_colormap
from .compute import plane_to_pixel, render_pixels
from .logging_setup import get_logger


class RenderConfig(NamedTuple):
    """View parameters handed to the per-pixel pipeline."""

    center_x: float
    center_y: float
    scale: float
    max_iter: int


# Fixed overview: shifted left by half a unit so the main cardioid sits centered.
OVERVIEW = RenderConfig(center_x=-0.5, center_y=0.0, scale=50.0, max_iter=50)

MARKER_COLOR = (255, 0, 0, 255)
MARKER_LINE_WIDTH = 2


def live_config(viewport):
    """Render configuration for the live view of `viewport`."""
    return RenderConfig(viewport.center_x, viewport.center_y,
                        float(viewport.scale), int(viewport.max_iter))


def _check_buffer(buffer):
    if not isinstance(buffer, np.ndarray) or buffer.dtype != np.uint8:
        raise ValueError("Pixel buffer must be a uint8 numpy array")
    if buffer.ndim != 3 or buffer.shape[2] != 4:
        raise ValueError(f"Pixel buffer must have shape (height, width, 4), got {buffer.shape}")
    if buffer.shape[0] <= 0 or buffer.shape[1] <= 0:
        raise ValueError("Pixel buffer must not be empty")


def _check_palette(palette):
    if palette.ndim != 2 or palette.shape[1] != 3 or palette.shape[0] < 2:
        raise ValueError("Palette must be an (N, 3) array with N >= 2")


def render_config(buffer, config, palette):
    """Fill `buffer` in place for an explicit render configuration."""
    _check_buffer(buffer)
    _check_palette(palette)
    render_pixels(config.center_x, config.center_y, config.scale,
                  config.max_iter, palette, buffer)
    return buffer


def draw_view_marker(buffer, viewport, color=MARKER_COLOR, line_width=MARKER_LINE_WIDTH):
    """
    Stroke a circle on an overview buffer around the live view's center.

    The radius is the live view's width expressed in overview pixels,
    clamped to [1, width / 2].
    """
    height, width = buffer.shape[:2]
    cx, cy = plane_to_pixel(viewport.center_x, viewport.center_y, width, height,
                            OVERVIEW.center_x, OVERVIEW.center_y, OVERVIEW.scale)
    radius = max(1.0, min(width / viewport.scale * OVERVIEW.scale, width / 2))

    # Distance from each pixel center; the stroke straddles the radius
    yy, xx = np.ogrid[:height, :width]
    dist = np.hypot(xx + 0.5 - cx, yy + 0.5 - cy)
    ring = np.abs(dist - radius) <= line_width / 2
    buffer[ring] = color
    return buffer


def render(buffer, viewport, palette, overview=False):
    """
    Render the fractal into `buffer` in place.

    Args:
        buffer: (height, width, 4) uint8 array
        viewport: Live Viewport snapshot
        palette: (N, 3) uint8 palette array
        overview: Render the fixed overview plus live-view marker instead

    Returns:
        The same buffer, for chaining

    Raises:
        ValueError if the buffer or palette is malformed
    """
    start = time.perf_counter()
    config = OVERVIEW if overview else live_config(viewport)
    render_config(buffer, config, palette)
    if overview:
        draw_view_marker(buffer, viewport)
    get_logger().debug("Rendered %s %sx%s max_iter=%s in %.3fs",
                       "overview" if overview else "view",
                       buffer.shape[1], buffer.shape[0], config.max_iter,
                       time.perf_counter() - start)
    return buffer


class FractalRenderer:
    """
    Holds the active palette and hands out buffers.

    Switching palette swaps the reference to another read-only array;
    the change shows up on the next render call.
    """

    def __init__(self, palette_name=DEFAULT_PALETTE):
        self.palette_name = palette_name
        self.palette = get_colormap(palette_name)

    def set_palette(self, name):
        """Select a registered palette by name (KeyError if unknown)."""
        self.palette = get_colormap(name)
        self.palette_name = name
        get_logger().info("Palette set to %s", name)

    @staticmethod
    def new_buffer(width, height):
        """Allocate a blank RGBA buffer."""
        if width <= 0 or height <= 0:
            raise ValueError("Buffer dimensions must be positive")
        return np.zeros((height, width, 4), dtype=np.uint8)

    def render(self, buffer, viewport, overview=False):
        return render(buffer, viewport, self.palette, overview=overview)

    def render_image(self, viewport, width, height, overview=False):
        """Render into a freshly allocated buffer and return it."""
        return self.render(self.new_buffer(width, height), viewport, overview=overview)
