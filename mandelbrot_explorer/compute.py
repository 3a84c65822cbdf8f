"""
Escape-time computation functions using Numba JIT compilation.

This module contains all the performance-critical functions of the
explorer. They are JIT-compiled and work on plain scalars and numpy
arrays so they can be called from Python or from each other:
- Pixel <-> complex plane coordinate transform
- Escape-time iteration count for a single point
- Palette color interpolation
- The per-pixel render pipeline that fills an RGBA buffer

Orbit convention: the orbit starts at the sampled point itself
(z0 = c), not at the origin. This is what gives the explorer its
characteristic look and must not be changed.
"""

import numpy as np
from numba import jit, prange


ESCAPE_RADIUS_SQ = 4.0


@jit(nopython=True, cache=True)
def pixel_to_plane(px, py, width, height, center_x, center_y, scale):
    """
    Map a buffer pixel to a point in the complex plane.

    The horizontal offset is stretched by the buffer aspect ratio.

    Args:
        px, py: Pixel coordinates (row 0 is the top of the buffer)
        width, height: Buffer dimensions in pixels
        center_x, center_y: Plane point shown at the buffer center
        scale: Pixels per plane unit

    Returns:
        (x, y): Real and imaginary parts of the plane point
    """
    aspect = width / height
    x = ((px - width / 2) / scale) * aspect + center_x
    y = (py - height / 2) / scale + center_y
    return x, y


@jit(nopython=True, cache=True)
def plane_to_pixel(x, y, width, height, center_x, center_y, scale):
    """Inverse of pixel_to_plane (returns fractional pixel coordinates)."""
    aspect = width / height
    px = (x - center_x) / aspect * scale + width / 2
    py = (y - center_y) * scale + height / 2
    return px, py


@jit(nopython=True, cache=True)
def escape_count(x, y, max_iter):
    """
    Count iterations until the orbit of (x, y) leaves the radius-2 disk.

    Args:
        x, y: Real and imaginary parts of the sampled point
        max_iter: Iteration budget

    Returns:
        Number of completed non-escaping steps, in [0, max_iter].
        max_iter means the point did not escape (interior).
    """
    zr = x
    zi = y
    iteration = 0
    while iteration < max_iter:
        new_zr = zr * zr - zi * zi + x
        zi = 2 * zr * zi + y
        zr = new_zr
        if zr * zr + zi * zi > ESCAPE_RADIUS_SQ:
            break
        iteration += 1
    return iteration


@jit(nopython=True, cache=True)
def color_for(ratio, palette):
    """
    Interpolate a palette at a normalized position.

    Args:
        ratio: Position in [0, 1]
        palette: Nx3 array of RGB stops (uint8), N >= 2

    Returns:
        (r, g, b) integers, rounded half up
    """
    last = palette.shape[0] - 1
    scaled = ratio * last
    idx0 = int(np.floor(scaled))
    idx1 = min(idx0 + 1, last)
    t = scaled - idx0

    r = int(np.floor(palette[idx0, 0] * (1 - t) + palette[idx1, 0] * t + 0.5))
    g = int(np.floor(palette[idx0, 1] * (1 - t) + palette[idx1, 1] * t + 0.5))
    b = int(np.floor(palette[idx0, 2] * (1 - t) + palette[idx1, 2] * t + 0.5))
    return r, g, b


@jit(nopython=True, parallel=True, cache=True)
def render_pixels(center_x, center_y, scale, max_iter, palette, out):
    """
    Classify and color every pixel of an RGBA buffer.

    Rows are distributed across threads; each thread only writes
    its own rows, so no locking is needed.

    Args:
        center_x, center_y, scale: View parameters (see pixel_to_plane)
        max_iter: Iteration budget
        palette: Nx3 array of RGB stops (uint8)
        out: (height, width, 4) uint8 buffer, modified in place
    """
    height, width = out.shape[0], out.shape[1]

    for py in prange(height):
        for px in range(width):
            x, y = pixel_to_plane(px, py, width, height, center_x, center_y, scale)
            iteration = escape_count(x, y, max_iter)

            if iteration == max_iter:
                # Interior points are black
                out[py, px, 0] = 0
                out[py, px, 1] = 0
                out[py, px, 2] = 0
            else:
                r, g, b = color_for(iteration / max_iter, palette)
                out[py, px, 0] = np.uint8(r)
                out[py, px, 1] = np.uint8(g)
                out[py, px, 2] = np.uint8(b)
            out[py, px, 3] = 255


def warmup_jit(palette):
    """
    Warm up JIT compilation with small dummy arrays.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real frame.

    Args:
        palette: A palette array to compile color_for against
    """
    dummy = np.zeros((4, 4, 4), dtype=np.uint8)
    render_pixels(0.0, 0.0, 2.0, 10, palette, dummy)
    plane_to_pixel(0.0, 0.0, 4, 4, 0.0, 0.0, 2.0)
