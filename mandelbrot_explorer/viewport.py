"""
Viewport value type: the mapping from buffer pixels to the complex plane.

A Viewport is immutable. Navigation (see history.py) produces new
Viewport values; rendering only reads them, so a render always works
on the snapshot it was given.
"""

from dataclasses import dataclass

from .compute import pixel_to_plane, plane_to_pixel


@dataclass(frozen=True)
class Viewport:
    """
    Center point, zoom and iteration budget of a view.

    Attributes:
        center_x, center_y: Plane point shown at the buffer center
        scale: Pixels per plane unit (> 0)
        max_iter: Iteration budget (>= 1)
    """

    center_x: float = 0.0
    center_y: float = 0.0
    scale: float = 200.0
    max_iter: int = 100

    def __post_init__(self):
        if not self.scale > 0:
            raise ValueError(f"Viewport scale must be positive, got {self.scale!r}")
        if self.max_iter < 1:
            raise ValueError(f"Viewport max_iter must be >= 1, got {self.max_iter!r}")

    def pixel_to_plane(self, px, py, width, height):
        """Plane coordinates (x, y) of buffer pixel (px, py)."""
        if width <= 0 or height <= 0:
            raise ValueError("Buffer dimensions must be positive")
        return pixel_to_plane(px, py, width, height,
                              self.center_x, self.center_y, self.scale)

    def plane_to_pixel(self, x, y, width, height):
        """Fractional buffer pixel (px, py) showing plane point (x, y)."""
        if width <= 0 or height <= 0:
            raise ValueError("Buffer dimensions must be positive")
        return plane_to_pixel(x, y, width, height,
                              self.center_x, self.center_y, self.scale)

    def describe(self):
        """Readout text, e.g. 'Center: (0.000000, 0.000000) | Zoom: 2.00e+02'."""
        return (f"Center: ({self.center_x:.6f}, {self.center_y:.6f}) | "
                f"Zoom: {self.scale:.2e}")


DEFAULT_VIEWPORT = Viewport()
