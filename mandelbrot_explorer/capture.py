"""
Region capture: turn a rectangular selection of a rendered buffer into
a standalone, annotated image.

The captured image carries its plane-space center and the scale at which
the selection would fill the whole view, both stamped into the pixels
and (when saved) stored as PNG text chunks.
"""

import os
from dataclasses import dataclass
from typing import NamedTuple, Optional

import numpy as np
from PIL import Image, ImageDraw, ImageFont
from PIL.PngImagePlugin import PngInfo

from .logging_setup import get_logger


TEXT_COLOR = (255, 255, 255, 255)
TEXT_ORIGIN = (10, 8)
LINE_SPACING = 20


class SelectionRect(NamedTuple):
    """Drag gesture corners in buffer pixels (any corner order)."""

    start_x: int
    start_y: int
    end_x: int
    end_y: int

    def normalized(self):
        """(left, top, width, height) with non-negative width and height."""
        left = int(min(self.start_x, self.end_x))
        top = int(min(self.start_y, self.end_y))
        width = int(abs(self.end_x - self.start_x))
        height = int(abs(self.end_y - self.start_y))
        return left, top, width, height


def caption_lines(center_x, center_y, scale):
    return (f"Center: ({center_x:.6f}, {center_y:.6f})",
            f"Zoom: {scale:.2e}")


@dataclass(frozen=True)
class CaptureResult:
    image: np.ndarray
    center_x: float
    center_y: float
    scale: float

    @property
    def lines(self):
        return caption_lines(self.center_x, self.center_y, self.scale)


def _extract(buffer, left, top, width, height):
    """Copy a sub-rectangle; parts outside the buffer stay transparent black."""
    out = np.zeros((height, width, 4), dtype=np.uint8)
    buf_h, buf_w = buffer.shape[:2]
    x0, y0 = max(left, 0), max(top, 0)
    x1, y1 = min(left + width, buf_w), min(top + height, buf_h)
    if x1 > x0 and y1 > y0:
        out[y0 - top:y1 - top, x0 - left:x1 - left] = buffer[y0:y1, x0:x1]
    return out


def _stamp_text(pixels, lines):
    img = Image.fromarray(pixels)
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()
    x, y = TEXT_ORIGIN
    for i, line in enumerate(lines):
        draw.text((x, y + i * LINE_SPACING), line, fill=TEXT_COLOR, font=font)
    return np.array(img, dtype=np.uint8)


def capture(buffer, rect, viewport, width, height) -> Optional[CaptureResult]:
    """
    Capture the selected part of a rendered buffer.

    Args:
        buffer: (height, width, 4) uint8 buffer the selection was made on
        rect: SelectionRect in buffer pixels
        viewport: Live Viewport the buffer was rendered with
        width, height: Render buffer dimensions

    Returns:
        CaptureResult, or None when the selection has zero area
    """
    logger = get_logger()
    left, top, rect_w, rect_h = rect.normalized()
    if rect_w <= 0 or rect_h <= 0:
        logger.info("Nothing to capture: empty selection %s", tuple(rect))
        return None

    center_x, center_y = viewport.pixel_to_plane(left + rect_w / 2, top + rect_h / 2,
                                                 width, height)
    scale = viewport.scale * min(width / rect_w, height / rect_h)

    pixels = _extract(buffer, left, top, rect_w, rect_h)
    lines = caption_lines(center_x, center_y, scale)
    result = CaptureResult(image=_stamp_text(pixels, lines),
                           center_x=center_x, center_y=center_y, scale=scale)
    logger.info("Captured %sx%s region at %s, scale %.2e",
                rect_w, rect_h, result.lines[0], scale)
    return result


def export_filename(result: CaptureResult) -> str:
    return f"mandelbrot_{result.center_x:.6f}_{result.center_y:.6f}_{result.scale:.2e}.png"


def save_capture(result: CaptureResult, directory: str = ".") -> str:
    """Write a capture as PNG into `directory` and return the file path."""
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, export_filename(result))
    info = PngInfo()
    info.add_text("Center", f"{result.center_x:.6f}, {result.center_y:.6f}")
    info.add_text("Zoom", f"{result.scale:.2e}")
    Image.fromarray(result.image).save(path, format="PNG", pnginfo=info)
    get_logger().info("Capture saved: %s", path)
    return path
