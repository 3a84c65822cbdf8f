"""
Mandelbrot Explorer Package

An interactive escape-time fractal explorer: click to zoom, undo and
reset navigation, an overview minimap, and capture of selected regions
as annotated PNG images. Numba JIT-compiles the per-pixel work and
pygame provides the window.

Quick Start:
    from mandelbrot_explorer import run
    run()

Or from command line:
    python -m mandelbrot_explorer
    python -m mandelbrot_explorer snapshot view.png --scale 800

Package Structure:
    - compute.py: JIT-compiled transform, escape-time and color functions
    - colormaps.py: Palette definitions (initial, original, cool, ...)
    - viewport.py: Immutable Viewport value type
    - history.py: Navigation state machine (zoom in, undo, reset)
    - renderer.py: Live view and overview rendering into RGBA buffers
    - capture.py: Region capture and PNG export
    - settings.py: settings.json loading
    - app.py: Explorer window and event loop
    - cli.py: Command line entry point

Controls:
    - Click: Zoom in 2x at the mouse position
    - U / Backspace: Undo last zoom
    - R: Reset to default view
    - M: Toggle the overview minimap
    - S: Toggle selection mode (drag to capture a region)
    - P / Shift+P: Next / previous palette
    - ESC: Cancel selection, or quit
"""

from .app import run, ExplorerApp
from .capture import SelectionRect, CaptureResult, capture, export_filename, save_capture
from .colormaps import COLORMAPS, get_colormap, list_colormap_names
from .history import NavigationState, iteration_budget, reset, undo, zoom_in
from .renderer import FractalRenderer, OVERVIEW, RenderConfig, render
from .viewport import DEFAULT_VIEWPORT, Viewport

__version__ = "1.0.0"
__all__ = [
    "run",
    "ExplorerApp",
    "FractalRenderer",
    "RenderConfig",
    "OVERVIEW",
    "render",
    "Viewport",
    "DEFAULT_VIEWPORT",
    "NavigationState",
    "iteration_budget",
    "zoom_in",
    "undo",
    "reset",
    "SelectionRect",
    "CaptureResult",
    "capture",
    "export_filename",
    "save_capture",
    "COLORMAPS",
    "get_colormap",
    "list_colormap_names",
]
