"""
Command line entry point.

Two commands:
- explore: open the interactive window (the default when no command
  is given)
- snapshot: render one view headlessly and write it to a PNG file

Settings come from settings.json (or --settings) and are overridden by
the flags given here. Errors are logged and turned into exit code 1.
"""

import argparse
import os

from PIL import Image

from .colormaps import list_colormap_names
from .history import iteration_budget
from .logging_setup import configure_logging, get_logger
from .renderer import FractalRenderer
from .settings import load_settings, normalise_settings
from .viewport import DEFAULT_VIEWPORT, Viewport


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

# Settings keys that a flag of the same name overrides
OVERRIDABLE = ("width", "height", "palette", "capture_dir", "log_level", "log_file")


def build_arg_parser():
    """Build the argument parser with the explore and snapshot commands."""
    parser = argparse.ArgumentParser(
        prog="mandelbrot-explorer",
        description="Interactive escape-time fractal explorer."
    )
    parser.add_argument("--settings", default=None,
                        help="settings JSON file (default: packaged settings.json)")
    parser.add_argument("--log-level", default=None, choices=LOG_LEVELS,
                        help="log level, overrides the settings file")
    parser.add_argument("--log-file", default=None,
                        help="rotating log file, overrides the settings file")
    commands = parser.add_subparsers(dest="cmd")

    explore = commands.add_parser("explore", help="open the explorer window (default)")
    explore.add_argument("--width", type=int, default=None, help="window width")
    explore.add_argument("--height", type=int, default=None, help="window height")
    explore.add_argument("--palette", default=None, choices=list_colormap_names(),
                         help="initial palette")
    explore.add_argument("--minimap", action="store_true", default=None,
                         help="start with the overview minimap visible")
    explore.add_argument("--capture-dir", default=None,
                         help="directory captured regions are saved to")

    snapshot = commands.add_parser("snapshot", help="render one view to a PNG file")
    snapshot.add_argument("output", help="output PNG path")
    snapshot.add_argument("--center-x", type=float, default=DEFAULT_VIEWPORT.center_x)
    snapshot.add_argument("--center-y", type=float, default=DEFAULT_VIEWPORT.center_y)
    snapshot.add_argument("--scale", type=float, default=DEFAULT_VIEWPORT.scale,
                          help="pixels per plane unit")
    snapshot.add_argument("--max-iter", type=int, default=None,
                          help="iteration budget (default: derived from --scale)")
    snapshot.add_argument("--width", type=int, default=None, help="image width")
    snapshot.add_argument("--height", type=int, default=None, help="image height")
    snapshot.add_argument("--palette", default=None, choices=list_colormap_names())
    snapshot.add_argument("--overview", action="store_true",
                          help="render the fixed overview with the view marker")
    return parser


def _apply_overrides(settings, args):
    """Layer command line flags over loaded settings and validate the result."""
    for key in OVERRIDABLE:
        value = getattr(args, key, None)
        if value is not None:
            settings[key] = value
    if getattr(args, "minimap", None):
        settings["show_minimap"] = True
    return normalise_settings(settings)


def _snapshot_viewport(args):
    # The default view keeps its own budget of 100
    if args.max_iter is not None:
        max_iter = args.max_iter
    elif args.scale == DEFAULT_VIEWPORT.scale:
        max_iter = DEFAULT_VIEWPORT.max_iter
    else:
        max_iter = iteration_budget(args.scale)
    return Viewport(center_x=args.center_x, center_y=args.center_y,
                    scale=args.scale, max_iter=max_iter)


def _snapshot(args, settings):
    """Render the requested view and write it as an RGBA PNG."""
    viewport = _snapshot_viewport(args)
    renderer = FractalRenderer(settings["palette"])
    buffer = renderer.render_image(viewport, settings["width"], settings["height"],
                                   overview=args.overview)

    os.makedirs(os.path.dirname(os.path.abspath(args.output)), exist_ok=True)
    Image.fromarray(buffer).save(args.output, format="PNG")
    get_logger().info("Snapshot written: %s (%s)", args.output, viewport.describe())
    return 0


def main(argv=None):
    """
    Run the command line interface.

    Args:
        argv: Argument list (default: sys.argv[1:])

    Returns:
        Process exit code: 0 on success, 1 on invalid settings or a
        failed command
    """
    args = build_arg_parser().parse_args(argv)
    logger = get_logger()

    try:
        settings = _apply_overrides(load_settings(args.settings), args)
    except (OSError, ValueError) as e:
        configure_logging()
        logger.error("Invalid settings: %s", e)
        return 1

    configure_logging(level=settings["log_level"], log_file=settings["log_file"])

    try:
        if args.cmd == "snapshot":
            return _snapshot(args, settings)

        from .app import run
        run(
            width=settings["width"],
            height=settings["height"],
            palette=settings["palette"],
            show_minimap=settings["show_minimap"],
            minimap_size=settings["minimap_size"],
            capture_dir=settings["capture_dir"],
        )
        return 0
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 1
