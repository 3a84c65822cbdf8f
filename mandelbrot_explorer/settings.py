"""
Explorer settings, loaded from settings.json.

The packaged settings.json next to this module holds the defaults; a
different file can be passed on the command line. Values from the file
are layered over DEFAULT_SETTINGS and then validated by
normalise_settings.
"""

import json
import os
from typing import Any, Dict, Optional

from .colormaps import COLORMAPS
from .logging_setup import get_logger, parse_level


SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')

DEFAULT_SETTINGS: Dict[str, Any] = {
    'width': 800,
    'height': 600,
    'minimap_size': 150,
    'palette': 'initial',
    'show_minimap': False,
    'capture_dir': 'captures',
    'log_level': 'INFO',
    'log_file': None,
}


def load_settings(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file. None means the packaged settings.json; if
            that one is missing or broken a warning is logged and the
            defaults are used.

    Returns:
        Dict of raw settings (defaults overlaid with file values)

    Raises:
        OSError, ValueError if an explicit path cannot be read or parsed
    """
    settings = dict(DEFAULT_SETTINGS)
    if path is None:
        try:
            with open(SETTINGS_PATH, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            get_logger().warning("Could not load settings.json: %s", e)
            return settings
    else:
        with open(path, 'r', encoding='utf-8') as f:
            loaded = json.load(f)

    if not isinstance(loaded, dict):
        raise ValueError("Settings JSON must be an object.")
    settings.update(loaded)
    return settings


def normalise_settings(settings: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and coerce raw settings; raises ValueError on bad values."""
    unknown = set(settings) - set(DEFAULT_SETTINGS)
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")

    out = dict(DEFAULT_SETTINGS)
    out.update(settings)

    for key in ('width', 'height', 'minimap_size'):
        try:
            out[key] = int(out[key])
        except (TypeError, ValueError):
            raise ValueError(f"{key} must be an integer, got {out[key]!r}") from None
        if out[key] <= 0:
            raise ValueError(f"{key} must be positive.")

    if out['palette'] not in COLORMAPS:
        raise ValueError(f"Unknown palette: {out['palette']}")

    if not isinstance(out['show_minimap'], bool):
        raise ValueError(f"show_minimap must be true or false, got {out['show_minimap']!r}")
    if not isinstance(out['capture_dir'], str) or not out['capture_dir']:
        raise ValueError("capture_dir must be a non-empty string.")
    if not isinstance(out['log_level'], str):
        raise ValueError(f"log_level must be a string, got {out['log_level']!r}")
    out['log_level'] = out['log_level'].upper()
    parse_level(out['log_level'])
    if out['log_file'] is not None:
        out['log_file'] = str(out['log_file'])
    return out
