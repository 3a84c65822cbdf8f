"""
Unit tests for settings loading and validation.
Run from project root: python -m pytest tests/ -v
"""
import json
import os
import tempfile
import unittest

from mandelbrot_explorer.settings import DEFAULT_SETTINGS, load_settings, normalise_settings


class TestSettings(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)

    def _write(self, data):
        path = os.path.join(self._tmp.name, "settings.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write(data if isinstance(data, str) else json.dumps(data))
        return path

    def test_packaged_settings_are_valid(self):
        """The shipped settings.json normalises to the defaults."""
        self.assertEqual(normalise_settings(load_settings()), DEFAULT_SETTINGS)

    def test_file_values_override_defaults(self):
        """Values in an explicit file replace the defaults, others are kept."""
        settings = normalise_settings(load_settings(self._write({"palette": "ocean", "width": "1024"})))
        self.assertEqual(settings["palette"], "ocean")
        self.assertEqual(settings["width"], 1024)
        self.assertEqual(settings["height"], DEFAULT_SETTINGS["height"])

    def test_explicit_missing_or_broken_file_raises(self):
        """An explicitly requested file must exist and hold a JSON object."""
        with self.assertRaises(OSError):
            load_settings(os.path.join(self._tmp.name, "missing.json"))
        with self.assertRaises(ValueError):
            load_settings(self._write("{not json"))
        with self.assertRaises(ValueError):
            load_settings(self._write([1, 2, 3]))

    def test_invalid_values_are_rejected(self):
        """Bad sizes, palettes, flags, log levels and unknown keys raise ValueError."""
        for bad in ({"width": 0}, {"minimap_size": -5}, {"palette": "sepia"},
                    {"log_level": "LOUD"}, {"zoom": 3}, {"width": None},
                    {"height": "tall"}, {"show_minimap": "false"},
                    {"capture_dir": None}, {"log_level": None}):
            with self.subTest(settings=bad):
                with self.assertRaises(ValueError):
                    normalise_settings(dict(DEFAULT_SETTINGS, **bad))

    def test_log_level_is_upper_cased(self):
        settings = normalise_settings(dict(DEFAULT_SETTINGS, log_level="debug"))
        self.assertEqual(settings["log_level"], "DEBUG")


if __name__ == "__main__":
    unittest.main()
