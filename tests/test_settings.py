"""Tests for the settings.json layer.

Covers: rt.core.config
"""

import json
import shutil
import tempfile
import unittest
from pathlib import Path


class TestSettings(unittest.TestCase):
    """Tests for load_settings / save_settings in config.py."""

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self._tmppath = Path(self.tmpdir)

        # Monkey-patch the settings path to use the temp dir
        from rt.core import config
        self._orig_settings_path = config.SETTINGS_PATH
        config.SETTINGS_PATH = self._tmppath / "settings.json"

    def tearDown(self):
        from rt.core import config
        config.SETTINGS_PATH = self._orig_settings_path
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _write(self, payload):
        from rt.core import config
        with open(config.SETTINGS_PATH, "w", encoding="utf-8") as f:
            if isinstance(payload, str):
                f.write(payload)
            else:
                json.dump(payload, f)

    def test_fresh_start_returns_defaults(self):
        """No settings.json → defaults."""
        from rt.core.config import load_settings
        settings = load_settings()
        self.assertEqual(settings["default_minutes"], 12)
        self.assertEqual(settings["max_minutes"], 99)
        self.assertEqual(settings["presets"], [12, 10, 8, 5, 3])
        self.assertEqual(settings["app_name"], "DDC Timer")
        self.assertTrue(settings["sound_enabled"])
        self.assertEqual(settings["flash_ms"], 600)

    def test_fresh_start_writes_defaults(self):
        from rt.core import config
        config.load_settings()
        self.assertTrue(config.SETTINGS_PATH.exists())
        with open(config.SETTINGS_PATH, encoding="utf-8") as f:
            written = json.load(f)
        self.assertEqual(written, config.build_default_settings())

    def test_defaults_are_fresh_copies(self):
        from rt.core.config import build_default_settings
        first = build_default_settings()
        first["presets"].append(1)
        self.assertEqual(build_default_settings()["presets"], [12, 10, 8, 5, 3])

    def test_save_and_load_roundtrip(self):
        from rt.core.config import build_default_settings, load_settings, save_settings
        settings = build_default_settings()
        settings["default_minutes"] = 8
        settings["label"] = "Semi-final"
        settings["event_title"] = "DDC — Drink, Derive & Code"
        save_settings(settings)

        loaded = load_settings()
        self.assertEqual(loaded["default_minutes"], 8)
        self.assertEqual(loaded["label"], "Semi-final")
        self.assertEqual(loaded["event_title"], "DDC — Drink, Derive & Code")

    def test_load_fills_missing_keys(self):
        from rt.core.config import load_settings
        self._write({"default_minutes": 10, "sound_enabled": False})
        loaded = load_settings()
        self.assertEqual(loaded["default_minutes"], 10)
        self.assertFalse(loaded["sound_enabled"])
        self.assertEqual(loaded["max_minutes"], 99)
        self.assertEqual(loaded["label"], "Round 1")

    def test_load_defaults_mistyped_values(self):
        from rt.core.config import load_settings
        self._write({
            "default_minutes": "twelve",
            "max_minutes": -4,
            "flash_ms": True,
            "sound_enabled": "yes",
            "presets": [5, "three"],
            "label": 7,
        })
        loaded = load_settings()
        self.assertEqual(loaded["default_minutes"], 12)
        self.assertEqual(loaded["max_minutes"], 99)
        self.assertEqual(loaded["flash_ms"], 600)
        self.assertTrue(loaded["sound_enabled"])
        self.assertEqual(loaded["presets"], [12, 10, 8, 5, 3])
        self.assertEqual(loaded["label"], "Round 1")

    def test_load_fits_round_under_ceiling(self):
        """default_minutes is capped by max_minutes and unreachable presets are dropped."""
        from rt.core.config import load_settings
        self._write({"default_minutes": 45, "max_minutes": 30, "presets": [60, 30, 10, 0, -2]})
        loaded = load_settings()
        self.assertEqual(loaded["default_minutes"], 30)
        self.assertEqual(loaded["presets"], [30, 10])

    def test_corrupted_file_falls_back(self):
        from rt.core.config import load_settings
        self._write("{invalid json!!")
        loaded = load_settings()
        self.assertEqual(loaded["default_minutes"], 12)

    def test_non_object_file_falls_back(self):
        from rt.core.config import load_settings
        self._write([1, 2, 3])
        loaded = load_settings()
        self.assertEqual(loaded["presets"], [12, 10, 8, 5, 3])


if __name__ == "__main__":
    unittest.main()
