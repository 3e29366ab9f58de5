from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from yamlist import config


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_config_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("yamlist.config.CONFIG_PATH", Path(tmp) / "config.json"):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_viewer_config(), config.ViewerConfig())

    def test_show_preview_round_trips_and_keeps_other_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            config_path.parent.mkdir()
            config_path.write_text(json.dumps({"theme": "ocean"}), encoding="utf-8")
            with mock.patch("yamlist.config.CONFIG_PATH", config_path):
                config.save_show_preview(False)

                saved = config.load_config()
                self.assertEqual(saved, {"theme": "ocean", "show_preview": False})
                loaded = config.load_viewer_config()
                self.assertFalse(loaded.show_preview)
                self.assertEqual(loaded.theme, "ocean")

    def test_invalid_values_fall_back_per_key(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(
                json.dumps({"theme": "  ", "use_icons": "no", "max_preview_lines": True, "show_preview": 0}),
                encoding="utf-8",
            )
            with mock.patch("yamlist.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_viewer_config(), config.ViewerConfig())

    def test_malformed_or_non_object_json_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("yamlist.config.CONFIG_PATH", config_path):
                config_path.write_text("{not json", encoding="utf-8")
                self.assertEqual(config.load_config(), {})
                config_path.write_text("[1, 2]", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

    def test_write_failures_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "blocker"
            blocker.write_text("", encoding="utf-8")
            with mock.patch("yamlist.config.CONFIG_PATH", blocker / "config.json"):
                config.save_config({"show_preview": True})


if __name__ == "__main__":
    unittest.main()
