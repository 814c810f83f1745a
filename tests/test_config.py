from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from splitdiff import config


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_config_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("splitdiff.config.CONFIG_PATH", Path(tmp) / "missing.json"):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_render_limits(), config.DEFAULT_LIMITS)
                self.assertIsNone(config.load_theme_name())
                self.assertEqual(config.load_style_name(), "monokai")

    def test_render_limits_are_read_from_limits_object(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(json.dumps({"limits": {"max_split_diff_lines": 50, "collapsed_rows": 10}}), encoding="utf-8")
            with mock.patch("splitdiff.config.CONFIG_PATH", config_path):
                limits = config.load_render_limits()
        self.assertEqual(limits, config.RenderLimits(max_split_diff_lines=50, collapsed_rows=10))

    def test_malformed_limit_values_keep_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(
                json.dumps(
                    {
                        "limits": {
                            "max_split_diff_chars": True,
                            "max_split_diff_lines": -4,
                            "collapsed_rows": "12",
                            "expanded_rows": 99,
                        }
                    }
                ),
                encoding="utf-8",
            )
            with mock.patch("splitdiff.config.CONFIG_PATH", config_path):
                limits = config.load_render_limits()
        self.assertEqual(limits.max_split_diff_chars, 120_000)
        self.assertEqual(limits.max_split_diff_lines, 2_000)
        self.assertEqual(limits.collapsed_rows, 36)
        self.assertEqual(limits.expanded_rows, 99)

    def test_non_object_config_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("[1, 2, 3]", encoding="utf-8")
            with mock.patch("splitdiff.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_theme_and_style_names_are_stripped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(json.dumps({"theme": " ocean ", "style": "  native  "}), encoding="utf-8")
            with mock.patch("splitdiff.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_theme_name(), "ocean")
                self.assertEqual(config.load_style_name(), "native")

    def test_blank_or_non_string_names_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(json.dumps({"theme": "   ", "style": 7}), encoding="utf-8")
            with mock.patch("splitdiff.config.CONFIG_PATH", config_path):
                self.assertIsNone(config.load_theme_name())
                self.assertEqual(config.load_style_name(), "monokai")


if __name__ == "__main__":
    unittest.main()
