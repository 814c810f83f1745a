from __future__ import annotations

import unittest

from splitdiff.theme import DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME, normalize_theme_name, resolve_theme


class ThemeTests(unittest.TestCase):
    def test_resolve_theme_falls_back_to_default(self) -> None:
        self.assertIs(resolve_theme(None), DEFAULT_THEME)
        self.assertIs(resolve_theme("unknown"), DEFAULT_THEME)
        self.assertIs(resolve_theme(" Ocean "), OCEAN_THEME)

    def test_no_color_always_resolves_plain(self) -> None:
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)

    def test_normalize_theme_name(self) -> None:
        self.assertEqual(normalize_theme_name(""), "default")
        self.assertEqual(normalize_theme_name("OCEAN"), "ocean")

    def test_fg_resets_only_foreground(self) -> None:
        self.assertEqual(DEFAULT_THEME.fg("dim", "x"), "\033[38;5;242mx\033[39m")
        self.assertEqual(DEFAULT_THEME.fg("dim", ""), "")
        self.assertEqual(PLAIN_THEME.fg("dim", "x"), "x")

    def test_unknown_color_names_raise(self) -> None:
        with self.assertRaises(KeyError):
            DEFAULT_THEME.fg_ansi("success_bg")
        with self.assertRaises(KeyError):
            DEFAULT_THEME.bg_ansi("dim")

    def test_plain_theme_text_attributes_are_noops(self) -> None:
        self.assertEqual(PLAIN_THEME.bold("x"), "x")
        self.assertEqual(DEFAULT_THEME.bold("x"), "\033[1mx\033[22m")

    def test_dim_and_strikethrough_attributes(self) -> None:
        self.assertEqual(DEFAULT_THEME.dim_text("x"), "\033[2mx\033[22m")
        self.assertEqual(DEFAULT_THEME.strikethrough("x"), "\033[9mx\033[29m")
        self.assertEqual(PLAIN_THEME.dim_text("x"), "x")
        self.assertEqual(PLAIN_THEME.strikethrough("x"), "x")


if __name__ == "__main__":
    unittest.main()
