"""Tests for offset-stable wrapping and display-text sanitization."""

import unittest

from splitdiff.text import (
    sanitize_display_text,
    sanitize_single_line_text,
    truncate_display_text,
    wrap_plain_text,
)


class WrapPlainTextTests(unittest.TestCase):
    def test_breaks_after_last_space_and_keeps_it(self) -> None:
        segments = wrap_plain_text("hello world foo", 8)
        self.assertEqual(segments, ["hello ", "world ", "foo"])
        self.assertEqual("".join(segments), "hello world foo")

    def test_hard_breaks_long_tokens(self) -> None:
        self.assertEqual(wrap_plain_text("abcdefghij", 4), ["abcd", "efgh", "ij"])

    def test_leading_space_does_not_count_as_break_point(self) -> None:
        self.assertEqual(wrap_plain_text(" abcdef", 4), [" abc", "def"])

    def test_segment_lengths_add_up_for_any_width(self) -> None:
        text = "def compute(value, other):  return value + other  # trailing"
        for width in range(1, 30):
            segments = wrap_plain_text(text, width)
            self.assertEqual(sum(len(segment) for segment in segments), len(text))
            self.assertTrue(all(len(segment) <= width for segment in segments))

    def test_wide_glyphs_are_measured_in_columns(self) -> None:
        self.assertEqual(wrap_plain_text("日本語日本", 4), ["日本", "語日", "本"])
        self.assertEqual(wrap_plain_text("ab 日本語", 5), ["ab ", "日本", "語"])

    def test_glyph_wider_than_width_forms_its_own_segment(self) -> None:
        self.assertEqual(wrap_plain_text("日本", 1), ["日", "本"])

    def test_empty_text_yields_one_empty_segment(self) -> None:
        self.assertEqual(wrap_plain_text("", 10), [""])

    def test_non_positive_width_is_treated_as_one(self) -> None:
        self.assertEqual(wrap_plain_text("ab", 0), ["a", "b"])


class SanitizeTests(unittest.TestCase):
    def test_single_line_keeps_tabs(self) -> None:
        self.assertEqual(sanitize_single_line_text("a\tb\r\nc\x00\x7f"), "a\tbc")

    def test_truncate_display_text_adds_ellipsis(self) -> None:
        self.assertEqual(truncate_display_text("abcdef", 4), "abc…")
        self.assertEqual(truncate_display_text("abcdef", 1), "…")
        self.assertEqual(truncate_display_text("abc", 3), "abc")
        self.assertEqual(truncate_display_text("abc", 0), "")

    def test_sanitize_display_text_flattens_styled_multiline_text(self) -> None:
        self.assertEqual(sanitize_display_text("\033[31mhello\n  world\033[0m", 100), "hello world")

    def test_sanitize_display_text_accepts_non_strings(self) -> None:
        self.assertEqual(sanitize_display_text(None, 10), "")
        self.assertEqual(sanitize_display_text(12345, 3), "12…")


if __name__ == "__main__":
    unittest.main()
