"""Tests for numbered diff parsing into split rows.

Covers positional pairing of removal/addition runs, line-number cursors,
sanitization, hunk-header resynchronization, and plain-diff numbering.
"""

import unittest

from splitdiff.parser import (
    AddedRow,
    ChangedRow,
    ContextRow,
    DiffLine,
    RemovedRow,
    build_split_rows,
    count_diff_stats,
    has_hunk_headers,
    number_unified_diff,
    parse_diff_line,
)

GIT_DIFF = """diff --git a/f.py b/f.py
index 123..456 100644
--- a/f.py
+++ b/f.py
@@ -10,3 +12,3 @@ def f():
 keep
-old
+new
 tail
"""


class ParseDiffLineTests(unittest.TestCase):
    def test_parses_prefix_number_and_content(self) -> None:
        self.assertEqual(parse_diff_line("- 10 foo"), DiffLine("-", "foo", 10))
        self.assertEqual(parse_diff_line("  11 baz"), DiffLine(" ", "baz", 11))

    def test_line_number_is_optional(self) -> None:
        self.assertEqual(parse_diff_line("+ foo"), DiffLine("+", "foo", None))

    def test_non_matching_lines_are_skipped(self) -> None:
        self.assertIsNone(parse_diff_line("--- a/file.py"))
        self.assertIsNone(parse_diff_line("+++ b/file.py"))
        self.assertIsNone(parse_diff_line("@@ -1 +1 @@"))
        self.assertIsNone(parse_diff_line(""))

    def test_tabs_expand_and_controls_are_removed(self) -> None:
        parsed = parse_diff_line("+ 1 \tx\x07y\r")
        self.assertEqual(parsed, DiffLine("+", "    xy", 1))


class BuildSplitRowsTests(unittest.TestCase):
    def test_changed_then_context(self) -> None:
        rows = build_split_rows("- 10 foo\n+ 10 bar\n  11 baz\n")
        self.assertEqual(
            rows,
            [
                ChangedRow(left=DiffLine("-", "foo", 10), right=DiffLine("+", "bar", 10)),
                ContextRow(left=DiffLine(" ", "baz", 11), right=DiffLine(" ", "baz", 11)),
            ],
        )
        self.assertEqual([row.kind for row in rows], ["changed", "context"])

    def test_imbalanced_runs_zip_positionally(self) -> None:
        rows = build_split_rows("-1 a\n-2 b\n+1 c\n 3 d")
        self.assertEqual(
            rows,
            [
                ChangedRow(left=DiffLine("-", "a", 1), right=DiffLine("+", "c", 1)),
                RemovedRow(left=DiffLine("-", "b", 2)),
                ContextRow(left=DiffLine(" ", "d", 3), right=DiffLine(" ", "d", 2)),
            ],
        )

    def test_leftover_additions_become_added_rows(self) -> None:
        rows = build_split_rows("-4 a\n+4 x\n+5 y\n+6 z")
        self.assertEqual([row.kind for row in rows], ["changed", "added", "added"])
        self.assertIsNone(rows[1].left)
        self.assertEqual(rows[2].right, DiffLine("+", "z", 6))

    def test_removed_row_has_no_right_side(self) -> None:
        rows = build_split_rows("-4 gone")
        self.assertEqual(rows, [RemovedRow(left=DiffLine("-", "gone", 4))])
        self.assertIsNone(rows[0].right)

    def test_missing_numbers_advance_from_cursor(self) -> None:
        rows = build_split_rows("- 5 a\n- b\n+ x\n+ y")
        self.assertEqual(rows[0].left.line_number, 5)
        self.assertEqual(rows[1].left.line_number, 6)
        self.assertIsNone(rows[0].right.line_number)
        self.assertIsNone(rows[1].right.line_number)

    def test_context_new_number_defaults_to_old_number(self) -> None:
        rows = build_split_rows("  7 same\n   next")
        self.assertEqual(rows[0].right.line_number, 7)
        self.assertEqual(rows[1].left.line_number, 8)
        self.assertEqual(rows[1].right.line_number, 8)

    def test_hunk_headers_reset_cursors(self) -> None:
        rows = build_split_rows("@@ -3,1 +9,1 @@\n   ctx\n@@ -40,1 +50,1 @@\n   other")
        self.assertEqual((rows[0].left.line_number, rows[0].right.line_number), (3, 9))
        self.assertEqual((rows[1].left.line_number, rows[1].right.line_number), (40, 50))

    def test_empty_input_has_no_rows(self) -> None:
        self.assertEqual(build_split_rows(""), [])


class CountDiffStatsTests(unittest.TestCase):
    def test_ignores_file_headers(self) -> None:
        stats = count_diff_stats(GIT_DIFF)
        self.assertEqual((stats.additions, stats.removals), (1, 1))


class NumberUnifiedDiffTests(unittest.TestCase):
    def test_numbers_lines_from_hunk_header(self) -> None:
        numbered = number_unified_diff(GIT_DIFF)
        self.assertEqual(
            numbered.split("\n"),
            ["@@ -10,3 +12,3 @@", " 10 keep", "-11 old", "+13 new", " 12 tail"],
        )

    def test_numbered_output_parses_with_correct_new_numbers(self) -> None:
        rows = build_split_rows(number_unified_diff(GIT_DIFF))
        self.assertEqual([row.kind for row in rows], ["context", "changed", "context"])
        self.assertEqual(rows[0].right.line_number, 12)
        self.assertEqual(rows[1].right, DiffLine("+", "new", 13))
        self.assertEqual(rows[2].left.line_number, 12)
        self.assertEqual(rows[2].right.line_number, 14)

    def test_content_starting_with_digits_keeps_its_text(self) -> None:
        diff = "@@ -1 +1 @@\n-42 is old\n+42 is new\n"
        rows = build_split_rows(number_unified_diff(diff))
        self.assertEqual(rows[0].left, DiffLine("-", "42 is old", 1))
        self.assertEqual(rows[0].right, DiffLine("+", "42 is new", 1))

    def test_has_hunk_headers(self) -> None:
        self.assertTrue(has_hunk_headers(GIT_DIFF))
        self.assertFalse(has_hunk_headers("- 10 foo\n+ 10 bar"))


if __name__ == "__main__":
    unittest.main()
