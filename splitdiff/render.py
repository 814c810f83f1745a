"""Side-by-side diff rows rendered to fixed-width ANSI terminal lines.

``SplitDiffView`` owns the per-instance highlight cache and the rendered-row
cache. Each cell is composed from a marker, a right-aligned line number, a
divider, and wrapped code whose segments are highlighted independently, then
shaded with the row background and inline emphasis spans.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Literal

from .ansi import (
    apply_background_to_visible_range,
    fit_to_width,
    keep_background_across_resets,
    pad_rendered_line_width,
    strip_ansi,
    strip_background_codes,
    visible_width,
)
from .config import DEFAULT_LIMITS, RenderLimits
from .palette import resolve_diff_palette
from .parser import DiffLine, SplitDiffRow
from .spans import DiffSpan, compute_inline_diff_spans
from .syntax import Highlighter, make_highlighter
from .text import sanitize_single_line_text, strip_inline_breaks, wrap_plain_text
from .theme import DiffTheme

log = logging.getLogger(__name__)

CellLineKind = Literal["add", "remove", "context"]
Side = Literal["left", "right"]

MIN_RENDER_WIDTH = 20
MIN_COLUMN_WIDTH = 20
MIN_LINE_NUMBER_WIDTH = 3
CHANGE_MARKER = "▌"
CELL_DIVIDER = " │ "
COLUMN_SEPARATOR = " │ "


def _digits(line: DiffLine | None) -> int:
    if line is None or line.line_number is None:
        return 0
    return len(str(line.line_number))


class SplitDiffView:
    """Render a sequence of split rows as two shaded, highlighted columns.

    Output for a width is cached until :meth:`invalidate` is called (for
    example on terminal resize or theme change).
    """

    def __init__(
        self,
        theme: DiffTheme,
        rows: list[SplitDiffRow],
        max_rows: int,
        language: str | None = None,
        highlighter: Highlighter | None = None,
        limits: RenderLimits = DEFAULT_LIMITS,
    ) -> None:
        self.theme = theme
        self.rows = rows
        self.max_rows = max(0, max_rows)
        self.language = language
        self.limits = limits
        self._highlighter = highlighter if highlighter is not None else make_highlighter()
        self._highlight_cache: OrderedDict[str, str] = OrderedDict()
        self._inline_spans: dict[int, tuple[DiffSpan, ...]] = {}
        self._cache_width: int | None = None
        self._cache_lines: list[str] | None = None

        max_digits = MIN_LINE_NUMBER_WIDTH
        for row in rows:
            max_digits = max(max_digits, _digits(row.left), _digits(row.right))
            if row.kind == "changed":
                spans = compute_inline_diff_spans(row.left.line, row.right.line)
                if spans.left:
                    self._inline_spans[id(row.left)] = spans.left
                if spans.right:
                    self._inline_spans[id(row.right)] = spans.right
        self.line_number_width = max_digits
        self.palette = resolve_diff_palette(theme)
        self.container_bg = theme.bg_ansi("success_bg")

    def spans_for(self, line: DiffLine) -> tuple[DiffSpan, ...]:
        """Return inline emphasis spans computed for ``line``, if any."""
        return self._inline_spans.get(id(line), ())

    @staticmethod
    def cell_line_kind(kind: str, side: Side) -> CellLineKind:
        if kind == "changed":
            return "remove" if side == "left" else "add"
        if kind == "removed" and side == "left":
            return "remove"
        if kind == "added" and side == "right":
            return "add"
        return "context"

    def visual_line_kind(self, kind: str, side: Side, line: DiffLine | None) -> CellLineKind:
        """Line kind used for styling; blank added/removed lines look like context."""
        base = self.cell_line_kind(kind, side)
        if kind in {"added", "removed"} and (line.line if line is not None else "") == "":
            return "context"
        return base

    @staticmethod
    def _number_color(line_kind: CellLineKind) -> str:
        if line_kind == "remove":
            return "diff_removed"
        if line_kind == "add":
            return "diff_added"
        return "dim"

    @staticmethod
    def _marker_color(line_kind: CellLineKind) -> str:
        if line_kind == "add":
            return "diff_added"
        if line_kind == "remove":
            return "diff_removed"
        return "border_muted"

    def _row_background(self, line_kind: CellLineKind) -> str:
        if line_kind == "add":
            return self.palette.add_row_bg
        if line_kind == "remove":
            return self.palette.remove_row_bg
        return ""

    def _emphasis_background(self, line_kind: CellLineKind) -> str:
        if line_kind == "add":
            return self.palette.add_emphasis_bg
        if line_kind == "remove":
            return self.palette.remove_emphasis_bg
        return ""

    def _cell_fill_background(self, kind: str, side: Side) -> str:
        if kind == "changed":
            return self.palette.remove_row_bg if side == "left" else self.palette.add_row_bg
        if kind == "removed":
            return self.palette.remove_row_bg if side == "left" else ""
        if kind == "added":
            return self.palette.add_row_bg if side == "right" else ""
        return ""

    def _shade_row(self, rendered: str, row_bg: str) -> str:
        """Paint ``row_bg`` under the whole cell, surviving embedded resets."""
        return f"{row_bg}{keep_background_across_resets(rendered, row_bg)}{self.container_bg}"

    def blank_cell(self, kind: str, side: Side, column_width: int) -> str:
        """Render an empty cell: marker and divider only, with the fill background."""
        line_kind = self.cell_line_kind(kind, side)
        marker_char = CHANGE_MARKER if line_kind in {"add", "remove"} else " "
        marker = self.theme.fg(self._marker_color(line_kind), marker_char)
        line_number = self.theme.fg("dim", " " * self.line_number_width)
        divider = self.theme.fg("border_muted", CELL_DIVIDER)
        prefix_plain = f"{marker_char} {' ' * self.line_number_width}{CELL_DIVIDER}"
        tail_width = max(0, column_width - visible_width(prefix_plain))
        rendered = f"{marker} {line_number}{divider}" + " " * tail_width

        bg = self._cell_fill_background(kind, side)
        if not bg:
            return pad_rendered_line_width(rendered, column_width)
        return pad_rendered_line_width(self._shade_row(rendered, bg), column_width)

    def syntax_highlight(self, line: str) -> str:
        """Highlight one plain segment, caching results and never raising."""
        safe_line = sanitize_single_line_text(line)
        if not self.language:
            return safe_line
        if len(safe_line) > self.limits.max_highlight_line_length:
            return safe_line

        key = f"{self.language}\n{safe_line}"
        cached = self._highlight_cache.get(key)
        if cached is not None:
            return cached

        try:
            highlighted = self._highlighter(safe_line, self.language) or safe_line
            highlighted = strip_background_codes(strip_inline_breaks(highlighted))
        except Exception:
            log.debug("highlighting failed for language %r; using plain text", self.language, exc_info=True)
            highlighted = safe_line

        while len(self._highlight_cache) >= max(1, self.limits.max_highlight_cache_entries):
            self._highlight_cache.popitem(last=False)
        self._highlight_cache[key] = highlighted
        return highlighted

    def format_cell_lines(self, kind: str, side: Side, line: DiffLine | None, column_width: int) -> list[str]:
        """Render one side of a row into one or more wrapped cell lines."""
        if line is None:
            return [self.blank_cell(kind, side, column_width)]

        theme = self.theme
        line_kind = self.visual_line_kind(kind, side, line)
        marker_char = CHANGE_MARKER if line_kind in {"add", "remove"} else " "
        marker_color = self._marker_color(line_kind)
        number_text = "" if line.line_number is None else str(line.line_number)
        line_number = number_text.rjust(self.line_number_width)
        blank_number = " " * self.line_number_width

        first_prefix = (
            theme.fg(marker_color, marker_char)
            + " "
            + theme.fg(self._number_color(line_kind), line_number)
            + theme.fg("border_muted", CELL_DIVIDER)
        )
        first_prefix_plain = f"{marker_char} {line_number}{CELL_DIVIDER}"
        cont_prefix = (
            theme.fg(marker_color, marker_char)
            + " "
            + theme.fg("dim", blank_number)
            + theme.fg("border_muted", CELL_DIVIDER)
        )
        cont_prefix_plain = f"{marker_char} {blank_number}{CELL_DIVIDER}"

        code_width = max(1, column_width - visible_width(first_prefix_plain))
        row_bg = self._row_background(line_kind)
        emphasis_bg = self._emphasis_background(line_kind)
        spans = self.spans_for(line)

        lines: list[str] = []
        consumed = 0
        for index, plain_segment in enumerate(wrap_plain_text(line.line, code_width)):
            prefix = first_prefix if index == 0 else cont_prefix
            prefix_plain = first_prefix_plain if index == 0 else cont_prefix_plain
            segment = self.syntax_highlight(plain_segment)

            if spans and emphasis_bg:
                segment_start = consumed
                for span in reversed(spans):
                    local_start = max(0, span.start - segment_start)
                    local_end = min(len(plain_segment), span.end - segment_start)
                    if local_end > local_start:
                        segment = apply_background_to_visible_range(
                            segment,
                            local_start,
                            local_end,
                            emphasis_bg,
                            row_bg or self.container_bg,
                        )

            rendered = prefix + fit_to_width(segment, code_width)

            # Prefix widths can diverge from the plain estimate with wide glyphs.
            expected_width = visible_width(prefix_plain) + code_width
            current_width = visible_width(strip_ansi(rendered))
            if current_width < expected_width:
                rendered += " " * (expected_width - current_width)

            if row_bg:
                rendered = self._shade_row(rendered, row_bg)
            lines.append(pad_rendered_line_width(rendered, column_width))
            consumed += len(plain_segment)

        return lines

    def _top_border_cell(self, column_width: int) -> str:
        chars = ["─"] * max(1, column_width)
        divider_index = self.line_number_width + 3
        if 0 <= divider_index < len(chars):
            chars[divider_index] = "┬"
        return self.theme.fg("border_muted", "".join(chars))

    def _header_cell(self, label: str, column_width: int) -> str:
        marker_pad = "  "
        label_cell = fit_to_width(label, self.line_number_width)
        prefix = (
            self.theme.fg("border_muted", marker_pad)
            + self.theme.fg("dim", label_cell)
            + self.theme.fg("border_muted", CELL_DIVIDER)
        )
        prefix_plain = f"{marker_pad}{strip_ansi(label_cell)}{CELL_DIVIDER}"
        code_width = max(0, column_width - visible_width(prefix_plain))
        return pad_rendered_line_width(prefix + " " * code_width, column_width)

    def render(self, width: int) -> list[str]:
        """Return terminal lines for ``width`` columns, cached per width."""
        if self._cache_width == width and self._cache_lines is not None:
            return self._cache_lines

        safe_width = max(MIN_RENDER_WIDTH, width)
        separator = self.theme.fg("border_muted", COLUMN_SEPARATOR)
        separator_width = visible_width(separator)
        left_width = max(MIN_COLUMN_WIDTH, (safe_width - separator_width) // 2)
        right_width = max(MIN_COLUMN_WIDTH, safe_width - separator_width - left_width)

        lines: list[str] = [
            pad_rendered_line_width(
                self._top_border_cell(left_width)
                + self.theme.fg("border_muted", "─┬─")
                + self._top_border_cell(right_width),
                safe_width,
            ),
            pad_rendered_line_width(
                self._header_cell("old", left_width) + separator + self._header_cell("new", right_width),
                safe_width,
            ),
        ]

        for row in self.rows[: self.max_rows]:
            left_cells = self.format_cell_lines(row.kind, "left", row.left, left_width)
            right_cells = self.format_cell_lines(row.kind, "right", row.right, right_width)
            fallback_kind = "context" if row.kind == "changed" else row.kind
            for index in range(max(len(left_cells), len(right_cells))):
                left_cell = (
                    left_cells[index] if index < len(left_cells) else self.blank_cell(fallback_kind, "left", left_width)
                )
                right_cell = (
                    right_cells[index]
                    if index < len(right_cells)
                    else self.blank_cell(fallback_kind, "right", right_width)
                )
                lines.append(pad_rendered_line_width(left_cell + separator + right_cell, safe_width))

        if len(self.rows) > self.max_rows:
            lines.append(self.theme.fg("muted", f"... {len(self.rows) - self.max_rows} more rows"))

        self._cache_width = width
        self._cache_lines = lines
        return lines

    def invalidate(self) -> None:
        """Drop rendered rows and highlighted segments."""
        self._cache_width = None
        self._cache_lines = None
        self._highlight_cache.clear()


__all__ = [
    "CellLineKind",
    "SplitDiffView",
]
