"""Summary line and result view for an applied edit's diff.

Wraps the split renderer with a one-line ``+A -R`` summary and change meter,
and falls back to the summary plus a reason when the diff is too large.
"""

from __future__ import annotations

import math
import re

from .ansi import wrap_ansi_line
from .config import DEFAULT_LIMITS, RenderLimits
from .limits import check_split_budget
from .parser import DiffStats, build_split_rows, count_diff_stats, has_hunk_headers, number_unified_diff
from .render import MIN_RENDER_WIDTH, SplitDiffView
from .syntax import Highlighter, language_for_path
from .text import sanitize_display_text
from .theme import DiffTheme

MAX_RENDER_PATH_CHARS = 260
MAX_RENDER_MESSAGE_CHARS = 600
METER_WIDTH = 20

_EDITED_PATH_RE = re.compile(r"Successfully replaced text in (.+)\.$")
_ERROR_MESSAGE_RE = re.compile(r"^error[:\s]", re.IGNORECASE)


class TextBlock:
    """Pre-styled text wrapped to the render width."""

    def __init__(self, text: str) -> None:
        self.text = text

    def render(self, width: int) -> list[str]:
        lines: list[str] = []
        for line in self.text.split("\n"):
            lines.extend(wrap_ansi_line(line, max(1, width)))
        return lines

    def invalidate(self) -> None:
        pass


class EditResultView:
    """Summary header stacked above a split diff view."""

    def __init__(self, summary: str, split: SplitDiffView) -> None:
        self.header = TextBlock(summary)
        self.split = split

    def render(self, width: int) -> list[str]:
        safe_width = max(MIN_RENDER_WIDTH, width - 1)
        return [*self.header.render(safe_width), *self.split.render(safe_width)]

    def invalidate(self) -> None:
        self.split.invalidate()


def extract_edited_path(message: str) -> str | None:
    """Return the path named in an edit tool's success message."""
    match = _EDITED_PATH_RE.search(message)
    return match.group(1) if match else None


def render_diff_meter(theme: DiffTheme, additions: int, removals: int, width: int = METER_WIDTH) -> str:
    """Render a bracketed bar splitting ``width`` blocks by change share."""
    total = additions + removals
    if total <= 0:
        return ""

    add_blocks = math.floor(additions / total * width + 0.5)
    remove_blocks = max(0, width - add_blocks)
    add_bar = theme.fg("diff_added", "━" * add_blocks) if add_blocks > 0 else ""
    remove_bar = theme.fg("diff_removed", "━" * remove_blocks) if remove_blocks > 0 else ""
    return f"{theme.fg('dim', '[')}{add_bar}{remove_bar}{theme.fg('dim', ']')}"


def build_summary(theme: DiffTheme, stats: DiffStats) -> str:
    """Return ``↳ diff +A -R split [meter]`` styled with the theme."""
    meter = render_diff_meter(theme, stats.additions, stats.removals)
    summary = (
        f"{theme.fg('dim', '↳')} {theme.fg('muted', 'diff')}"
        f" {theme.fg('diff_added', f'+{stats.additions}')}"
        f" {theme.fg('diff_removed', f'-{stats.removals}')}"
        f" {theme.fg('muted', 'split')}"
    )
    return f"{summary} {meter}" if meter else summary


def render_edit_call(theme: DiffTheme, path: object) -> TextBlock:
    """Title line for an edit in progress: ``edit <path>``."""
    safe_path = sanitize_display_text(path, MAX_RENDER_PATH_CHARS) or "<unknown>"
    return TextBlock(f"{theme.fg('title', theme.bold('edit'))} {theme.fg('accent', safe_path)}")


def render_edit_result(
    theme: DiffTheme,
    diff: str | None,
    message: str = "",
    *,
    expanded: bool = False,
    partial: bool = False,
    language: str | None = None,
    highlighter: Highlighter | None = None,
    limits: RenderLimits = DEFAULT_LIMITS,
) -> TextBlock | EditResultView:
    """Build the view shown for an edit result.

    ``diff`` is either the numbered line format or a plain unified diff with
    ``@@`` hunk headers, which is numbered before rows are built. The size
    guard measures the text as given. Oversized diffs return the summary plus
    a ``Split view skipped`` note and never reach the row builder.
    """
    if partial:
        return TextBlock(f"{theme.fg('dim', '↳')} {theme.fg('muted', 'Applying edit...')}")

    safe_message = sanitize_display_text(message, MAX_RENDER_MESSAGE_CHARS)
    if message and _ERROR_MESSAGE_RE.match(message.strip()):
        return TextBlock(theme.fg("error", safe_message or "Error"))

    if not diff:
        return TextBlock(f"{theme.fg('dim', '↳')} {theme.fg('muted', 'Edit applied')}")

    if language is None:
        source_path = extract_edited_path(message)
        if source_path:
            language = language_for_path(sanitize_display_text(source_path, MAX_RENDER_PATH_CHARS))

    summary = build_summary(theme, count_diff_stats(diff))
    budget = check_split_budget(diff, limits)
    if budget.too_large:
        note = budget.reason or "diff exceeded split render budget"
        return TextBlock(f"{summary}\n{theme.fg('warning', 'Split view skipped:')} {theme.fg('muted', note)}")

    if has_hunk_headers(diff):
        diff = number_unified_diff(diff)
    rows = build_split_rows(diff)
    max_rows = limits.expanded_rows if expanded else limits.collapsed_rows
    split = SplitDiffView(theme, rows, max_rows, language=language, highlighter=highlighter, limits=limits)
    return EditResultView(summary, split)


__all__ = [
    "EditResultView",
    "TextBlock",
    "build_summary",
    "extract_edited_path",
    "render_diff_meter",
    "render_edit_call",
    "render_edit_result",
]
