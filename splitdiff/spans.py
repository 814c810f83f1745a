"""Character-level change regions for paired old/new lines.

Only the common prefix and suffix are trimmed, so each side gets at most one
contiguous span. Lines with several separate edits get one span covering all
of them; this keeps the computation linear in line length.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DiffSpan:
    """Half-open ``[start, end)`` character range within a line."""

    start: int
    end: int


@dataclass(frozen=True)
class InlineSpans:
    left: tuple[DiffSpan, ...] = ()
    right: tuple[DiffSpan, ...] = ()


NO_SPANS = InlineSpans()


def compute_inline_diff_spans(left_line: str, right_line: str) -> InlineSpans:
    """Return the differing region of each line after prefix/suffix trimming."""
    if left_line == right_line:
        return NO_SPANS

    start = 0
    min_len = min(len(left_line), len(right_line))
    while start < min_len and left_line[start] == right_line[start]:
        start += 1

    left_end = len(left_line)
    right_end = len(right_line)
    while left_end > start and right_end > start and left_line[left_end - 1] == right_line[right_end - 1]:
        left_end -= 1
        right_end -= 1

    left = (DiffSpan(start, left_end),) if left_end > start else ()
    right = (DiffSpan(start, right_end),) if right_end > start else ()
    return InlineSpans(left=left, right=right)


__all__ = [
    "DiffSpan",
    "InlineSpans",
    "NO_SPANS",
    "compute_inline_diff_spans",
]
