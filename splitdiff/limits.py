"""Up-front size guard for split rendering.

Oversized diffs are rejected before any row is built; the caller shows the
reason string next to a plain summary instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import DEFAULT_LIMITS, RenderLimits

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplitBudget:
    too_large: bool
    reason: str | None = None


WITHIN_BUDGET = SplitBudget(too_large=False)


def count_lines_within_limit(value: str, limit: int) -> tuple[int, bool]:
    """Count lines of ``value``, stopping as soon as ``limit`` is exceeded.

    Returns ``(line_count, exceeded)``.
    """
    line_count = 1
    start = 0
    while True:
        found = value.find("\n", start)
        if found < 0:
            return line_count, False
        line_count += 1
        if line_count > limit:
            return line_count, True
        start = found + 1


def check_split_budget(diff: str, limits: RenderLimits = DEFAULT_LIMITS) -> SplitBudget:
    """Return whether ``diff`` is too large for the split view, and why."""
    if len(diff) > limits.max_split_diff_chars:
        reason = f"diff size {len(diff):,} chars exceeds limit {limits.max_split_diff_chars:,}"
        log.debug("split view skipped: %s", reason)
        return SplitBudget(too_large=True, reason=reason)

    _line_count, exceeded = count_lines_within_limit(diff, limits.max_split_diff_lines)
    if exceeded:
        reason = f"diff has more than {limits.max_split_diff_lines:,} lines"
        log.debug("split view skipped: %s", reason)
        return SplitBudget(too_large=True, reason=reason)

    return WITHIN_BUDGET


__all__ = [
    "SplitBudget",
    "WITHIN_BUDGET",
    "check_split_budget",
    "count_lines_within_limit",
]
