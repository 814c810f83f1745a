"""Parse numbered unified-diff text into side-by-side rows.

Input lines look like ``"-  10 old text"``, ``"+  10 new text"`` or
``"   11 context"``: a prefix, an optional line number, one separator space,
then the content. Consecutive removals and additions are zipped into
``changed`` rows; leftovers become ``removed``/``added`` rows.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, Literal

from .text import sanitize_single_line_text

DiffPrefix = Literal["+", "-", " "]

_DIFF_LINE_RE = re.compile(r"^([+\- ])(\s*\d*)\s(.*)$")
_HUNK_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
TAB_REPLACEMENT = "    "


@dataclass(frozen=True)
class DiffLine:
    """One side of a diff row: sanitized text plus its file line number."""

    prefix: DiffPrefix
    line: str
    line_number: int | None = None


@dataclass(frozen=True)
class ContextRow:
    """Unchanged line present on both sides."""

    left: DiffLine
    right: DiffLine
    kind: ClassVar[str] = "context"


@dataclass(frozen=True)
class ChangedRow:
    """Removed line paired positionally with an added line."""

    left: DiffLine
    right: DiffLine
    kind: ClassVar[str] = "changed"


@dataclass(frozen=True)
class AddedRow:
    """Added line with no removed counterpart."""

    right: DiffLine
    kind: ClassVar[str] = "added"

    @property
    def left(self) -> None:
        return None


@dataclass(frozen=True)
class RemovedRow:
    """Removed line with no added counterpart."""

    left: DiffLine
    kind: ClassVar[str] = "removed"

    @property
    def right(self) -> None:
        return None


SplitDiffRow = ContextRow | ChangedRow | AddedRow | RemovedRow


@dataclass(frozen=True)
class DiffStats:
    additions: int
    removals: int


def _parse_line_number(value: str) -> int | None:
    trimmed = value.strip()
    if not trimmed:
        return None
    try:
        return int(trimmed)
    except ValueError:
        return None


def parse_diff_line(raw_line: str) -> DiffLine | None:
    """Parse one numbered diff line; returns ``None`` for any other shape."""
    match = _DIFF_LINE_RE.match(raw_line)
    if match is None:
        return None
    prefix, raw_number, content = match.groups()
    clean_line = sanitize_single_line_text(content).replace("\t", TAB_REPLACEMENT)
    line_number = _parse_line_number(sanitize_single_line_text(raw_number))
    return DiffLine(prefix=prefix, line=clean_line, line_number=line_number)


def build_split_rows(diff: str) -> list[SplitDiffRow]:
    """Convert numbered diff text into ordered split rows.

    Removed lines take their parsed number or the old-side cursor, added lines
    the new-side cursor. Context lines flush pending runs first; their right
    number comes from the new cursor, defaulting to the left number until the
    new side has been established. ``@@`` hunk headers flush pending runs and
    reset both cursors.
    """
    rows: list[SplitDiffRow] = []
    pending_left: list[DiffLine] = []
    pending_right: list[DiffLine] = []
    old_cursor: int | None = None
    new_cursor: int | None = None

    def flush_pending() -> None:
        """Zip queued removals/additions into changed, removed, added rows."""
        paired = min(len(pending_left), len(pending_right))
        for index in range(max(len(pending_left), len(pending_right))):
            if index < paired:
                rows.append(ChangedRow(left=pending_left[index], right=pending_right[index]))
            elif index < len(pending_left):
                rows.append(RemovedRow(left=pending_left[index]))
            else:
                rows.append(AddedRow(right=pending_right[index]))
        pending_left.clear()
        pending_right.clear()

    for raw_line in diff.split("\n"):
        hunk = _HUNK_RE.match(raw_line)
        if hunk is not None:
            flush_pending()
            old_cursor = int(hunk.group(1))
            new_cursor = int(hunk.group(3))
            continue

        parsed = parse_diff_line(raw_line)
        if parsed is None:
            continue

        if parsed.prefix == "-":
            old_num = parsed.line_number if parsed.line_number is not None else old_cursor
            if old_num is not None:
                old_cursor = old_num + 1
            pending_left.append(DiffLine("-", parsed.line, old_num))
            continue
        if parsed.prefix == "+":
            new_num = parsed.line_number if parsed.line_number is not None else new_cursor
            if new_num is not None:
                new_cursor = new_num + 1
            pending_right.append(DiffLine("+", parsed.line, new_num))
            continue

        flush_pending()

        old_num = parsed.line_number if parsed.line_number is not None else old_cursor
        new_num = new_cursor if new_cursor is not None else old_num
        if old_num is not None:
            old_cursor = old_num + 1
        if new_num is not None:
            new_cursor = new_num + 1
        rows.append(
            ContextRow(
                left=DiffLine(" ", parsed.line, old_num),
                right=DiffLine(" ", parsed.line, new_num),
            )
        )

    flush_pending()
    return rows


def count_diff_stats(diff: str) -> DiffStats:
    """Count added and removed lines, ignoring ``+++``/``---`` file headers."""
    additions = 0
    removals = 0
    for line in diff.split("\n"):
        if line.startswith("+++") or line.startswith("---"):
            continue
        if line.startswith("+"):
            additions += 1
        elif line.startswith("-"):
            removals += 1
    return DiffStats(additions=additions, removals=removals)


def has_hunk_headers(text: str) -> bool:
    """Return whether ``text`` is a plain unified diff with ``@@`` headers."""
    return any(_HUNK_RE.match(line) for line in text.split("\n"))


def number_unified_diff(text: str) -> str:
    """Rewrite a plain unified diff into the numbered line format.

    File headers and metadata are dropped, hunk headers are kept so
    :func:`build_split_rows` can resynchronize its cursors, and each body line
    gets its old (context/removed) or new (added) line number. Hunk bodies are
    bounded by the counts in their header.
    """
    out: list[str] = []
    old_line = new_line = 0
    old_remaining = new_remaining = 0

    for raw_line in text.splitlines():
        hunk = _HUNK_RE.match(raw_line)
        if hunk is not None:
            old_line = int(hunk.group(1))
            new_line = int(hunk.group(3))
            old_remaining = int(hunk.group(2) or "1")
            new_remaining = int(hunk.group(4) or "1")
            out.append(hunk.group(0))
            continue
        if old_remaining <= 0 and new_remaining <= 0:
            continue
        if raw_line.startswith("\\"):
            # "\ No newline at end of file"
            continue
        if raw_line.startswith("+"):
            out.append(f"+{new_line} {raw_line[1:]}")
            new_line += 1
            new_remaining -= 1
        elif raw_line.startswith("-"):
            out.append(f"-{old_line} {raw_line[1:]}")
            old_line += 1
            old_remaining -= 1
        elif raw_line.startswith(" ") or raw_line == "":
            out.append(f" {old_line} {raw_line[1:]}")
            old_line += 1
            new_line += 1
            old_remaining -= 1
            new_remaining -= 1
        else:
            old_remaining = new_remaining = 0

    return "\n".join(out)


__all__ = [
    "AddedRow",
    "ChangedRow",
    "ContextRow",
    "DiffLine",
    "DiffStats",
    "RemovedRow",
    "SplitDiffRow",
    "build_split_rows",
    "count_diff_stats",
    "has_hunk_headers",
    "number_unified_diff",
    "parse_diff_line",
]
