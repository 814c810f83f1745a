"""ANSI-aware text measurement and background shaping utilities.

Provides stripping, padding, truncation, and background injection that keep
escape sequences intact. These helpers keep split columns aligned when color
codes and wide chars are present.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")
SGR_RE = re.compile(r"\x1b\[([0-9;]*)m")
BACKGROUND_SGR_RE = re.compile(r"\x1b\[(?:4\d|10\d|48;5;\d{1,3}|48;2;\d{1,3};\d{1,3};\d{1,3}|49)m")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    """Remove every CSI escape sequence. Only used for measuring."""
    return ANSI_ESCAPE_RE.sub("", text)


def visible_width(text: str) -> int:
    """Return display-column width of ``text`` ignoring escape sequences."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def pad_right(text: str, width: int) -> str:
    """Append spaces until ``text`` is ``width`` columns wide; never truncates."""
    current = visible_width(text)
    if current >= width:
        return text
    return text + " " * (width - current)


def pad_rendered_line_width(line: str, width: int) -> str:
    """Pad a composed row to ``width`` columns (never below one)."""
    return pad_right(line, max(1, width))


def truncate_to_width(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    A wide character that would straddle the limit is dropped whole.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if ch == "\t":
            if col + w > max_cols:
                break
            out.append(" " * w)
            col += w
            i += 1
            continue
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Wrap a styled line into chunks that fit ``width`` display columns.

    Escape sequences remain attached to their surrounding chunk, and tab
    expansion respects terminal tab-stop alignment for each wrapped segment.
    """
    if width <= 0 or not text:
        return [""]

    wrapped: list[str] = []
    chunk: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                chunk.append(match.group(0))
                i = match.end()
                continue

        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > width and chunk:
            wrapped.append("".join(chunk))
            chunk = []
            col = 0
            w = char_display_width(ch, col)
        if ch == "\t":
            chunk.append(" " * w)
        else:
            chunk.append(ch)
        col += w
        i += 1

    wrapped.append("".join(chunk))
    return wrapped


def fit_to_width(text: str, width: int) -> str:
    """Truncate then pad so the visible width is exactly ``width``."""
    return pad_right(truncate_to_width(text, width), width)


def apply_background_to_visible_range(
    text: str,
    start: int,
    end: int,
    background: str,
    restore_background: str,
) -> str:
    """Shade visible characters ``[start, end)`` of an ANSI-coded line.

    SGR sequences (terminated by ``m``) are copied through without advancing
    the visible index. Any other ESC, including a truncated color code, counts
    as a visible character. ``background`` is emitted when the range opens and
    ``restore_background`` when it closes (or at end of text).
    """
    if not text or start >= end or end <= 0:
        return text

    out: list[str] = []
    visible_index = 0
    in_range = False
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = SGR_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue

        if visible_index == start and not in_range:
            out.append(background)
            in_range = True
        if visible_index == end and in_range:
            out.append(restore_background)
            in_range = False

        out.append(text[i])
        visible_index += 1
        i += 1

    if in_range:
        out.append(restore_background)
    return "".join(out)


def _group_sgr_codes(codes: list[str]) -> list[list[str]]:
    """Split SGR params into attributes; 38/48/58 colors keep their arguments."""
    groups: list[list[str]] = []
    index = 0
    while index < len(codes):
        code = codes[index]
        size = 1
        if code in {"38", "48", "58"} and index + 1 < len(codes):
            mode = codes[index + 1]
            if mode == "5":
                size = 3
            elif mode == "2":
                size = 5
        groups.append(codes[index : index + size])
        index += size
    return groups


def _is_reset_code(code: str) -> bool:
    return code.strip("0") == ""


def keep_background_across_resets(text: str, row_background: str) -> str:
    """Re-apply ``row_background`` after every reset embedded in ``text``.

    Highlighters close tokens with ``ESC[0m`` or ``ESC[49m``; either would drop
    the row tint for the rest of the line. Background resets are removed from
    the sequence and the row background follows it.
    """
    if not text:
        return text

    def _rewrite(match: re.Match[str]) -> str:
        """Rebuild one SGR sequence so the row background survives it."""
        codes = [code for code in match.group(1).split(";") if code] or ["0"]
        groups = _group_sgr_codes(codes)
        has_reset = any(len(group) == 1 and _is_reset_code(group[0]) for group in groups)
        has_bg_reset = ["49"] in groups
        if not has_reset and not has_bg_reset:
            return match.group(0)
        rebuilt_codes = [code for group in groups if group != ["49"] for code in group]
        rebuilt = f"\033[{';'.join(rebuilt_codes)}m" if rebuilt_codes else ""
        return f"{rebuilt}{row_background}"

    return SGR_RE.sub(_rewrite, text)


def strip_background_codes(text: str) -> str:
    """Drop standalone background SGR sequences, keeping foreground styling."""
    return BACKGROUND_SGR_RE.sub("", text)


__all__ = [
    "ANSI_ESCAPE_RE",
    "SGR_RE",
    "TAB_STOP",
    "apply_background_to_visible_range",
    "char_display_width",
    "fit_to_width",
    "keep_background_across_resets",
    "pad_rendered_line_width",
    "pad_right",
    "strip_ansi",
    "strip_background_codes",
    "truncate_to_width",
    "visible_width",
    "wrap_ansi_line",
]
