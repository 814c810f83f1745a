"""Plain-text sanitization and offset-stable wrapping.

Wrapping works on un-highlighted text so segment lengths add up to the
original line length; inline diff spans computed on the whole line can then
be translated into each segment's local coordinates.
"""

from __future__ import annotations

import re

from .ansi import char_display_width, strip_ansi

_SINGLE_LINE_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_single_line_text(value: str) -> str:
    """Drop line breaks and control bytes, keeping tabs."""
    return _SINGLE_LINE_CONTROL_RE.sub("", value.replace("\r", "").replace("\n", ""))


def strip_inline_breaks(value: str) -> str:
    """Remove CR/LF while leaving escape sequences untouched."""
    return value.replace("\r", "").replace("\n", "")


def wrap_plain_text(text: str, width: int) -> list[str]:
    """Split ``text`` into chunks of at most ``width`` display columns.

    Breaks after the last space in each window so the space stays with the
    earlier chunk and ``sum(map(len, chunks)) == len(text)``. Long tokens
    without spaces (paths, hashes) are hard-broken. A single glyph wider than
    ``width`` still forms its own chunk.
    """
    safe_width = max(1, width)
    safe_text = sanitize_single_line_text(text)
    if not safe_text:
        return [""]

    lines: list[str] = []
    cursor = 0
    while cursor < len(safe_text):
        window_end = cursor
        col = 0
        while window_end < len(safe_text):
            w = char_display_width(safe_text[window_end], col)
            if col + w > safe_width and window_end > cursor:
                break
            col += w
            window_end += 1

        if window_end >= len(safe_text):
            lines.append(safe_text[cursor:])
            break

        window = safe_text[cursor:window_end]
        break_on_space = window.rfind(" ")
        if break_on_space > 0:
            step = break_on_space + 1
            lines.append(safe_text[cursor : cursor + step])
            cursor += step
            continue

        lines.append(window)
        cursor = window_end

    return lines or [""]


def truncate_display_text(value: str, max_chars: int) -> str:
    """Shorten ``value`` to ``max_chars`` characters, ending with an ellipsis."""
    if max_chars <= 0:
        return ""
    if len(value) <= max_chars:
        return value
    if max_chars == 1:
        return "…"
    return f"{value[: max_chars - 1]}…"


def sanitize_display_text(value: object, max_chars: int) -> str:
    """Flatten arbitrary text for a one-line label.

    Escape sequences and control bytes are removed, whitespace runs collapse
    to single spaces, and the result is truncated to ``max_chars``.
    """
    as_string = value if isinstance(value, str) else ("" if value is None else str(value))
    without_ansi = strip_ansi(as_string)
    normalized = without_ansi.replace("\r", " ").replace("\n", " ")
    sanitized = _WHITESPACE_RE.sub(" ", sanitize_single_line_text(normalized)).strip()
    return truncate_display_text(sanitized, max_chars)


__all__ = [
    "sanitize_display_text",
    "sanitize_single_line_text",
    "strip_inline_breaks",
    "truncate_display_text",
    "wrap_plain_text",
]
