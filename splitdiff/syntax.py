"""Pygments-backed syntax highlighting for single diff segments.

Pygments is imported lazily on first use. ``highlight_code`` raises when a
language is unknown or Pygments fails; the split renderer treats any exception
as "render plain text".
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

Highlighter = Callable[[str, str], str]

_PYGMENTS_READY = False
_PYGMENTS_AVAILABLE = False
_PYGMENTS_HIGHLIGHT = None
_PYGMENTS_GET_LEXER_BY_NAME = None
_PYGMENTS_GET_LEXER_FOR_FILENAME = None
_PYGMENTS_TERMINAL_FORMATTER = None
_PYGMENTS_GET_STYLE_BY_NAME = None
_PYGMENTS_FORMATTERS: dict[str, object] = {}
_PYGMENTS_LEXERS: dict[str, object] = {}
_PYGMENTS_VALID_STYLES: set[str] = set()
_PYGMENTS_INVALID_STYLES: set[str] = set()


def _ensure_pygments_loaded() -> bool:
    """Lazily import and cache Pygments callables.

    Returns whether Pygments is available in the runtime environment.
    """
    global _PYGMENTS_READY
    global _PYGMENTS_AVAILABLE
    global _PYGMENTS_HIGHLIGHT
    global _PYGMENTS_GET_LEXER_BY_NAME
    global _PYGMENTS_GET_LEXER_FOR_FILENAME
    global _PYGMENTS_TERMINAL_FORMATTER
    global _PYGMENTS_GET_STYLE_BY_NAME

    if _PYGMENTS_READY:
        return _PYGMENTS_AVAILABLE

    _PYGMENTS_READY = True
    try:
        from pygments import highlight as pygments_highlight
        from pygments.formatters import Terminal256Formatter
        from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
        from pygments.styles import get_style_by_name
    except ImportError:
        _PYGMENTS_AVAILABLE = False
        return False

    _PYGMENTS_HIGHLIGHT = pygments_highlight
    _PYGMENTS_GET_LEXER_BY_NAME = get_lexer_by_name
    _PYGMENTS_GET_LEXER_FOR_FILENAME = get_lexer_for_filename
    _PYGMENTS_TERMINAL_FORMATTER = Terminal256Formatter
    _PYGMENTS_GET_STYLE_BY_NAME = get_style_by_name
    _PYGMENTS_AVAILABLE = True
    return True


def _normalize_style(style: str) -> str:
    """Validate/canonicalize requested style name with cache-backed checks."""
    if style in _PYGMENTS_VALID_STYLES:
        return style
    if style in _PYGMENTS_INVALID_STYLES:
        return "monokai"

    try:
        assert _PYGMENTS_GET_STYLE_BY_NAME is not None
        _PYGMENTS_GET_STYLE_BY_NAME(style)
        _PYGMENTS_VALID_STYLES.add(style)
        return style
    except Exception:
        _PYGMENTS_INVALID_STYLES.add(style)
        return "monokai"


def _formatter_for_style(style: str):
    """Return cached Pygments terminal formatter for style name."""
    formatter = _PYGMENTS_FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    assert _PYGMENTS_TERMINAL_FORMATTER is not None
    formatter = _PYGMENTS_TERMINAL_FORMATTER(style=style)
    _PYGMENTS_FORMATTERS[style] = formatter
    return formatter


def _lexer_for_language(language: str):
    lexer = _PYGMENTS_LEXERS.get(language)
    if lexer is not None:
        return lexer
    assert _PYGMENTS_GET_LEXER_BY_NAME is not None
    lexer = _PYGMENTS_GET_LEXER_BY_NAME(language, stripnl=False, ensurenl=False)
    _PYGMENTS_LEXERS[language] = lexer
    return lexer


def language_for_path(path: str | Path | None) -> str | None:
    """Return a Pygments language alias for ``path``, or ``None``."""
    if not path or not _ensure_pygments_loaded():
        return None
    try:
        assert _PYGMENTS_GET_LEXER_FOR_FILENAME is not None
        lexer = _PYGMENTS_GET_LEXER_FOR_FILENAME(Path(path).name)
    except Exception:
        return None
    aliases = getattr(lexer, "aliases", None) or ()
    return aliases[0] if aliases else None


def highlight_code(line: str, language: str, style: str = "monokai") -> str:
    """Highlight one line of code, raising on any failure."""
    if not _ensure_pygments_loaded():
        raise RuntimeError("pygments is not available")

    formatter = _formatter_for_style(_normalize_style(style))
    lexer = _lexer_for_language(language)
    assert _PYGMENTS_HIGHLIGHT is not None
    return _PYGMENTS_HIGHLIGHT(line, lexer, formatter)


def make_highlighter(style: str = "monokai") -> Highlighter:
    """Bind ``style`` into a ``(line, language) -> str`` highlighter."""

    def _highlight(line: str, language: str) -> str:
        return highlight_code(line, language, style)

    return _highlight


__all__ = [
    "Highlighter",
    "highlight_code",
    "language_for_path",
    "make_highlighter",
]
