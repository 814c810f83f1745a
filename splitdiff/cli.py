"""Command-line front door for splitdiff.

Reads a diff from a file or stdin, renders the split view, and writes the
terminal lines to stdout.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from .config import load_render_limits, load_style_name, load_theme_name
from .summary import render_edit_result
from .syntax import language_for_path, make_highlighter
from .theme import available_theme_names, resolve_theme


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_render_width() -> int:
    """Resolve default render width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order."""
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def render_diff_text(
    diff: str,
    width: int,
    *,
    theme_name: str | None = None,
    style: str = "monokai",
    language: str | None = None,
    source_path: str | None = None,
    expanded: bool = False,
    no_color: bool = False,
) -> str:
    """Render ``diff`` into newline-joined terminal output."""
    theme = resolve_theme(theme_name, no_color=no_color)
    if no_color:
        language = None
    elif language is None and source_path:
        language = language_for_path(source_path)

    view = render_edit_result(
        theme,
        diff,
        expanded=expanded,
        language=language,
        highlighter=make_highlighter(style),
        limits=load_render_limits(),
    )
    out: list[str] = []
    for line in view.render(width):
        out.append(line)
        if "\033" in line:
            out.append("\033[0m")
        out.append("\n")
    return "".join(out)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and print the split view of a diff."""
    parser = argparse.ArgumentParser(description="Render a unified diff as a side-by-side terminal view.")
    parser.add_argument("path", nargs="?", default=None, help="Diff file to render. Defaults to stdin.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Render width (default: terminal width).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"Diff theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for syntax highlighting.")
    parser.add_argument("--language", default=None, help="Pygments language alias for highlighting.")
    parser.add_argument("--source-path", default=None, help="Edited file path, used to infer the language.")
    parser.add_argument("--expanded", action="store_true", help="Show more rows before truncating.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--debug", action="store_true", help="Log diagnostics to stderr.")
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    if args.path is None:
        diff = sys.stdin.read()
    else:
        path = Path(args.path)
        if not path.is_file():
            raise SystemExit(f"Path not found: {path}")
        diff = read_text(path)

    width = args.width if args.width is not None else _default_render_width()
    sys.stdout.write(
        render_diff_text(
            diff,
            width,
            theme_name=args.theme or load_theme_name(),
            style=args.style or load_style_name(),
            language=args.language,
            source_path=args.source_path,
            expanded=args.expanded,
            no_color=args.no_color,
        )
    )
