"""Derive diff row and inline-emphasis backgrounds from a theme.

Each background is the theme's container background blended toward the
added/removed accent color. Additions get a stronger row tint than removals;
inline emphasis is strong on both sides.
"""

from __future__ import annotations

from dataclasses import dataclass

from .color import RgbColor, mix_rgb, parse_ansi_color, rgb_to_bg_ansi
from .theme import DiffTheme

ADD_ROW_BACKGROUND_MIX_RATIO = 0.24
REMOVE_ROW_BACKGROUND_MIX_RATIO = 0.12
ADD_INLINE_EMPHASIS_MIX_RATIO = 0.44
REMOVE_INLINE_EMPHASIS_MIX_RATIO = 0.26

DEFAULT_BASE_BG = RgbColor(32, 35, 42)
DEFAULT_ADD_FG = RgbColor(88, 173, 88)
DEFAULT_REMOVE_FG = RgbColor(196, 98, 98)


@dataclass(frozen=True)
class DiffPalette:
    """Background SGR sequences for shaded rows and emphasized spans."""

    add_row_bg: str
    remove_row_bg: str
    add_emphasis_bg: str
    remove_emphasis_bg: str


EMPTY_PALETTE = DiffPalette("", "", "", "")


def resolve_diff_palette(theme: DiffTheme) -> DiffPalette:
    """Blend theme colors into the four diff backgrounds.

    Missing or unparseable theme colors fall back to fixed defaults. Themes
    with colors disabled get an empty palette.
    """
    if not theme.colors_enabled:
        return EMPTY_PALETTE

    base_bg = (
        parse_ansi_color(theme.bg_ansi("success_bg"))
        or parse_ansi_color(theme.bg_ansi("pending_bg"))
        or DEFAULT_BASE_BG
    )
    add_fg = parse_ansi_color(theme.fg_ansi("diff_added")) or DEFAULT_ADD_FG
    remove_fg = parse_ansi_color(theme.fg_ansi("diff_removed")) or DEFAULT_REMOVE_FG

    return DiffPalette(
        add_row_bg=rgb_to_bg_ansi(mix_rgb(base_bg, add_fg, ADD_ROW_BACKGROUND_MIX_RATIO)),
        remove_row_bg=rgb_to_bg_ansi(mix_rgb(base_bg, remove_fg, REMOVE_ROW_BACKGROUND_MIX_RATIO)),
        add_emphasis_bg=rgb_to_bg_ansi(mix_rgb(base_bg, add_fg, ADD_INLINE_EMPHASIS_MIX_RATIO)),
        remove_emphasis_bg=rgb_to_bg_ansi(mix_rgb(base_bg, remove_fg, REMOVE_INLINE_EMPHASIS_MIX_RATIO)),
    )


__all__ = [
    "DiffPalette",
    "EMPTY_PALETTE",
    "resolve_diff_palette",
]
