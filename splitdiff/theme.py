"""Diff theme definitions and selection helpers.

Themes are named ANSI palettes for diff chrome (markers, numbers, borders,
summaries) and the container background the split view is drawn on.
Syntax highlighting style for code remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass

FG_RESET = "\033[39m"

_FOREGROUND_NAMES = frozenset(
    {
        "title",
        "accent",
        "muted",
        "dim",
        "border_muted",
        "warning",
        "error",
        "diff_added",
        "diff_removed",
    }
)
_BACKGROUND_NAMES = frozenset({"success_bg", "pending_bg"})


@dataclass(frozen=True)
class DiffTheme:
    """Semantic ANSI palette used by the split-diff renderer."""

    name: str
    title: str
    accent: str
    muted: str
    dim: str
    border_muted: str
    warning: str
    error: str
    diff_added: str
    diff_removed: str
    success_bg: str
    pending_bg: str
    colors_enabled: bool = True

    def fg_ansi(self, name: str) -> str:
        """Return the raw foreground sequence registered under ``name``."""
        if name not in _FOREGROUND_NAMES:
            raise KeyError(f"unknown theme foreground: {name}")
        return getattr(self, name)

    def bg_ansi(self, name: str) -> str:
        """Return the raw background sequence registered under ``name``."""
        if name not in _BACKGROUND_NAMES:
            raise KeyError(f"unknown theme background: {name}")
        return getattr(self, name)

    def fg(self, name: str, text: str) -> str:
        """Color ``text`` and reset only the foreground afterwards."""
        code = self.fg_ansi(name)
        if not code or not text:
            return text
        return f"{code}{text}{FG_RESET}"

    def bold(self, text: str) -> str:
        if not self.colors_enabled:
            return text
        return f"\033[1m{text}\033[22m"

    def dim_text(self, text: str) -> str:
        if not self.colors_enabled:
            return text
        return f"\033[2m{text}\033[22m"

    def strikethrough(self, text: str) -> str:
        if not self.colors_enabled:
            return text
        return f"\033[9m{text}\033[29m"


DEFAULT_THEME = DiffTheme(
    name="default",
    title="\033[38;5;117m",
    accent="\033[38;5;81m",
    muted="\033[38;5;246m",
    dim="\033[38;5;242m",
    border_muted="\033[38;5;239m",
    warning="\033[38;5;214m",
    error="\033[38;5;203m",
    diff_added="\033[38;2;88;173;88m",
    diff_removed="\033[38;2;196;98;98m",
    success_bg="\033[48;2;30;36;34m",
    pending_bg="\033[48;2;32;35;42m",
)

OCEAN_THEME = DiffTheme(
    name="ocean",
    title="\033[38;5;45m",
    accent="\033[38;5;39m",
    muted="\033[38;5;110m",
    dim="\033[38;5;67m",
    border_muted="\033[38;5;24m",
    warning="\033[38;5;215m",
    error="\033[38;5;204m",
    diff_added="\033[38;5;84m",
    diff_removed="\033[38;5;210m",
    success_bg="\033[48;5;234m",
    pending_bg="\033[48;5;235m",
)

PLAIN_THEME = DiffTheme(
    name="plain",
    title="",
    accent="",
    muted="",
    dim="",
    border_muted="",
    warning="",
    error="",
    diff_added="",
    diff_removed="",
    success_bg="",
    pending_bg="",
    colors_enabled=False,
)

_THEMES: dict[str, DiffTheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if not candidate:
        return DEFAULT_THEME.name
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> DiffTheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    normalized = normalize_theme_name(name)
    return _THEMES.get(normalized, DEFAULT_THEME)


__all__ = [
    "DiffTheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
