"""JSON config helpers.

Reads render limits, the diff theme name, and the syntax style name.
The file is user-edited; malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "splitdiff"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
DEFAULT_STYLE = "monokai"


@dataclass(frozen=True)
class RenderLimits:
    """Size thresholds for split rendering and its caches."""

    max_split_diff_chars: int = 120_000
    max_split_diff_lines: int = 2_000
    collapsed_rows: int = 36
    expanded_rows: int = 160
    max_highlight_cache_entries: int = 2048
    max_highlight_line_length: int = 4000


DEFAULT_LIMITS = RenderLimits()


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_positive_int(value: object) -> int | None:
    """Accept strictly positive ints; booleans and other types are invalid."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def load_render_limits() -> RenderLimits:
    """Load render limits from the ``limits`` config object.

    Each key is validated independently; invalid values keep their default.
    """
    raw = load_config().get("limits")
    if not isinstance(raw, dict):
        return DEFAULT_LIMITS

    overrides: dict[str, int] = {}
    for limit_field in fields(RenderLimits):
        value = _coerce_positive_int(raw.get(limit_field.name))
        if value is not None:
            overrides[limit_field.name] = value
    return replace(DEFAULT_LIMITS, **overrides)


def _load_name(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load persisted diff theme name, returning ``None`` when unset/invalid."""
    return _load_name("theme")


def load_style_name() -> str:
    """Load the Pygments style name, defaulting to ``monokai``."""
    return _load_name("style") or DEFAULT_STYLE


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_LIMITS",
    "DEFAULT_STYLE",
    "RenderLimits",
    "load_config",
    "load_render_limits",
    "load_style_name",
    "load_theme_name",
]
