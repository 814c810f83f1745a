"""RGB conversions for ANSI color sequences.

Parses 24-bit and 256-color SGR sequences into RGB, blends colors, and emits
24-bit background sequences.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

_TRUECOLOR_RE = re.compile(r"\x1b\[(?:3|4)8;2;(\d{1,3});(\d{1,3});(\d{1,3})m")
_COLOR_256_RE = re.compile(r"\x1b\[(?:3|4)8;5;(\d{1,3})m")
_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


@dataclass(frozen=True)
class RgbColor:
    """Color channels; fractional values are allowed until serialized."""

    r: float
    g: float
    b: float


_BASE_16: tuple[RgbColor, ...] = (
    RgbColor(0, 0, 0),
    RgbColor(128, 0, 0),
    RgbColor(0, 128, 0),
    RgbColor(128, 128, 0),
    RgbColor(0, 0, 128),
    RgbColor(128, 0, 128),
    RgbColor(0, 128, 128),
    RgbColor(192, 192, 192),
    RgbColor(128, 128, 128),
    RgbColor(255, 0, 0),
    RgbColor(0, 255, 0),
    RgbColor(255, 255, 0),
    RgbColor(0, 0, 255),
    RgbColor(255, 0, 255),
    RgbColor(0, 255, 255),
    RgbColor(255, 255, 255),
)


def _clamp_channel(value: float) -> int:
    return max(0, min(255, math.floor(value + 0.5)))


def ansi256_to_rgb(code: int) -> RgbColor:
    """Map a 256-color palette index to RGB.

    0-15 use the xterm base table, 16-231 the 6x6x6 cube, and 232-254 the
    grayscale ramp. 255 (and anything above) is pure white.
    """
    if code <= 15:
        if 0 <= code < len(_BASE_16):
            return _BASE_16[code]
        return RgbColor(255, 255, 255)
    if code >= 255:
        return RgbColor(255, 255, 255)
    if code >= 232:
        value = max(0, min(255, 8 + (code - 232) * 10))
        return RgbColor(value, value, value)
    cube = code - 16
    blue = cube % 6
    green = (cube // 6) % 6
    red = (cube // 36) % 6
    return RgbColor(_CUBE_LEVELS[red], _CUBE_LEVELS[green], _CUBE_LEVELS[blue])


def parse_ansi_color(sequence: str | None) -> RgbColor | None:
    """Return the RGB color of a foreground/background SGR, or ``None``."""
    if not sequence:
        return None
    match = _TRUECOLOR_RE.search(sequence)
    if match:
        return RgbColor(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    match = _COLOR_256_RE.search(sequence)
    if match:
        return ansi256_to_rgb(int(match.group(1)))
    return None


def mix_rgb(base: RgbColor, tint: RgbColor, ratio: float) -> RgbColor:
    """Linearly blend ``tint`` into ``base``; ``ratio`` is clamped to [0, 1]."""
    clamped = max(0.0, min(1.0, ratio))
    return RgbColor(
        base.r * (1 - clamped) + tint.r * clamped,
        base.g * (1 - clamped) + tint.g * clamped,
        base.b * (1 - clamped) + tint.b * clamped,
    )


def rgb_to_bg_ansi(color: RgbColor) -> str:
    """Serialize ``color`` as a 24-bit background SGR sequence."""
    r = _clamp_channel(color.r)
    g = _clamp_channel(color.g)
    b = _clamp_channel(color.b)
    return f"\033[48;2;{r};{g};{b}m"


__all__ = [
    "RgbColor",
    "ansi256_to_rgb",
    "mix_rgb",
    "parse_ansi_color",
    "rgb_to_bg_ansi",
]
