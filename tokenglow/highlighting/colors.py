"""Gradient color assignment.

Two modes map a character's step ``i`` within a gradient of ``length``
steps onto a color:

* palette mode picks a stop from an ordered palette with floor division,
* pastel mode walks the hue wheel from a base hue and quantizes the HSL
  color onto the xterm-256 color cube.
"""
from __future__ import annotations

import colorsys

from tokenglow.core.config import ColorMode, ColorValue, GradientConfig, PastelParameters

FALLBACK_COLOR = "default"

# xterm-256 layout: 16 system colors, a 6x6x6 cube, then a 24-step gray ramp.
CUBE_BASE = 16
CUBE_LEVELS = (0, 95, 135, 175, 215, 255)
GRAYSCALE_BASE = 232
GRAYSCALE_STEP = 4
GRAY_SATURATION_EPSILON = 1e-3

SYSTEM_COLORS = (
    (0, 0, 0),
    (205, 0, 0),
    (0, 205, 0),
    (205, 205, 0),
    (0, 0, 238),
    (205, 0, 205),
    (0, 205, 205),
    (229, 229, 229),
    (127, 127, 127),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (92, 92, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
)


def _quantize(component: float) -> int:
    return max(0, min(5, round(component * 5)))


def palette_color(i: int, length: int, palette: tuple[ColorValue, ...]) -> ColorValue:
    """Pick the palette stop for step ``i`` of ``length``.

    The first step always gets the first stop and the last step the last
    stop. Steps in between are spread with floor division.
    """

    stops = len(palette)
    if stops == 0:
        return FALLBACK_COLOR
    if stops <= 1 or length <= 1:
        return palette[0]
    idx = (i * (stops - 1)) // (length - 1)
    idx = max(0, min(stops - 1, idx))
    return palette[idx]


def pastel_hue_span(length: int, params: PastelParameters) -> float:
    """Degrees of hue covered by a gradient of ``length`` characters."""

    if length <= 3:
        span = params.base_span_deg
    else:
        span = params.base_span_deg + (length - 3) * params.per_char_span_deg
    return max(0.0, min(params.max_span_deg, span))


def pastel_hue(i: int, length: int, params: PastelParameters) -> float:
    if length <= 1:
        return params.base_hue % 360.0
    step = pastel_hue_span(length, params) / (length - 1)
    return (params.base_hue + i * step) % 360.0


def pastel_hues(length: int, params: PastelParameters) -> list[float]:
    return [pastel_hue(i, length, params) for i in range(length)]


def hsl_to_xterm(hue: float, saturation: float, lightness: float) -> int:
    """Convert an HSL color to the nearest xterm-256 index.

    ``hue`` is in degrees, ``saturation`` and ``lightness`` in ``[0, 1]``.
    Unsaturated colors use the grayscale ramp so they stay neutral.
    """

    if abs(saturation) < GRAY_SATURATION_EPSILON:
        return GRAYSCALE_BASE + GRAYSCALE_STEP * _quantize(lightness)
    red, green, blue = colorsys.hls_to_rgb((hue % 360.0) / 360.0, lightness, saturation)
    return CUBE_BASE + 36 * _quantize(red) + 6 * _quantize(green) + _quantize(blue)


def pastel_color(i: int, length: int, params: PastelParameters) -> int:
    return hsl_to_xterm(pastel_hue(i, length, params), params.saturation, params.lightness)


def xterm_rgb(index: int) -> tuple[int, int, int]:
    """Return the 8-bit RGB triple xterm uses for a 256-color index."""

    if not 0 <= index <= 255:
        raise ValueError(f"xterm color index out of range: {index}")
    if index < CUBE_BASE:
        return SYSTEM_COLORS[index]
    if index < GRAYSCALE_BASE:
        offset = index - CUBE_BASE
        return (
            CUBE_LEVELS[offset // 36],
            CUBE_LEVELS[(offset // 6) % 6],
            CUBE_LEVELS[offset % 6],
        )
    level = 8 + 10 * (index - GRAYSCALE_BASE)
    return (level, level, level)


class ColorAssigner:
    """Maps gradient steps to color values for one configuration."""

    def __init__(self, config: GradientConfig) -> None:
        self.config = config

    def color_for_index(self, i: int, length: int) -> ColorValue:
        if self.config.mode == ColorMode.PALETTE:
            return palette_color(i, length, self.config.palette)
        return pastel_color(i, length, self.config.pastel)


__all__ = [
    "ColorAssigner",
    "FALLBACK_COLOR",
    "hsl_to_xterm",
    "palette_color",
    "pastel_color",
    "pastel_hue",
    "pastel_hue_span",
    "pastel_hues",
    "xterm_rgb",
]
