"""Render painted regions as ANSI escape sequences for a terminal."""
from __future__ import annotations

import logging
from typing import Iterable

from tokenglow.core.config import ColorValue
from tokenglow.highlighting.gradient import Region

logger = logging.getLogger(__name__)

RESET = "\033[0m"

BASIC_COLORS = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
    "default": 39,
}


def sgr_for(color: ColorValue) -> str | None:
    """Return the foreground escape for ``color`` or None if it is unknown."""

    if isinstance(color, int):
        if 0 <= color <= 255:
            return f"\033[38;5;{color}m"
        return None
    text = color.strip().lower()
    if text.isdigit():
        return sgr_for(int(text))
    code = BASIC_COLORS.get(text)
    if code is None:
        return None
    return f"\033[{code}m"


def render_ansi(buffer: str, regions: Iterable[Region]) -> str:
    """Wrap each painted character of ``buffer`` in its color."""

    colors = {region.start: region.color for region in regions}
    pieces: list[str] = []
    for position, char in enumerate(buffer):
        color = colors.get(position)
        escape = sgr_for(color) if color is not None else None
        if escape is None:
            if color is not None:
                logger.debug("No terminal color for %r at %d", color, position)
            pieces.append(char)
        else:
            pieces.append(f"{escape}{char}{RESET}")
    return "".join(pieces)


def render_region_highlight(regions: Iterable[Region], memo: str | None = None) -> list[str]:
    return [region.as_region_highlight(memo) for region in regions]


__all__ = ["BASIC_COLORS", "RESET", "render_ansi", "render_region_highlight", "sgr_for"]
