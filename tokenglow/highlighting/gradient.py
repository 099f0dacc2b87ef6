"""Per-buffer gradient painting."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from tokenglow.core.config import ColorValue, DomainPolicy, GradientConfig
from tokenglow.highlighting.colors import ColorAssigner
from tokenglow.highlighting.matcher import Span
from tokenglow.highlighting.spans import PaintMask, build_mask, collect_spans

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Region:
    """One painted character, ``[start, end)`` with ``end == start + 1``."""

    start: int
    end: int
    color: ColorValue

    def as_region_highlight(self, memo: str | None = None) -> str:
        """Format the region the way zle's ``region_highlight`` expects it."""

        entry = f"{self.start} {self.end} fg={self.color}"
        if memo:
            entry += f", memo={memo}"
        return entry


class GradientPainter:
    """Runs one paint pass per buffer change.

    The painter keeps only its configuration between calls; every pass
    rebuilds the spans and the mask from the buffer it is given.
    """

    def __init__(self, config: GradientConfig | None = None) -> None:
        self.config = config or GradientConfig()
        self.colors = ColorAssigner(self.config)

    def _collect(self, buffer: str) -> list[tuple[str, list[Span]]]:
        return collect_spans(
            buffer,
            self.config.tokens,
            ignore_case=self.config.ignore_case,
            word_boundary=self.config.word_boundary,
        )

    def spans(self, buffer: str) -> list[Span]:
        """All matches of all tokens, ordered by position."""

        return sorted(span for _token, found in self._collect(buffer) for span in found)

    def paint(self, buffer: str) -> list[Region]:
        token_spans = self._collect(buffer)
        mask = build_mask(token_spans)
        if mask is None:
            return []

        policy = self.config.policy
        if policy == DomainPolicy.COMPACT:
            regions = self._paint_compact(mask)
        elif policy == DomainPolicy.SPAN:
            regions = self._paint_spans(sorted(span for _token, found in token_spans for span in found))
        else:
            regions = self._paint_window(mask)
        logger.debug("Painted %d region(s) with %s policy", len(regions), getattr(policy, "value", policy))
        return regions

    def _paint_window(self, mask: PaintMask) -> list[Region]:
        width = mask.width
        return [
            self._region(position, position - mask.min_start, width)
            for position in mask.window()
            if position in mask
        ]

    def _paint_compact(self, mask: PaintMask) -> list[Region]:
        positions = mask.compact()
        return [self._region(position, rank, len(positions)) for rank, position in enumerate(positions)]

    def _paint_spans(self, spans: list[Span]) -> list[Region]:
        painted: set[int] = set()
        regions: list[Region] = []
        for span in spans:
            for offset, position in enumerate(span.positions()):
                if position in painted:
                    continue
                painted.add(position)
                regions.append(self._region(position, offset, span.length))
        regions.sort(key=lambda region: region.start)
        return regions

    def _region(self, position: int, step: int, length: int) -> Region:
        return Region(position, position + 1, self.colors.color_for_index(step, length))


def paint(buffer: str, config: GradientConfig | None = None) -> list[Region]:
    """Convenience wrapper for a single pass."""

    return GradientPainter(config).paint(buffer)


__all__ = ["GradientPainter", "Region", "paint"]
