"""Merge token matches into a paint mask."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from tokenglow.highlighting.matcher import Span, find_occurrences

TokenSpans = Sequence[tuple[str, Sequence[Span]]]


@dataclass(frozen=True)
class PaintMask:
    """Positions to paint plus the outer bounds of every match."""

    positions: frozenset[int]
    min_start: int
    max_end: int

    def __contains__(self, position: object) -> bool:
        return position in self.positions

    def __len__(self) -> int:
        return len(self.positions)

    @property
    def width(self) -> int:
        return self.max_end - self.min_start

    def window(self) -> range:
        """Every position from the first match start to the last match end."""

        return range(self.min_start, self.max_end)

    def compact(self) -> list[int]:
        """Masked positions only, in ascending order."""

        return sorted(self.positions)


def collect_spans(
    buffer: str,
    tokens: Iterable[str],
    *,
    ignore_case: bool = False,
    word_boundary: bool = False,
) -> list[tuple[str, list[Span]]]:
    return [
        (token, find_occurrences(buffer, token, ignore_case=ignore_case, word_boundary=word_boundary))
        for token in tokens
    ]


def build_mask(token_spans: TokenSpans) -> PaintMask | None:
    """Return the paint mask, or ``None`` when nothing matched."""

    positions: set[int] = set()
    min_start: int | None = None
    max_end: int | None = None
    for _token, spans in token_spans:
        for span in spans:
            positions.update(span.positions())
            min_start = span.start if min_start is None else min(min_start, span.start)
            max_end = span.end if max_end is None else max(max_end, span.end)

    if min_start is None or max_end is None or max_end <= min_start:
        return None
    return PaintMask(frozenset(positions), min_start, max_end)


__all__ = ["PaintMask", "TokenSpans", "build_mask", "collect_spans"]
