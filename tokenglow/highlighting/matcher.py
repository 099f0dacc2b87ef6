"""Literal token matching over an editor buffer."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Span:
    """Half-open ``[start, end)`` range of code-point positions."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def positions(self) -> range:
        return range(self.start, self.end)


def fold_case(text: str) -> str:
    """Lower-case ``text`` without changing its length.

    Characters whose lower-case form is longer than one code point (such as
    ``"İ"``) are kept as they are so match positions map back onto the
    original buffer.
    """

    folded = []
    for char in text:
        lowered = char.lower()
        folded.append(lowered if len(lowered) == 1 else char)
    return "".join(folded)


def is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def _on_boundary(text: str, start: int, end: int) -> bool:
    if start > 0 and is_word_char(text[start - 1]):
        return False
    if end < len(text) and is_word_char(text[end]):
        return False
    return True


def find_occurrences(
    haystack: str,
    needle: str,
    *,
    ignore_case: bool = False,
    word_boundary: bool = False,
) -> list[Span]:
    """Return every non-overlapping occurrence of ``needle`` in ``haystack``.

    Matching is literal. The scan is greedy from the left and resumes right
    after each accepted match, so overlapping candidates such as the second
    ``"aa"`` in ``"aaa"`` are never reported. With ``word_boundary`` a
    candidate touching a word character on either side is rejected, and the
    scan also resumes after the rejected candidate.
    """

    if not needle or not haystack or len(needle) > len(haystack):
        return []

    if ignore_case:
        haystack = fold_case(haystack)
        needle = fold_case(needle)

    spans: list[Span] = []
    size = len(needle)
    offset = haystack.find(needle)
    while offset != -1:
        end = offset + size
        if not word_boundary or _on_boundary(haystack, offset, end):
            spans.append(Span(offset, end))
        offset = haystack.find(needle, end)
    return spans


__all__ = ["Span", "find_occurrences", "fold_case", "is_word_char"]
