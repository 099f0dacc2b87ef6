"""Token matching, gradient colors and painting.

The Qt highlighter lives in :mod:`tokenglow.highlighting.highlighter` and is
not imported here.
"""
from tokenglow.highlighting.colors import ColorAssigner
from tokenglow.highlighting.gradient import GradientPainter, Region, paint
from tokenglow.highlighting.matcher import Span, find_occurrences
from tokenglow.highlighting.spans import PaintMask, build_mask, collect_spans

__all__ = [
    "ColorAssigner",
    "GradientPainter",
    "PaintMask",
    "Region",
    "Span",
    "build_mask",
    "collect_spans",
    "find_occurrences",
    "paint",
]
