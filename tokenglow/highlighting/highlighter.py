"""Qt syntax highlighter that paints gradient tokens in a text document."""
from __future__ import annotations

from itertools import accumulate

from PySide6.QtGui import QColor, QSyntaxHighlighter, QTextCharFormat, QTextDocument

from tokenglow.core.config import ColorValue, GradientConfig
from tokenglow.core.logging import get_logger
from tokenglow.highlighting.colors import xterm_rgb
from tokenglow.highlighting.gradient import GradientPainter


def qcolor_for(color: ColorValue) -> QColor | None:
    """Translate a gradient color value into a QColor."""

    if isinstance(color, str) and color.strip().isdigit():
        color = int(color.strip())
    if isinstance(color, int):
        try:
            return QColor(*xterm_rgb(color))
        except ValueError:
            return None
    if color == "default":
        return None
    qcolor = QColor(color)
    return qcolor if qcolor.isValid() else None


def utf16_offsets(text: str) -> list[int]:
    """Map each code-point position of ``text`` (and its end) to a QString offset."""

    return list(accumulate((2 if ord(char) > 0xFFFF else 1 for char in text), initial=0))


class GradientHighlighter(QSyntaxHighlighter):
    """Paints each block of a document as an independent buffer."""

    def __init__(
        self,
        document: QTextDocument,
        config: GradientConfig | None = None,
    ) -> None:
        super().__init__(document)
        self.logger = get_logger(__name__)
        self.painter = GradientPainter(config)
        self._formats: dict[ColorValue, QTextCharFormat | None] = {}

    @property
    def config(self) -> GradientConfig:
        return self.painter.config

    def set_config(self, config: GradientConfig) -> None:
        self.painter = GradientPainter(config)
        self._formats.clear()
        self.rehighlight()

    def _format_for(self, color: ColorValue) -> QTextCharFormat | None:
        if color not in self._formats:
            qcolor = qcolor_for(color)
            if qcolor is None:
                self.logger.debug("Leaving %r unpainted; no matching Qt color", color)
                self._formats[color] = None
            else:
                fmt = QTextCharFormat()
                fmt.setForeground(qcolor)
                self._formats[color] = fmt
        return self._formats[color]

    def highlightBlock(self, text: str) -> None:  # type: ignore[override]
        # Regions count code points; setFormat counts UTF-16 units.
        offsets = utf16_offsets(text)
        for region in self.painter.paint(text):
            fmt = self._format_for(region.color)
            if fmt is not None:
                start = offsets[region.start]
                self.setFormat(start, offsets[region.end] - start, fmt)


__all__ = ["GradientHighlighter", "qcolor_for", "utf16_offsets"]
