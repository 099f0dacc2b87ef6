"""Factory helpers for attaching a gradient highlighter to a document."""
from __future__ import annotations

from PySide6.QtGui import QTextDocument

from tokenglow.core.config import ConfigManager, GradientConfig
from tokenglow.highlighting.highlighter import GradientHighlighter


def create_highlighting(
    document: QTextDocument,
    config: ConfigManager | GradientConfig | None = None,
) -> GradientHighlighter:
    """Create a gradient highlighter for ``document``.

    Parameters
    ----------
    document:
        The QTextDocument the highlighter should attach to.
    config:
        A resolved GradientConfig, a ConfigManager to resolve one from, or
        None to load the user's settings.
    """
    if config is None:
        config = ConfigManager()
    if isinstance(config, ConfigManager):
        config = config.gradient_config()
    return GradientHighlighter(document, config)


__all__ = ["create_highlighting"]
