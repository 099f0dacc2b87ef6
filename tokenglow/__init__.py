"""Gradient painting for tokens typed at an interactive prompt."""

__version__ = "0.3.0"
