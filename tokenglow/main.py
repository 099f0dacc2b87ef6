"""
tokenglow entry point.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Sequence, TextIO

# Allow running the file directly (e.g. `python tokenglow/main.py`) by
# ensuring the repository root is on sys.path before importing the package.
if __package__ in {None, ""}:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from tokenglow.core.config import ColorMode, ConfigManager, DomainPolicy, GradientConfig
from tokenglow.core.logging import configure_logging, get_logger
from tokenglow.highlighting.ansi import render_ansi, render_region_highlight
from tokenglow.highlighting.gradient import GradientPainter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tokenglow",
        description="Paint configured tokens in a command line with a color gradient.",
    )
    parser.add_argument("text", nargs="*", help="Buffer to paint; reads lines from stdin when omitted")
    parser.add_argument(
        "-t",
        "--token",
        dest="tokens",
        action="append",
        help="Token to paint (repeatable, replaces configured tokens)",
    )
    parser.add_argument("--mode", choices=[mode.value for mode in ColorMode], help="Color mode")
    parser.add_argument("--policy", choices=[policy.value for policy in DomainPolicy], help="Gradient domain")
    parser.add_argument("--ignore-case", action="store_true", default=None, help="Match tokens case-insensitively")
    parser.add_argument("--word-boundary", action="store_true", default=None, help="Only match whole words")
    parser.add_argument(
        "--regions",
        action="store_true",
        help="Print region_highlight entries instead of painted text",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def resolve_config(args: argparse.Namespace, manager: ConfigManager | None = None) -> GradientConfig:
    """Apply command-line options on top of the configured settings."""

    manager = manager or ConfigManager()
    config = manager.gradient_config()
    changes: dict[str, object] = {}
    if args.tokens:
        changes["tokens"] = tuple(args.tokens)
    if args.mode:
        changes["mode"] = ColorMode(args.mode)
    if args.policy:
        changes["policy"] = DomainPolicy(args.policy)
    if args.ignore_case is not None:
        changes["ignore_case"] = args.ignore_case
    if args.word_boundary is not None:
        changes["word_boundary"] = args.word_boundary
    return config.with_overrides(**changes) if changes else config


def paint_line(painter: GradientPainter, line: str, *, regions: bool = False) -> list[str]:
    painted = painter.paint(line)
    if regions:
        return render_region_highlight(painted, painter.config.memo)
    return [render_ansi(line, painted)]


def run(painter: GradientPainter, lines: Iterable[str], out: TextIO, *, regions: bool = False) -> None:
    for line in lines:
        for output in paint_line(painter, line.rstrip("\r\n"), regions=regions):
            print(output, file=out, flush=True)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    logger = get_logger(__name__)

    config = resolve_config(args)
    logger.debug("Using %s", config)
    painter = GradientPainter(config)

    if args.text:
        run(painter, [" ".join(args.text)], sys.stdout, regions=args.regions)
        return 0

    try:
        run(painter, sys.stdin, sys.stdout, regions=args.regions)
    except KeyboardInterrupt:
        logger.debug("Interrupted")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
