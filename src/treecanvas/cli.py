"""
CLI interface for treecanvas.

Draws a document's tree on a canvas: an interactive tkinter window by
default, or a static SVG with --svg (optionally after replaying clicks).
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .config import Config, get_config
from .navigation import NavigationController, draw_tree
from .sources import (
    html as _html,  # noqa: F401 - ensure html format is registered
)
from .sources import json as _json  # noqa: F401 - ensure json format is registered
from .sources.base import Element, SourceStrategy, registry
from .sources.folder import FolderStrategy
from .surfaces.svg import SvgSurface

logger = logging.getLogger(__name__)


class WindowUnavailableError(RuntimeError):
    """No interactive window can be opened (no tkinter, or no display)."""


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="treecanvas",
        description="Draw a document tree on a canvas and drill into it by clicking",
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Input file or directory (reads from stdin if not provided)",
    )

    parser.add_argument(
        "--size",
        "-s",
        type=str,
        help="Canvas size as WIDTH:HEIGHT (default from config, 400:300)",
    )

    parser.add_argument(
        "--type",
        type=str,
        dest="format_type",
        help="Force source type (e.g., html, json)",
    )

    parser.add_argument(
        "--svg",
        type=str,
        help="Write the drawing to this SVG file instead of opening a window",
    )

    parser.add_argument(
        "--click",
        "-c",
        type=str,
        action="append",
        default=[],
        metavar="X,Y",
        help="Replay a click at X,Y before output (repeatable, applied in order)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log snapshot and navigation details to stderr",
    )

    return parser.parse_args(args)


def parse_size(size_str: str) -> tuple[int, int]:
    """
    Parse size string like '400:300' into (width, height).
    """
    parts = size_str.split(":")
    if len(parts) != 2:
        raise ValueError(
            f"Invalid size format: {size_str}. Use WIDTH:HEIGHT (e.g., 400:300)"
        )

    try:
        width = int(parts[0])
        height = int(parts[1])
    except ValueError as e:
        raise ValueError(
            f"Invalid size format: {size_str}. Both WIDTH and HEIGHT must be integers"
        ) from e

    if width < 1:
        raise ValueError(f"Width must be >= 1, got {width}")
    if height < 1:
        raise ValueError(f"Height must be >= 1, got {height}")

    return width, height


def parse_point(point_str: str) -> tuple[float, float]:
    """Parse a click point like '250,45'."""
    parts = point_str.split(",")
    if len(parts) != 2:
        raise ValueError(f"Invalid click point: {point_str}. Use X,Y (e.g., 250,45)")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError as e:
        raise ValueError(
            f"Invalid click point: {point_str}. X and Y must be numbers"
        ) from e


def read_input(filepath: str | None) -> tuple[str, str | None, bool]:
    """
    Read from file or stdin, return (content, filename, is_directory).

    For directories, content will be empty string and is_directory will be True.
    """
    if filepath:
        if os.path.isdir(filepath):
            return "", filepath, True
        with open(filepath, encoding="utf-8") as f:
            return f.read(), filepath, False

    return sys.stdin.read(), None, False


def get_strategy(
    content: str,
    filename: str | None,
    force_type: str | None,
) -> SourceStrategy:
    """Get source strategy via override, detection, or fallback to html."""
    if force_type:
        strategy = registry.get_by_name(force_type)
        if strategy:
            return strategy
        strategy = registry.get_by_extension(force_type)
        if strategy:
            return strategy
        raise ValueError(f"Unknown source type: {force_type}")

    strategy = registry.detect(content, filename)
    if strategy:
        return strategy

    fallback = registry.get_by_name("html")
    if fallback:
        return fallback

    raise RuntimeError("No source strategy available")


def load_source(
    content: str,
    filename: str | None,
    is_directory: bool,
    force_type: str | None = None,
) -> tuple[Element, SourceStrategy]:
    """Turn the input into a live element tree plus the strategy that built it."""
    if is_directory:
        assert filename is not None  # Directories always come from file path, not stdin
        folder = FolderStrategy()
        return folder.parse_path(filename), folder

    strategy = get_strategy(content, filename, force_type)
    return strategy.parse(content), strategy


def export_svg(
    root: Element,
    strategy: SourceStrategy,
    path: str,
    width: int,
    height: int,
    clicks: list[tuple[float, float]],
    config: Config,
) -> NavigationController:
    """Draw headlessly, replay clicks, and write the final frame as SVG."""
    surface = SvgSurface(width, height, background=config.surface.background)
    controller = draw_tree(surface, root, config, strategy.actions, interactive=False)
    for x, y in clicks:
        controller.handle_click(x, y)
    surface.save(path)
    logger.info("Wrote %s (%d elements)", path, surface.element_count)
    return controller


def run_window(
    root: Element,
    strategy: SourceStrategy,
    title: str,
    width: int,
    height: int,
    clicks: list[tuple[float, float]],
    config: Config,
) -> None:
    """Open a tkinter window with a close button above the interactive canvas."""
    try:
        import tkinter as tk
    except ImportError as e:
        raise WindowUnavailableError(f"tkinter is not available: {e}") from e

    from .surfaces.tk import TkSurface

    try:
        window = tk.Tk()
    except tk.TclError as e:
        raise WindowUnavailableError(f"Cannot open a window: {e}") from e
    window.title(title)
    tk.Button(window, text="close", command=window.destroy).pack(anchor="e")
    canvas = tk.Canvas(window, width=width, height=height, highlightthickness=1)
    canvas.pack()

    surface = TkSurface(canvas, background=config.surface.background)
    controller = draw_tree(surface, root, config, strategy.actions)
    for x, y in clicks:
        controller.handle_click(x, y)

    window.mainloop()


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = get_config()

    try:
        if parsed.size:
            width, height = parse_size(parsed.size)
        else:
            width, height = cfg.surface.width, cfg.surface.height
        clicks = [parse_point(p) for p in parsed.click]
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        content, filename, is_directory = read_input(parsed.file)
    except FileNotFoundError:
        print(f"Error: File not found: {parsed.file}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    if not content and not is_directory:
        print("Error: Empty input", file=sys.stderr)
        return 1

    try:
        root, strategy = load_source(content, filename, is_directory, parsed.format_type)
    except (ValueError, OSError) as e:
        print(f"Error parsing input: {e}", file=sys.stderr)
        return 1

    try:
        if parsed.svg:
            export_svg(root, strategy, parsed.svg, width, height, clicks, cfg)
        else:
            run_window(root, strategy, filename or "treecanvas", width, height, clicks, cfg)
    except WindowUnavailableError as e:
        print(f"Error: {e} (use --svg FILE to export instead)", file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
