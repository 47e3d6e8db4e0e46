"""
SVG surface.

Serialises primitives as SVG elements, in paint order, so later shapes sit on
top of earlier ones (node discs over edges). Static output: no pointer input.
"""

from __future__ import annotations

import html
from collections.abc import Sequence
from pathlib import Path

from .base import Surface


def _num(value: float) -> str:
    # 200.0 -> "200", 62.5 -> "62.5"
    return f"{value:.2f}".rstrip("0").rstrip(".")


class SvgSurface(Surface):
    """Surface that builds a standalone SVG document."""

    def __init__(self, width: float = 400, height: float = 300, background: str = "#fff"):
        super().__init__(width, height)
        self.background = background
        self._elements: list[str] = []

    def clear(self, x: float, y: float, width: float, height: float) -> None:
        if x <= 0 and y <= 0 and width >= self.width and height >= self.height:
            self._elements.clear()
            return
        self._elements.append(
            f'<rect x="{_num(x)}" y="{_num(y)}" width="{_num(width)}" '
            f'height="{_num(height)}" fill="{html.escape(self.background)}" />'
        )

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._elements.append(
            f'<line x1="{_num(x1)}" y1="{_num(y1)}" x2="{_num(x2)}" y2="{_num(y2)}" '
            f'stroke="{html.escape(self.stroke_color)}" stroke-width="1" />'
        )

    def fill_circle(self, x: float, y: float, radius: float) -> None:
        self._elements.append(
            f'<circle cx="{_num(x)}" cy="{_num(y)}" r="{_num(radius)}" '
            f'fill="{html.escape(self.fill_color)}" />'
        )

    def fill_text(self, text: str, x: float, y: float) -> None:
        self._elements.append(
            f'<text x="{_num(x)}" y="{_num(y)}" fill="{html.escape(self.fill_color)}" '
            f'font-family="sans-serif" font-size="10">{html.escape(text)}</text>'
        )

    def fill_polygon(self, points: Sequence[tuple[float, float]]) -> None:
        coords = " ".join(f"{_num(px)},{_num(py)}" for px, py in points)
        self._elements.append(
            f'<polygon points="{coords}" fill="{html.escape(self.fill_color)}" />'
        )

    @property
    def element_count(self) -> int:
        return len(self._elements)

    def to_svg(self) -> str:
        w, h = _num(self.width), _num(self.height)
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" '
            f'viewBox="0 0 {w} {h}">\n'
            f'<rect width="100%" height="100%" fill="{html.escape(self.background)}" />\n'
            + "".join(element + "\n" for element in self._elements)
            + "</svg>\n"
        )

    def save(self, path: str | Path) -> Path:
        out = Path(path)
        out.write_text(self.to_svg(), encoding="utf-8")
        return out
