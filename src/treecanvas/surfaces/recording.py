"""
Recording surface.

Keeps every primitive as a DrawOp instead of rasterising it. Useful headless
and in tests: the op list is the observable "pixel state". Clearing the whole
surface drops everything recorded so far.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .base import Surface


@dataclass(frozen=True)
class DrawOp:
    """One recorded primitive."""
    kind: str  # "line", "circle", "text", "polygon", "clear"
    color: str
    points: tuple[tuple[float, float], ...]
    radius: float = 0.0
    text: str = ""


class RecordingSurface(Surface):
    """In-memory surface that records drawing operations."""

    def __init__(self, width: float = 400, height: float = 300, interactive: bool = True):
        super().__init__(width, height)
        self._interactive = interactive
        self.ops: list[DrawOp] = []

    @property
    def interactive(self) -> bool:
        return self._interactive

    def clear(self, x: float, y: float, width: float, height: float) -> None:
        if x <= 0 and y <= 0 and width >= self.width and height >= self.height:
            self.ops.clear()
            return
        self.ops.append(DrawOp("clear", "", ((x, y), (x + width, y + height))))

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.ops.append(DrawOp("line", self.stroke_color, ((x1, y1), (x2, y2))))

    def fill_circle(self, x: float, y: float, radius: float) -> None:
        self.ops.append(DrawOp("circle", self.fill_color, ((x, y),), radius=radius))

    def fill_text(self, text: str, x: float, y: float) -> None:
        self.ops.append(DrawOp("text", self.fill_color, ((x, y),), text=text))

    def fill_polygon(self, points: Sequence[tuple[float, float]]) -> None:
        self.ops.append(DrawOp("polygon", self.fill_color, tuple(points)))

    def click(self, x: float, y: float) -> None:
        """Simulate a pointer click at a surface-local point."""
        self.dispatch_click(x, y)

    def of_kind(self, kind: str) -> list[DrawOp]:
        return [op for op in self.ops if op.kind == kind]
