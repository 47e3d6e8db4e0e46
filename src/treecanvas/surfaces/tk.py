"""
tkinter surface.

Wraps a tk.Canvas. The canvas <Button-1> binding is made once, here; the
navigation controller only swaps the handler it dispatches to.
"""

from __future__ import annotations

import tkinter as tk
from collections.abc import Sequence

from .base import Surface


class TkSurface(Surface):
    """Surface backed by a tkinter Canvas."""

    def __init__(self, canvas: tk.Canvas, background: str = "#fff"):
        super().__init__(int(canvas["width"]), int(canvas["height"]))
        self.canvas = canvas
        self.background = background
        canvas.configure(background=background)
        canvas.bind("<Button-1>", self._on_button)

    @property
    def interactive(self) -> bool:
        return True

    def _on_button(self, event: tk.Event) -> None:
        self.dispatch_click(event.x, event.y)

    def clear(self, x: float, y: float, width: float, height: float) -> None:
        if x <= 0 and y <= 0 and width >= self.width and height >= self.height:
            self.canvas.delete("all")
            return
        self.canvas.create_rectangle(
            x, y, x + width, y + height, fill=self.background, outline=""
        )

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.canvas.create_line(x1, y1, x2, y2, fill=self.stroke_color)

    def fill_circle(self, x: float, y: float, radius: float) -> None:
        self.canvas.create_oval(
            x - radius, y - radius, x + radius, y + radius,
            fill=self.fill_color, outline="",
        )

    def fill_text(self, text: str, x: float, y: float) -> None:
        self.canvas.create_text(x, y, text=text, fill=self.fill_color, anchor="sw")

    def fill_polygon(self, points: Sequence[tuple[float, float]]) -> None:
        flat = [coord for point in points for coord in point]
        self.canvas.create_polygon(*flat, fill=self.fill_color, outline="")
