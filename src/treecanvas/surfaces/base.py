"""
Base drawing surface interface.

A surface is whatever the renderer paints onto: it exposes a handful of
canvas-like primitives, a current stroke/fill color, its size, and a single
click handler slot that input events are dispatched to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

ClickHandler = Callable[[float, float], object]


class Surface(ABC):
    """Base class for drawing surfaces."""

    def __init__(self, width: float, height: float):
        self._width = width
        self._height = height
        self.stroke_color = "#000"
        self.fill_color = "#000"
        self._click_handler: ClickHandler | None = None

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @abstractmethod
    def clear(self, x: float, y: float, width: float, height: float) -> None:
        """Erase a rectangular region."""
        ...

    @abstractmethod
    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        """Draw a segment in the current stroke color."""
        ...

    @abstractmethod
    def fill_circle(self, x: float, y: float, radius: float) -> None:
        """Draw a filled disc in the current fill color."""
        ...

    @abstractmethod
    def fill_text(self, text: str, x: float, y: float) -> None:
        """Draw text with its baseline starting at (x, y) in the current fill color."""
        ...

    @abstractmethod
    def fill_polygon(self, points: Sequence[tuple[float, float]]) -> None:
        """Draw a filled closed polygon in the current fill color."""
        ...

    def clear_all(self) -> None:
        self.clear(0, 0, self.width, self.height)

    @property
    def interactive(self) -> bool:
        """Whether this surface delivers pointer clicks."""
        return False

    @property
    def has_click_handler(self) -> bool:
        return self._click_handler is not None

    def set_click_handler(self, handler: ClickHandler) -> None:
        """
        Install the surface's click handler.

        There is one slot per surface: installing again replaces the
        previous handler instead of adding a second one.
        """
        if not self.interactive:
            raise NotImplementedError(
                f"{type(self).__name__} does not deliver pointer events"
            )
        self._click_handler = handler

    def dispatch_click(self, x: float, y: float) -> None:
        """Deliver a surface-local click to the installed handler, if any."""
        if self._click_handler is not None:
            self._click_handler(x, y)
