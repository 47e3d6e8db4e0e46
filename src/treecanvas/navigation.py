"""
Navigation: drill-down / drill-back over snapshots.

One NavigationController per surface. It owns the snapshot on display and a
history stack of the snapshots shown before it:
- a click in the back hot-zone (with history) pops and restores the previous
  snapshot object as-is
- any other click re-roots the tree at the clicked node, pushing the current
  snapshot onto the stack
Every transition is a full synchronous repaint.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .config import Config, get_config
from .dom import LayoutNode, Snapshot, SourceNode
from .hittest import find_node_at
from .render import draw_back_arrow, render, row_height_for
from .snapshot import TagAction, build_snapshot
from .surfaces.base import Surface

logger = logging.getLogger(__name__)


class NavigationController:
    """Holds the displayed snapshot and its history for one surface."""

    def __init__(
        self,
        surface: Surface,
        snapshot: Snapshot,
        config: Config | None = None,
        actions: Mapping[str, TagAction] | None = None,
    ):
        if surface is None:
            raise ValueError("A drawing surface is required")
        if snapshot is None:
            raise ValueError("An initial snapshot is required")
        self.surface = surface
        self.config = config or get_config()
        self._actions = actions
        self._current = snapshot
        self._history: list[Snapshot] = []
        self.row_height = row_height_for(snapshot, surface.height, self.config)

    @property
    def current(self) -> Snapshot:
        return self._current

    @property
    def history(self) -> tuple[Snapshot, ...]:
        """Previously displayed snapshots, oldest first."""
        return tuple(self._history)

    @property
    def can_go_back(self) -> bool:
        return bool(self._history)

    def in_back_zone(self, x: float, y: float) -> bool:
        zone = self.config.navigation.back_zone
        return x < zone and y < zone

    def handle_click(self, x: float, y: float) -> Snapshot:
        """Process one pointer click and repaint. Returns the snapshot now displayed."""
        if self.in_back_zone(x, y) and self._history:
            return self.go_back()
        node = find_node_at(self._current, x, y, self.row_height)
        return self.drill_into(node)

    def go_back(self) -> Snapshot:
        if not self._history:
            raise IndexError("No previous snapshot to go back to")
        self._current = self._history.pop()
        logger.debug("Back to %s (history depth %d)", self._current.tag, len(self._history))
        self.redraw()
        return self._current

    def drill_into(self, node: LayoutNode) -> Snapshot:
        """Re-root the display at `node`, laid out across the full surface width."""
        snapshot = build_snapshot(node, 0, self.surface.width, self._actions)
        self._history.append(self._current)
        self._current = snapshot
        logger.debug(
            "Drilled into %s at depth %d (history depth %d)",
            node.tag, node.depth, len(self._history),
        )
        self.redraw()
        return snapshot

    def redraw(self) -> None:
        surface = self.surface
        surface.clear_all()
        if self._history:
            draw_back_arrow(surface, self.config)
        self.row_height = row_height_for(self._current, surface.height, self.config)
        render(surface, self._current, self.row_height, self.config)


def attach_interactivity(
    surface: Surface,
    initial_snapshot: Snapshot,
    config: Config | None = None,
    actions: Mapping[str, TagAction] | None = None,
) -> NavigationController:
    """
    Start handling clicks on `surface` for an already painted snapshot.

    The surface has a single click handler slot; attaching again replaces the
    previous controller rather than stacking a second one.
    """
    controller = NavigationController(surface, initial_snapshot, config, actions)
    surface.set_click_handler(controller.handle_click)
    return controller


def draw_tree(
    surface: Surface,
    source: SourceNode,
    config: Config | None = None,
    actions: Mapping[str, TagAction] | None = None,
    interactive: bool = True,
) -> NavigationController:
    """
    Snapshot `source`, paint it across the whole surface and wire up clicks.

    Returns the controller so callers can inspect or drive navigation.
    """
    if surface is None:
        raise ValueError("A drawing surface is required")
    if source is None:
        raise ValueError("A source root is required")
    if surface.width <= 0 or surface.height <= 0:
        raise ValueError(
            f"Surface size must be positive, got {surface.width}x{surface.height}"
        )

    cfg = config or get_config()
    snapshot = build_snapshot(source, 0, surface.width, actions)
    logger.info(
        "Drawing %d nodes (max depth %d) on %sx%s surface",
        snapshot.node_count(), snapshot.max_depth, surface.width, surface.height,
    )

    if interactive:
        controller = attach_interactivity(surface, snapshot, cfg, actions)
    else:
        controller = NavigationController(surface, snapshot, cfg, actions)
    controller.redraw()
    return controller
