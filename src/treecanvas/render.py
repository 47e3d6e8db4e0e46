"""
Renderer: paints a snapshot onto a surface.

Each node sits at (midpoint of its interval, depth * row_height + offset).
Edges to children are stroked before descending, and a node's disc is filled
only after its whole subtree, so discs always land on top of edges.
"""

from __future__ import annotations

from .config import Config, get_config
from .dom import LayoutNode, Snapshot
from .surfaces.base import Surface


def row_height_for(snapshot: Snapshot, surface_height: float, config: Config | None = None) -> float:
    """Height of one depth band: surface height shared by max_depth + 1 rows."""
    cfg = config or get_config()
    return max(cfg.layout.min_row_height, surface_height / (snapshot.max_depth + 1))


def node_position(node: LayoutNode, row_height: float, config: Config | None = None) -> tuple[float, float]:
    cfg = config or get_config()
    return node.interval.midpoint, node.depth * row_height + cfg.layout.vertical_offset


def render(
    surface: Surface,
    snapshot: LayoutNode,
    row_height: float | None = None,
    config: Config | None = None,
) -> None:
    """
    Paint `snapshot` onto `surface`.

    Args:
        surface: Drawing surface
        snapshot: Root of the tree to draw
        row_height: Band height per depth; derived from the surface height
            and the snapshot's max depth when omitted
        config: Drawing config (defaults to the global config)
    """
    cfg = config or get_config()
    if row_height is None:
        if not isinstance(snapshot, Snapshot):
            raise ValueError("row_height is required when rendering a bare LayoutNode")
        row_height = row_height_for(snapshot, surface.height, cfg)
    surface.stroke_color = cfg.style.edge_color
    _draw_node(surface, snapshot, row_height, cfg)


def _draw_node(surface: Surface, root: LayoutNode, row_height: float, cfg: Config) -> None:
    # One (node, remaining children) frame per open level, walked without recursion
    stack = [(root, iter(root.children))]
    while stack:
        node, remaining = stack[-1]
        x, y = node_position(node, row_height, cfg)

        child = next(remaining, None)
        if child is not None:
            child_x, child_y = node_position(child, row_height, cfg)
            surface.stroke_line(x, y, child_x, child_y)
            stack.append((child, iter(child.children)))
            continue

        stack.pop()
        surface.fill_color = cfg.style.color_for(node.tag)
        surface.fill_circle(x, y, cfg.layout.node_radius)

        # Labelling every node is unreadable; only the landmark tags get one
        if node.tag in cfg.style.labeled_tags:
            surface.fill_color = cfg.style.label_color
            surface.fill_text(node.tag, x + cfg.style.label_dx, y + cfg.style.label_dy)


def draw_back_arrow(surface: Surface, config: Config | None = None) -> None:
    """Small triangle near the origin telling the user they can go back."""
    cfg = config or get_config()
    surface.fill_color = cfg.navigation.arrow_color
    surface.fill_polygon(cfg.navigation.arrow_points)
