"""
Hit testing: map a surface point back to a layout node.

A surface keeps no record of what was drawn where, so clicks are resolved by
walking down the snapshot. The node whose depth band contains y wins at once,
even if a child's interval also contains x. Otherwise the search follows the
single child whose interval strictly contains x, and stops at the current
node when there is none.
"""

from __future__ import annotations

from .dom import LayoutNode


def in_row_band(node: LayoutNode, y: float, row_height: float) -> bool:
    return node.depth * row_height <= y <= (node.depth + 1) * row_height


def find_node_at(root: LayoutNode, x: float, y: float, row_height: float) -> LayoutNode:
    """Return the most specific node at (x, y). Never returns None."""
    node = root
    while True:
        if in_row_band(node, y, row_height):
            return node

        # sibling intervals are disjoint, so at most one child qualifies
        for child in node.children:
            if child.interval.strictly_contains(x):
                node = child
                break
        else:
            return node
