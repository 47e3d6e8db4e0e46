"""
Tree snapshot builder.

Walks any SourceNode tree (a live element tree or a previously built snapshot)
and produces an immutable Snapshot:
- depth assigned from 0 at the root
- the horizontal interval split into equal slices among children, in order
- ids and a handful of interesting tags indexed on the snapshot root
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .dom import Interval, LayoutNode, Snapshot, SourceNode

logger = logging.getLogger(__name__)


class InvalidSourceError(ValueError):
    """A source node's declared child count disagrees with its children."""


@dataclass(frozen=True)
class RecordRoot:
    """Store the node in a single-valued slot on the snapshot (e.g. body)."""
    slot: str

    def apply(self, snapshot: Snapshot, node: LayoutNode) -> None:
        setattr(snapshot, self.slot, node)


@dataclass(frozen=True)
class AppendTo:
    """Append the node to a list on the snapshot, optionally only if an attribute is set."""
    collection: str
    guard: str | None = None

    def apply(self, snapshot: Snapshot, node: LayoutNode) -> None:
        if self.guard is not None and not node.attributes.get(self.guard):
            return
        getattr(snapshot, self.collection).append(node)


TagAction = RecordRoot | AppendTo

# Mirrors the live collections a browser document keeps (document.links etc.)
DOCUMENT_TAG_ACTIONS: dict[str, TagAction] = {
    "HTML": RecordRoot("document_element"),
    "HEAD": RecordRoot("head"),
    "BODY": RecordRoot("body"),
    "FORM": AppendTo("forms"),
    "SCRIPT": AppendTo("scripts"),
    "A": AppendTo("links", guard="href"),
    "AREA": AppendTo("links", guard="href"),
    "IMG": AppendTo("images"),
}


def checked_children(source: SourceNode) -> Sequence[SourceNode]:
    """Return the source's children, bounded by and consistent with child_count."""
    declared = source.child_count
    children = source.children
    if len(children) != declared:
        raise InvalidSourceError(
            f"{source.tag!r} declares {declared} children but has {len(children)}"
        )
    return children[:declared]


class _Builder:
    def __init__(self, actions: Mapping[str, TagAction]):
        self._actions = actions
        self._snapshot: Snapshot | None = None

    def build(self, source: SourceNode, interval: Interval) -> Snapshot:
        root = Snapshot(
            tag=source.tag,
            attributes=source.snapshot_attributes(),
            depth=0,
            interval=interval,
            id=source.id or None,
        )
        self._snapshot = root
        self._visit(source, root)
        return root

    def _visit(self, source: SourceNode, root: LayoutNode) -> None:
        """Lay out the whole tree below `root` in document order."""
        snapshot = self._snapshot
        assert snapshot is not None

        # Explicit stack: nesting depth is not bounded by the recursion limit
        pending: list[tuple[SourceNode, LayoutNode]] = [(source, root)]
        while pending:
            source, node = pending.pop()

            if node.depth > snapshot.max_depth:
                snapshot.max_depth = node.depth

            if node.id:
                snapshot.ids[node.id] = node

            action = self._actions.get(node.tag)
            if action is not None:
                action.apply(snapshot, node)

            sources = checked_children(source)
            slices = node.interval.split(len(sources))
            children = []
            for child_source, child_interval in zip(sources, slices, strict=True):
                children.append(LayoutNode(
                    tag=child_source.tag,
                    attributes=child_source.snapshot_attributes(),
                    depth=node.depth + 1,
                    interval=child_interval,
                    id=child_source.id or None,
                    parent=node,
                ))
            node.children = tuple(children)
            pending.extend(reversed(list(zip(sources, children))))


def build_snapshot(
    source: SourceNode,
    start: float,
    end: float,
    actions: Mapping[str, TagAction] | None = None,
) -> Snapshot:
    """
    Build a snapshot of `source` laid out within [start, end).

    Args:
        source: Root of the tree to snapshot. May be a LayoutNode, which
            re-roots an existing snapshot at that node.
        start: Left edge of the horizontal interval
        end: Right edge of the horizontal interval
        actions: Tag -> TagAction table (defaults to DOCUMENT_TAG_ACTIONS)

    Returns:
        The root of the new snapshot
    """
    if source is None:
        raise ValueError("A source root is required to build a snapshot")
    if end < start:
        raise ValueError(f"Interval end must be >= start, got [{start}, {end})")

    table = DOCUMENT_TAG_ACTIONS if actions is None else actions
    snapshot = _Builder(table).build(source, Interval(start, end))
    logger.debug(
        "Built snapshot rooted at %s: max depth %d, %d ids",
        snapshot.tag, snapshot.max_depth, len(snapshot.ids),
    )
    return snapshot
