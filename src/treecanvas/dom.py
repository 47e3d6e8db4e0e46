"""
DOM - layout tree model for treecanvas

Two kinds of node flow through the system:

- Source nodes: anything exposing the SourceNode capability set (tag, ordered
  children, declared child count, attributes, optional id). Live element trees
  produced by the source strategies are one variant, already-built layout
  nodes are the other, which is what makes re-rooting possible.
- Layout nodes: snapshot nodes carrying geometry (depth + horizontal interval).
  A Snapshot is the root layout node plus indices collected during the build.

Key invariant: a child's interval is an equal-width slice of its parent's
interval, taken in source order. Snapshots are never mutated after build.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from itertools import zip_longest
from typing import Protocol, runtime_checkable


@runtime_checkable
class SourceNode(Protocol):
    """Capability set the snapshot builder walks."""

    @property
    def tag(self) -> str: ...

    @property
    def children(self) -> Sequence[SourceNode]: ...

    @property
    def child_count(self) -> int: ...

    @property
    def id(self) -> str | None: ...

    def snapshot_attributes(self) -> Mapping[str, str]:
        """Attributes as they should appear on a new layout node."""
        ...


@dataclass(frozen=True)
class Interval:
    """Half-open horizontal range [start, end) on the surface x-axis."""
    start: float
    end: float

    @property
    def width(self) -> float:
        return self.end - self.start

    @property
    def midpoint(self) -> float:
        return self.start + (self.end - self.start) / 2

    def __contains__(self, x: float) -> bool:
        return self.start <= x < self.end

    def strictly_contains(self, x: float) -> bool:
        """Exclusive on both ends, used by hit-testing."""
        return self.start < x < self.end

    def covers(self, other: Interval) -> bool:
        return self.start <= other.start and other.end <= self.end

    def split(self, count: int) -> list[Interval]:
        """Equal-width slices in order. No slices for count == 0."""
        if count <= 0:
            return []
        width = (self.end - self.start) / count
        slices = [
            Interval(self.start + i * width, self.start + (i + 1) * width)
            for i in range(count)
        ]
        # pin the last edge so rounding never pokes outside the parent
        slices[-1] = Interval(slices[-1].start, self.end)
        return slices


@dataclass(eq=False)
class LayoutNode:
    """A node in a built snapshot."""
    tag: str
    attributes: Mapping[str, str]
    depth: int
    interval: Interval
    id: str | None = None
    parent: LayoutNode | None = field(default=None, repr=False)
    children: tuple[LayoutNode, ...] = field(default=(), repr=False)

    @property
    def child_count(self) -> int:
        return len(self.children)

    @property
    def start(self) -> float:
        return self.interval.start

    @property
    def end(self) -> float:
        return self.interval.end

    def snapshot_attributes(self) -> Mapping[str, str]:
        """Shared, not copied: layout nodes are never mutated after build."""
        return self.attributes

    def depth_first(self) -> Iterator[LayoutNode]:
        """Traverse tree depth-first, yielding self then children."""
        stack: list[LayoutNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def breadth_first(self) -> Iterator[LayoutNode]:
        """Traverse tree breadth-first."""
        queue: list[LayoutNode] = [self]
        while queue:
            node = queue.pop(0)
            yield node
            queue.extend(node.children)


@dataclass(eq=False)
class Snapshot(LayoutNode):
    """Root layout node plus the indices collected while building it."""
    max_depth: int = 0
    ids: dict[str, LayoutNode] = field(default_factory=dict, repr=False)
    links: list[LayoutNode] = field(default_factory=list, repr=False)
    images: list[LayoutNode] = field(default_factory=list, repr=False)
    scripts: list[LayoutNode] = field(default_factory=list, repr=False)
    forms: list[LayoutNode] = field(default_factory=list, repr=False)
    document_element: LayoutNode | None = field(default=None, repr=False)
    head: LayoutNode | None = field(default=None, repr=False)
    body: LayoutNode | None = field(default=None, repr=False)

    def get_element_by_id(self, node_id: str) -> LayoutNode | None:
        return self.ids.get(node_id)

    def node_count(self) -> int:
        return sum(1 for _ in self.depth_first())


def find_by_tag(root: LayoutNode, tag: str) -> list[LayoutNode]:
    """Collect nodes with a given tag in depth-first order."""
    return [node for node in root.depth_first() if node.tag == tag]


def same_shape(a: LayoutNode, b: LayoutNode) -> bool:
    """True if both trees have the same tags in the same child order."""
    for x, y in zip_longest(a.breadth_first(), b.breadth_first()):
        if x is None or y is None:
            return False
        if x.tag != y.tag or len(x.children) != len(y.children):
            return False
    return True
