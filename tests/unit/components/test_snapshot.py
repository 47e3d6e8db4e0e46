"""
Unit tests for the snapshot builder: interval layout, depth, indices, re-rooting.
"""

from dataclasses import dataclass, field

import pytest

from treecanvas.dom import Interval, LayoutNode, Snapshot, same_shape
from treecanvas.snapshot import (
    DOCUMENT_TAG_ACTIONS,
    AppendTo,
    InvalidSourceError,
    RecordRoot,
    build_snapshot,
)
from treecanvas.sources.base import Element
from treecanvas.sources.html import parse_html


def three_level_tree() -> Element:
    """Root with 2 children, each with 2 children."""
    return Element("ROOT", children=[
        Element("A", children=[Element("A1"), Element("A2")]),
        Element("B", children=[Element("B1"), Element("B2")]),
    ])


def nested_chain(levels: int) -> Element:
    """A root with a single line of `levels` nested DIVs below it."""
    root = Element("ROOT")
    node = root
    for _ in range(levels):
        node = node.add_child(Element("DIV"))
    return root


@dataclass
class LyingNode:
    """Source node whose declared child count disagrees with its children."""
    tag: str = "LIAR"
    children: list = field(default_factory=list)
    child_count: int = 2
    id: str | None = None

    def snapshot_attributes(self):
        return {}


class TestIntervalLayout:
    def test_three_level_scenario(self):
        snap = build_snapshot(three_level_tree(), 0, 400)
        a, b = snap.children

        assert snap.interval == Interval(0, 400)
        assert a.interval == Interval(0, 200)
        assert b.interval == Interval(200, 400)
        assert [c.interval for c in a.children] == [Interval(0, 100), Interval(100, 200)]
        assert [c.interval for c in b.children] == [Interval(200, 300), Interval(300, 400)]

    def test_children_exactly_cover_parent(self):
        tree = Element("R", children=[
            Element("X", children=[Element("Y") for _ in range(3)]),
            Element("Z"),
            Element("W", children=[Element("V") for _ in range(7)]),
        ])
        snap = build_snapshot(tree, 13, 517)

        for node in snap.depth_first():
            for child in node.children:
                assert node.interval.covers(child.interval)
            if node.children:
                assert node.children[0].start == node.start
                assert node.children[-1].end == pytest.approx(node.end)
                for left, right in zip(node.children, node.children[1:]):
                    assert left.end == pytest.approx(right.start)

    def test_leaf_has_no_subdivision(self):
        snap = build_snapshot(Element("LEAF"), 0, 400)
        assert snap.children == ()
        assert snap.max_depth == 0

    def test_zero_width_interval(self):
        snap = build_snapshot(three_level_tree(), 0, 0)
        assert all(node.interval.width == 0 for node in snap.depth_first())

    def test_rejects_reversed_interval(self):
        with pytest.raises(ValueError, match="end must be >= start"):
            build_snapshot(Element("R"), 10, 0)


class TestDepth:
    def test_depth_follows_parent(self):
        snap = build_snapshot(three_level_tree(), 0, 400)
        assert snap.depth == 0
        for node in snap.depth_first():
            for child in node.children:
                assert child.depth == node.depth + 1
                assert child.parent is node

    def test_root_has_no_parent(self):
        snap = build_snapshot(three_level_tree(), 0, 400)
        assert snap.parent is None

    def test_max_depth_is_true_maximum(self):
        tree = Element("R", children=[
            Element("A"),
            Element("B", children=[Element("C", children=[Element("D")])]),
        ])
        snap = build_snapshot(tree, 0, 100)
        assert snap.max_depth == 3
        assert snap.max_depth == max(n.depth for n in snap.depth_first())

    def test_deep_nesting_beyond_recursion_limit(self):
        snap = build_snapshot(nested_chain(1500), 0, 400)
        nodes = list(snap.depth_first())
        assert snap.max_depth == 1500
        assert len(nodes) == 1501
        assert [n.depth for n in nodes] == list(range(1501))
        assert nodes[-1].interval == Interval(0, 400)
        assert nodes[-1].parent is nodes[-2]
        assert same_shape(snap, build_snapshot(snap, 0, 400))

    def test_returns_snapshot_root(self):
        snap = build_snapshot(three_level_tree(), 0, 400)
        assert isinstance(snap, Snapshot)
        assert all(type(c) is LayoutNode for c in snap.children)


class TestSourceValidation:
    def test_inconsistent_child_count_fails(self):
        with pytest.raises(InvalidSourceError, match="declares 2 children but has 0"):
            build_snapshot(LyingNode(), 0, 100)

    def test_nested_inconsistency_fails(self):
        tree = Element("R")
        tree.children.append(LyingNode(children=[Element("X")], child_count=3))
        with pytest.raises(InvalidSourceError):
            build_snapshot(tree, 0, 100)

    def test_invalid_source_is_a_value_error(self):
        assert issubclass(InvalidSourceError, ValueError)

    def test_missing_source_fails(self):
        with pytest.raises(ValueError, match="source root is required"):
            build_snapshot(None, 0, 100)


class TestIndependence:
    def test_live_attributes_are_copied(self):
        link = Element("A", attrs=[("href", "/old")])
        snap = build_snapshot(Element("BODY", children=[link]), 0, 100)

        link.set_attribute("href", "/new")
        link.add_child(Element("SPAN"))

        assert snap.children[0].attributes == {"href": "/old"}
        assert snap.children[0].children == ()

    def test_live_structure_changes_do_not_leak(self):
        tree = three_level_tree()
        snap = build_snapshot(tree, 0, 400)
        tree.children.append(Element("C"))
        assert len(snap.children) == 2

    def test_rerooting_shares_attribute_mappings(self):
        snap = build_snapshot(Element("R", children=[Element("A", attrs=[("k", "v")])]), 0, 100)
        again = build_snapshot(snap, 0, 100)
        assert again.children[0].attributes is snap.children[0].attributes


class TestRerooting:
    def test_rebuild_of_snapshot_is_isomorphic(self):
        first = build_snapshot(three_level_tree(), 0, 400)
        second = build_snapshot(first, 0, 400)
        assert second is not first
        assert same_shape(first, second)
        assert [n.interval for n in first.depth_first()] == [n.interval for n in second.depth_first()]

    def test_reroot_at_subtree_rescales_to_full_width(self):
        snap = build_snapshot(three_level_tree(), 0, 400)
        b = snap.children[1]
        sub = build_snapshot(b, 0, 400)

        assert sub.tag == "B"
        assert sub.depth == 0
        assert sub.parent is None
        assert sub.max_depth == 1
        assert [c.interval for c in sub.children] == [Interval(0, 200), Interval(200, 400)]
        # the snapshot it was taken from is untouched
        assert b.depth == 1
        assert b.interval == Interval(200, 400)

    def test_html_document_roundtrips_through_rerooting(self):
        doc = parse_html("<html><head></head><body><div><p></p></div></body></html>")
        first = build_snapshot(doc, 0, 400)
        assert same_shape(first, build_snapshot(first, 0, 400))


class TestDocumentIndices:
    DOC = (
        '<!doctype html><html><head><script src="a.js"></script></head>'
        '<body id="main"><a href="/x">x</a><a name="anchor">y</a>'
        '<img src="p.png"><form><area href="/m"></form></body></html>'
    )

    @pytest.fixture
    def snap(self):
        return build_snapshot(parse_html(self.DOC), 0, 400)

    def test_root_slots(self, snap):
        assert snap.document_element.tag == "HTML"
        assert snap.head.tag == "HEAD"
        assert snap.body.tag == "BODY"

    def test_collections(self, snap):
        assert [n.tag for n in snap.scripts] == ["SCRIPT"]
        assert [n.tag for n in snap.images] == ["IMG"]
        assert [n.tag for n in snap.forms] == ["FORM"]

    def test_links_need_href(self, snap):
        assert [n.tag for n in snap.links] == ["A", "AREA"]
        assert all(n.attributes.get("href") for n in snap.links)

    def test_id_index(self, snap):
        assert snap.get_element_by_id("main") is snap.body
        assert snap.body.id == "main"

    def test_indices_are_per_snapshot(self, snap):
        sub = build_snapshot(snap.head, 0, 400)
        assert [n.tag for n in sub.scripts] == ["SCRIPT"]
        assert sub.head is sub
        assert sub.body is None
        assert sub.links == []
        assert snap.scripts[0] is not sub.scripts[0]

    def test_custom_action_table(self):
        actions = {"ITEM": AppendTo("links", guard="ref"), "TOP": RecordRoot("body")}
        tree = Element("TOP", children=[
            Element("ITEM", attrs=[("ref", "1")]),
            Element("ITEM"),
        ])
        snap = build_snapshot(tree, 0, 100, actions)
        assert snap.body is snap
        assert len(snap.links) == 1

    def test_empty_action_table_indexes_nothing(self):
        snap = build_snapshot(parse_html(self.DOC), 0, 400, actions={})
        assert snap.body is None
        assert snap.links == []
        # ids are always indexed
        assert "main" in snap.ids

    def test_default_table_covers_document_collections(self):
        assert set(DOCUMENT_TAG_ACTIONS) == {"HTML", "HEAD", "BODY", "FORM", "SCRIPT", "A", "AREA", "IMG"}
