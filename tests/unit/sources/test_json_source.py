"""
Unit tests for the JSON source strategy and the source registry.
"""

import json

import pytest

from treecanvas.snapshot import build_snapshot
from treecanvas.sources.base import Element, SourceRegistry, SourceStrategy, registry
from treecanvas.sources.html import HtmlStrategy
from treecanvas.sources.json import JSONStrategy, value_to_element


class TestJsonParsing:
    @pytest.fixture
    def strategy(self):
        return JSONStrategy()

    def test_object_members_keep_keys(self, strategy):
        root = strategy.parse('{"name": "x", "tags": ["a", "b"]}')
        assert root.tag == "OBJECT"
        assert [c.get_attribute("key") for c in root.children] == ["name", "tags"]

    def test_array_items_keyed_by_index(self, strategy):
        root = strategy.parse("[10, 20]")
        assert root.tag == "ARRAY"
        assert [c.get_attribute("key") for c in root.children] == ["0", "1"]
        assert [c.get_attribute("value") for c in root.children] == ["10", "20"]

    def test_scalar_tags(self):
        values = ["s", 1, 1.5, True, None]
        tags = [value_to_element(v).tag for v in values]
        assert tags == ["STRING", "NUMBER", "NUMBER", "BOOLEAN", "NULL"]

    def test_scalar_text_uses_json_spelling(self):
        assert value_to_element(True).get_attribute("value") == "true"
        assert value_to_element(None).get_attribute("value") == "null"
        assert value_to_element("plain").get_attribute("value") == "plain"

    def test_root_has_no_key(self, strategy):
        assert strategy.parse("{}").get_attribute("key") is None

    def test_invalid_json_raises_value_error(self, strategy):
        with pytest.raises(ValueError):
            strategy.parse("{nope")

    def test_deeply_nested_value_converts(self):
        value = []
        for _ in range(1500):
            value = [value]
        node = value_to_element(value)
        depth = 0
        while node.children:
            node = node.children[0]
            depth += 1
        assert depth == 1500
        assert node.get_attribute("key") == "0"

    def test_too_deep_to_decode_raises_value_error(self, strategy):
        text = "[" * 100_000 + "]" * 100_000
        with pytest.raises(ValueError, match="nested too deeply"):
            strategy.parse(text)
        assert not strategy.detect(text)

    def test_detect(self, strategy):
        assert strategy.detect('  {"a": [1, 2]}')
        assert strategy.detect("[]")
        assert not strategy.detect("<html></html>")
        assert not strategy.detect("{broken")
        assert not strategy.detect('"just a string"')

    def test_snapshot_layout(self, strategy):
        doc = {"a": [1, 2, 3], "b": {"c": None}}
        snap = build_snapshot(strategy.parse(json.dumps(doc)), 0, 300, strategy.actions)
        a, b = snap.children
        assert a.interval.end == 150
        assert [c.interval.width for c in a.children] == [50, 50, 50]
        assert snap.max_depth == 2


class _TreeStrategy(SourceStrategy):
    @property
    def name(self):
        return "tree"

    @property
    def extensions(self):
        return [".tree", ".html"]

    def parse(self, content):
        return Element("TREE")


class TestSourceRegistry:
    def test_register_and_lookup(self):
        reg = SourceRegistry()
        strategy = _TreeStrategy()
        reg.register(strategy)
        assert reg.get_by_name("tree") is strategy
        assert reg.get_by_extension("tree") is strategy
        assert reg.get_by_extension(".TREE") is strategy

    def test_first_registered_wins_extension(self):
        reg = SourceRegistry()
        html = HtmlStrategy()
        reg.register(html)
        reg.register(_TreeStrategy())
        assert reg.get_by_extension(".html") is html
        assert reg.get_by_extension(".tree").name == "tree"

    def test_reregistering_a_name_replaces_it(self):
        reg = SourceRegistry()
        reg.register(_TreeStrategy())
        second = _TreeStrategy()
        reg.register(second)
        assert reg.get_by_name("tree") is second
        assert reg.get_by_extension(".tree") is second

    def test_detect_by_extension_then_content(self):
        reg = SourceRegistry()
        reg.register(JSONStrategy())
        assert reg.detect("whatever", "data.json").name == "json"
        assert reg.detect("[1, 2]", None).name == "json"
        assert reg.detect("[1, 2]", "archive.tar.gz").name == "json"

        assert reg.detect("plain text", "notes.txt") is None

    def test_global_registry_has_builtin_sources(self):
        assert registry.get_by_name("html") is not None
        assert registry.get_by_name("json") is not None
        assert registry.get_by_extension(".htm").name == "html"
