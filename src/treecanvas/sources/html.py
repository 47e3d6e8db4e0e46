"""
HTML source strategy.

Parses an HTML document into a live element tree rooted at a #document node,
the shape a browser's document exposes through children/childElementCount:
elements only, text and comments dropped, tag names upper-cased.
"""

from __future__ import annotations

from collections.abc import Mapping
from html.parser import HTMLParser

from ..snapshot import DOCUMENT_TAG_ACTIONS, TagAction
from .base import Element, SourceStrategy, registry

DOCUMENT_TAG = "#document"

# Elements that never have content (no end tag, no children)
VOID_ELEMENTS = frozenset({
    "AREA", "BASE", "BR", "COL", "EMBED", "HR", "IMG", "INPUT",
    "LINK", "META", "PARAM", "SOURCE", "TRACK", "WBR",
})


class _TreeBuilder(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.document = Element(DOCUMENT_TAG)
        self._open: list[Element] = [self.document]

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        element = self._append(tag, attrs)
        if element.tag not in VOID_ELEMENTS:
            self._open.append(element)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._append(tag, attrs)

    def handle_endtag(self, tag: str) -> None:
        name = tag.upper()
        # Close up to the nearest matching open element; stray end tags are ignored
        for i in range(len(self._open) - 1, 0, -1):
            if self._open[i].tag == name:
                del self._open[i:]
                return

    def _append(self, tag: str, attrs: list[tuple[str, str | None]]) -> Element:
        element = Element(
            tag=tag.upper(),
            attrs=[(key, value if value is not None else "") for key, value in attrs],
        )
        return self._open[-1].add_child(element)


class HtmlStrategy(SourceStrategy):
    """HTML document handler."""

    @property
    def name(self) -> str:
        return "html"

    @property
    def extensions(self) -> list[str]:
        return [".html", ".htm", ".xhtml"]

    def detect(self, content: str) -> bool:
        head = content.lstrip()[:64].lower()
        return head.startswith("<!doctype html") or head.startswith("<html")

    def parse(self, content: str) -> Element:
        builder = _TreeBuilder()
        builder.feed(content)
        builder.close()
        return builder.document

    @property
    def actions(self) -> Mapping[str, TagAction]:
        return DOCUMENT_TAG_ACTIONS


def parse_html(content: str) -> Element:
    """Parse an HTML document into a live element tree."""
    return HtmlStrategy().parse(content)


registry.register(HtmlStrategy())
