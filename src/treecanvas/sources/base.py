"""
Live element trees and the source strategy registry.

Each source strategy turns some input (an HTML document, a JSON document,
a directory) into a tree of mutable Elements. Elements satisfy the SourceNode
capability set, so any of them can be handed straight to build_snapshot.
The registry manages format detection and selection.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from ..snapshot import TagAction


@dataclass(eq=False)
class Element:
    """A node of a live (mutable) source tree."""
    tag: str
    attrs: list[tuple[str, str]] = field(default_factory=list)
    children: list[Element] = field(default_factory=list)

    @property
    def child_count(self) -> int:
        return len(self.children)

    @property
    def id(self) -> str | None:
        return self.get_attribute("id") or None

    def get_attribute(self, name: str) -> str | None:
        for key, value in self.attrs:
            if key == name:
                return value
        return None

    def set_attribute(self, name: str, value: str) -> None:
        for i, (key, _) in enumerate(self.attrs):
            if key == name:
                self.attrs[i] = (name, value)
                return
        self.attrs.append((name, value))

    def snapshot_attributes(self) -> Mapping[str, str]:
        """Fresh copy: the live tree may keep changing after a snapshot."""
        copied: dict[str, str] = {}
        for name, value in self.attrs:
            copied[name] = value
        return copied

    def add_child(self, child: Element) -> Element:
        """Add a child element and return it for chaining."""
        self.children.append(child)
        return child

    def depth_first(self) -> Iterator[Element]:
        stack: list[Element] = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))


class SourceStrategy(ABC):
    """Base class for source tree providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name."""
        ...

    @property
    @abstractmethod
    def extensions(self) -> list[str]:
        """File extensions this format handles (e.g., ['.html', '.htm'])."""
        ...

    def detect(self, content: str) -> bool:
        """
        Magic detection: returns True if content looks like this format.
        Default implementation returns False (rely on extension only).
        """
        return False

    @abstractmethod
    def parse(self, content: str) -> Element:
        """
        Parse content into a tree of Elements.
        Returns the root element of the tree.
        """
        ...

    @property
    def actions(self) -> Mapping[str, TagAction]:
        """Tag actions to index while snapshotting trees of this format."""
        return {}


class SourceRegistry:
    """Source strategies looked up by name, file extension, or content sniffing."""

    def __init__(self):
        self._strategies: dict[str, SourceStrategy] = {}

    def register(self, strategy: SourceStrategy) -> None:
        self._strategies[strategy.name] = strategy

    def get_by_name(self, name: str) -> SourceStrategy | None:
        return self._strategies.get(name)

    def get_by_extension(self, ext: str) -> SourceStrategy | None:
        """Earliest registered strategy claiming `ext` (leading dot optional)."""
        ext = "." + ext.lower().lstrip(".")
        for strategy in self._strategies.values():
            if ext in strategy.extensions:
                return strategy
        return None

    def detect(self, content: str, filename: str | None = None) -> SourceStrategy | None:
        """Pick a strategy by the filename's extension, else by sniffing content."""
        if filename and "." in filename:
            by_extension = self.get_by_extension(filename.rsplit(".", 1)[-1])
            if by_extension is not None:
                return by_extension
        for strategy in self._strategies.values():
            if strategy.detect(content):
                return strategy
        return None


# Global registry instance
registry = SourceRegistry()
