"""
Folder source strategy.

Treats a directory as a tree: DIRECTORY elements branch, FILE elements are
leaves. Each element's id is its path relative to the root, so a snapshot's
id index doubles as a path lookup.
"""

from __future__ import annotations

from pathlib import Path

from .base import Element, SourceStrategy, registry


class FolderStrategy(SourceStrategy):
    """Directory/folder tree handler."""

    # Common patterns to skip by default (caches, build artifacts)
    DEFAULT_SKIP_PATTERNS = frozenset({
        "__pycache__",
        ".git",
        ".svn",
        ".hg",
        "node_modules",
        ".venv",
        "venv",
        ".tox",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        "__pypackages__",
        ".eggs",
        "*.egg-info",
        ".DS_Store",
    })

    def __init__(
        self,
        max_depth: int = 10,
        follow_symlinks: bool = False,
        skip_patterns: frozenset[str] | None = None,
    ):
        """
        Initialize folder strategy.

        Args:
            max_depth: Maximum directory depth to traverse
            follow_symlinks: Whether to follow symbolic links (risky - can loop)
            skip_patterns: Patterns to skip (defaults to common caches/artifacts)
        """
        self._max_depth = max_depth
        self._follow_symlinks = follow_symlinks
        self._skip_patterns = skip_patterns if skip_patterns is not None else self.DEFAULT_SKIP_PATTERNS

    @property
    def name(self) -> str:
        return "folder"

    @property
    def extensions(self) -> list[str]:
        return []  # Directories don't have extensions

    def parse(self, content: str) -> Element:
        """
        Not used for folders - use parse_path() instead.

        This method exists to satisfy the interface but shouldn't be called
        for folder content.
        """
        raise NotImplementedError(
            "FolderStrategy requires parse_path() instead of parse()"
        )

    def parse_path(self, path: str | Path) -> Element:
        """
        Parse a directory path into an element tree.

        Args:
            path: Path to directory

        Returns:
            Root element representing the directory
        """
        path_obj = Path(path)

        if not path_obj.exists():
            raise FileNotFoundError(f"Path does not exist: {path}")

        if not path_obj.is_dir():
            raise ValueError(f"Path is not a directory: {path}")

        return self._parse_directory(path_obj, path_obj, depth=0)

    def _parse_directory(self, path: Path, root: Path, depth: int) -> Element:
        dir_name = path.name or str(path)  # Use full path if name is empty (root)
        element = Element("DIRECTORY", attrs=[("name", dir_name)])
        rel = path.relative_to(root).as_posix()
        if rel != ".":
            element.set_attribute("id", rel)

        if depth >= self._max_depth:
            return element

        try:
            entries = sorted(path.iterdir(), key=lambda p: (not p.is_dir(), p.name))
        except PermissionError:
            # Can't read directory - leave it empty
            return element

        for entry in entries:
            if entry.is_symlink() and not self._follow_symlinks:
                continue

            if self._should_skip(entry.name):
                continue

            if entry.is_dir():
                element.add_child(self._parse_directory(entry, root, depth + 1))
            elif entry.is_file():
                file_element = self._parse_file(entry, root)
                if file_element:
                    element.add_child(file_element)

        return element

    def _parse_file(self, path: Path, root: Path) -> Element | None:
        try:
            file_size = path.stat().st_size
        except OSError:
            return None

        return Element(
            "FILE",
            attrs=[
                ("name", path.name),
                ("id", path.relative_to(root).as_posix()),
                ("size", str(file_size)),
            ],
        )

    def _should_skip(self, name: str) -> bool:
        """Check if entry should be skipped based on patterns."""
        if name in self._skip_patterns:
            return True
        # Check glob-style patterns (e.g., *.egg-info)
        for pattern in self._skip_patterns:
            if pattern.startswith("*") and name.endswith(pattern[1:]):
                return True
        return False


registry.register(FolderStrategy())
