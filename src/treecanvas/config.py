"""
Configuration for treecanvas.

All tunable drawing parameters in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/treecanvas/config.toml) if exists
3. Environment variables (TREECANVAS_*) override file
4. CLI flags override everything
"""

from __future__ import annotations

import contextlib
import logging
import os
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class LayoutConfig:
    """Node geometry on the surface."""
    node_radius: float = 5
    vertical_offset: float = 20  # y margin added to depth * row_height
    min_row_height: float = 1


@dataclass
class StyleConfig:
    """Fixed colors and labels."""
    edge_color: str = "#ccc"
    label_color: str = "#000"
    default_node_color: str = "#2F73D8"
    label_dx: float = 5
    label_dy: float = -5
    node_colors: dict[str, str] = field(default_factory=lambda: {
        "HTML": "#000",
        "HEAD": "#F00",
        "BODY": "#0F0",
    })
    labeled_tags: frozenset[str] = frozenset({"HTML", "HEAD", "BODY"})

    def color_for(self, tag: str) -> str:
        return self.node_colors.get(tag, self.default_node_color)


@dataclass
class NavigationConfig:
    """Back hot-zone and arrow."""
    back_zone: float = 20  # clicks with x and y below this go back
    arrow_color: str = "#000"
    arrow_points: tuple[tuple[float, float], ...] = ((10, 10), (20, 5), (20, 15))


@dataclass
class SurfaceConfig:
    """Defaults for surfaces created by the CLI."""
    width: int = 400
    height: int = 300
    background: str = "#fff"


@dataclass
class Config:
    """Root config with all settings."""
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    style: StyleConfig = field(default_factory=StyleConfig)
    navigation: NavigationConfig = field(default_factory=NavigationConfig)
    surface: SurfaceConfig = field(default_factory=SurfaceConfig)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "treecanvas" / "config.toml"
    return Path.home() / ".config" / "treecanvas" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
            logger.warning("Ignoring config file %s: %s", path, e)
            config = Config()

    # env var overrides
    config = _apply_env(config)

    return config


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config."""
    if "layout" in data:
        lay = data["layout"]
        if "node_radius" in lay:
            config.layout.node_radius = float(lay["node_radius"])
        if "vertical_offset" in lay:
            config.layout.vertical_offset = float(lay["vertical_offset"])
        if "min_row_height" in lay:
            config.layout.min_row_height = float(lay["min_row_height"])

    if "style" in data:
        s = data["style"]
        if "edge_color" in s:
            config.style.edge_color = str(s["edge_color"])
        if "label_color" in s:
            config.style.label_color = str(s["label_color"])
        if "default_node_color" in s:
            config.style.default_node_color = str(s["default_node_color"])
        if "node_colors" in s:
            # merged over the defaults, tags are matched upper-case
            colors = {str(k).upper(): str(v) for k, v in dict(s["node_colors"]).items()}
            config.style.node_colors = {**config.style.node_colors, **colors}
        if "labeled_tags" in s:
            config.style.labeled_tags = frozenset(str(t).upper() for t in s["labeled_tags"])

    if "navigation" in data:
        n = data["navigation"]
        if "back_zone" in n:
            config.navigation.back_zone = float(n["back_zone"])
        if "arrow_color" in n:
            config.navigation.arrow_color = str(n["arrow_color"])

    if "surface" in data:
        sf = data["surface"]
        if "width" in sf:
            config.surface.width = int(sf["width"])
        if "height" in sf:
            config.surface.height = int(sf["height"])
        if "background" in sf:
            config.surface.background = str(sf["background"])

    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, type]] = {
        "TREECANVAS_NODE_RADIUS": ("layout", "node_radius", float),
        "TREECANVAS_VERTICAL_OFFSET": ("layout", "vertical_offset", float),
        "TREECANVAS_MIN_ROW_HEIGHT": ("layout", "min_row_height", float),
        "TREECANVAS_EDGE_COLOR": ("style", "edge_color", str),
        "TREECANVAS_LABEL_COLOR": ("style", "label_color", str),
        "TREECANVAS_DEFAULT_NODE_COLOR": ("style", "default_node_color", str),
        "TREECANVAS_BACK_ZONE": ("navigation", "back_zone", float),
        "TREECANVAS_WIDTH": ("surface", "width", int),
        "TREECANVAS_HEIGHT": ("surface", "height", int),
        "TREECANVAS_BACKGROUND": ("surface", "background", str),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError):
                setattr(getattr(config, section), attr, conv(val))

    return config


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() reloads it."""
    global _config
    _config = None
